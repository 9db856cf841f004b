"""
Story generation engine.

Deterministic, template-driven story frames:
- story types and beat templates define the scene structure
- triads lock problem, helper role, helper animals and props together
- the validator gates rendered stories, with bounded triad re-rolls

Flow:
  options + triad catalog + randomness source -> generate_story() -> StoryResult
"""

from storytram.storyteller.errors import ConfigurationError, StoryEngineError
from storytram.storyteller.randomness import RandomSource, SequenceSource, seeded_source
from storytram.storyteller.story_types import STORY_TYPES, StoryType, get_story_type, list_story_types
from storytram.storyteller.triads import (
    DEFAULT_TRIADS,
    Props,
    Triad,
    coerce_triad,
    load_triad_catalog,
)
from storytram.storyteller.context import GenerationContext
from storytram.storyteller.validator import ValidationResult, check_story, validate_story
from storytram.storyteller.generation import (
    StoryOptions,
    StoryResult,
    default_catalog,
    generate_story,
    generate_story_frame,
)

__all__ = [
    # Errors
    "ConfigurationError",
    "StoryEngineError",
    # Randomness
    "RandomSource",
    "SequenceSource",
    "seeded_source",
    # Catalogs
    "STORY_TYPES",
    "StoryType",
    "get_story_type",
    "list_story_types",
    "DEFAULT_TRIADS",
    "Props",
    "Triad",
    "coerce_triad",
    "load_triad_catalog",
    # Generation
    "GenerationContext",
    "ValidationResult",
    "check_story",
    "validate_story",
    "StoryOptions",
    "StoryResult",
    "default_catalog",
    "generate_story",
    "generate_story_frame",
]
