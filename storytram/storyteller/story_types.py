"""
Story type catalog.

Each story type fixes a scene range, the beat template it expands from,
and whether secondary characters may appear.
"""

from dataclasses import dataclass
from typing import Dict, List, Any

from storytram.storyteller.errors import ConfigurationError

MIN_SCENES = 15
MAX_SCENES = 25


@dataclass(frozen=True)
class StoryType:
    name: str
    min_scenes: int
    max_scenes: int
    template_key: str
    allows_friends: bool
    title_noun: str
    ensemble_bias: bool = False

    def __post_init__(self):
        if not MIN_SCENES <= self.min_scenes <= self.max_scenes <= MAX_SCENES:
            raise ConfigurationError(
                f"Story type {self.name!r} has invalid scene range "
                f"{self.min_scenes}-{self.max_scenes}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "min_scenes": self.min_scenes,
            "max_scenes": self.max_scenes,
            "allows_friends": self.allows_friends,
        }


STORY_TYPES: Dict[str, StoryType] = {
    "Emotional": StoryType(
        name="Emotional", min_scenes=15, max_scenes=17,
        template_key="emotional", allows_friends=False, title_noun="Gentle Care",
    ),
    "Funny": StoryType(
        name="Funny", min_scenes=15, max_scenes=18,
        template_key="funny", allows_friends=True, title_noun="Silly Rescue",
    ),
    "Brave": StoryType(
        name="Brave", min_scenes=16, max_scenes=20,
        template_key="brave", allows_friends=False, title_noun="Brave Moment",
    ),
    "Friendship": StoryType(
        name="Friendship", min_scenes=15, max_scenes=18,
        template_key="friendship", allows_friends=True, title_noun="Happy Teamwork",
        ensemble_bias=True,
    ),
    "Adventure": StoryType(
        name="Adventure", min_scenes=18, max_scenes=25,
        template_key="adventure", allows_friends=True, title_noun="Little Adventure",
    ),
}


def get_story_type(name: str) -> StoryType:
    """Look up a story type by its exact name."""
    story_type = STORY_TYPES.get(name)
    if story_type is None:
        raise ConfigurationError(
            f"Unknown story type {name!r}; expected one of {', '.join(STORY_TYPES)}"
        )
    return story_type


def list_story_types() -> List[Dict[str, Any]]:
    """List story types for UI selection."""
    return [story_type.to_dict() for story_type in STORY_TYPES.values()]
