"""
Main story generation workflow.

Resolves the per-story decisions once, then renders and validates with
a bounded number of triad re-rolls:

  DRAFT -> (validate) -> VALIDATED -> EMITTED
    ^          |
    +- RETRY <-+   re-roll the whole triad, keep the beats

When every attempt fails, the last attempt is emitted anyway.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from storytram.config import AppConfig, EndingPolicy, config
from storytram.storyteller.beat_templates import (
    choose_template_key,
    expand_beats_to_count,
    get_beat_template,
)
from storytram.storyteller.casting import decide_ending_mode, pick_friends, resolve_scene_count
from storytram.storyteller.context import GenerationContext
from storytram.storyteller.contract import StoryContract, build_story_contract
from storytram.storyteller.errors import ConfigurationError
from storytram.storyteller.frame import build_story_frame, build_title
from storytram.storyteller.randomness import RandomSource
from storytram.storyteller.renderer import render_scenes
from storytram.storyteller.setting import sanitize_weather_for_location
from storytram.storyteller.story_types import get_story_type
from storytram.storyteller.triads import DEFAULT_TRIADS, Triad, load_triad_catalog, pick_helper, pick_triad
from storytram.storyteller.validator import check_story
from storytram.utils.logging import engine_logger, validator_logger


class StoryOptions(BaseModel):
    """Caller options for one story."""
    model_config = ConfigDict(populate_by_name=True)

    story_type: Optional[str] = Field(default=None, alias="storyType")
    # Advisory only: the count always comes from the story type's range.
    scene_count: Optional[int] = Field(default=None, alias="sceneCount")
    location: Optional[str] = None
    weather: Optional[str] = None
    friends: Optional[List[str]] = None


@dataclass
class StoryResult:
    """Result of one generate_story() call."""
    document: str
    scenes: List[str]
    beats: List[str]
    context: GenerationContext
    attempts: int
    validated: bool
    contract: Optional[StoryContract] = None
    failed_checks: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.context.title,
            "document": self.document,
            "scenes": self.scenes,
            "scene_count": len(self.scenes),
            "story_type": self.context.story_type.name,
            "ending_mode": self.context.ending_mode,
            "attempts": self.attempts,
            "validated": self.validated,
            "failed_checks": self.failed_checks,
            "contract": self.contract.to_dict() if self.contract else None,
        }


def default_catalog(settings: AppConfig = config) -> List[Triad]:
    """The configured triad catalog, or the built-in one."""
    if settings.TRIAD_CATALOG_PATH:
        return load_triad_catalog(settings.TRIAD_CATALOG_PATH)
    return list(DEFAULT_TRIADS)


def generate_story(
    options: Optional[StoryOptions],
    triads: Optional[Sequence[Triad]],
    rng: RandomSource,
    policy: Optional[EndingPolicy] = None,
    settings: Optional[AppConfig] = None,
) -> StoryResult:
    """
    Generate one validated (or soft-failed) story.

    Args:
        options: Caller options (story type, location, weather, friends)
        triads: Triad catalog; None uses the configured default
        rng: Zero-argument randomness source returning floats in [0, 1)
        policy: Ending policy; None uses the configured one
        settings: Config override, mostly for tests

    Returns:
        StoryResult with the frame document and the emitted context

    Raises:
        ConfigurationError: unknown story type, no matching triad,
            or a missing beat template
    """
    settings = settings or config
    policy = policy or settings.ending_policy
    options = options or StoryOptions()
    catalog = list(triads) if triads is not None else default_catalog(settings)
    type_name = options.story_type or settings.DEFAULT_STORY_TYPE

    try:
        story_type = get_story_type(type_name)
        ending_mode = decide_ending_mode(story_type, rng, policy)
        triad = pick_triad(story_type, catalog, rng)
        helper_animal = pick_helper(triad, rng)
        friends = pick_friends(story_type, rng, settings.companions_list, options.friends)
        scene_count = resolve_scene_count(story_type, rng)

        location = options.location or settings.DEFAULT_LOCATION
        weather = sanitize_weather_for_location(location, options.weather or settings.DEFAULT_WEATHER, rng)

        template_key = choose_template_key(story_type, ending_mode)
        beats = expand_beats_to_count(get_beat_template(template_key), scene_count, story_type, rng)
    except ConfigurationError as e:
        engine_logger.error("Story generation aborted", story_type=type_name, error=str(e))
        raise

    if options.scene_count is not None and options.scene_count != scene_count:
        engine_logger.debug(
            "Ignoring requested scene count",
            requested=options.scene_count,
            resolved=scene_count,
        )

    ctx = GenerationContext(
        story_type=story_type,
        ending_mode=ending_mode,
        scene_count=scene_count,
        triad=triad,
        hero=settings.HERO_NAME,
        helper_animal=helper_animal,
        location=location,
        weather=weather,
        friends=friends,
    )

    max_attempts = 1 + settings.MAX_VALIDATION_RETRIES
    failed_checks: List[str] = []
    attempts = 0

    while True:
        attempts += 1
        ctx.title = build_title(ctx, rng, settings.TITLE_PREFIX)
        scenes = render_scenes(beats, ctx, rng)
        engine_logger.debug("Rendered attempt", attempt=attempts, problem=ctx.problem)

        result = check_story(scenes, ctx)
        if result.passed:
            break

        failed_checks.append(result.failed_check)
        validator_logger.info(
            "Story failed validation",
            attempt=attempts,
            failed_check=result.failed_check,
            problem=ctx.problem,
        )
        if attempts >= max_attempts:
            engine_logger.warning(
                "Validation retries exhausted, emitting last attempt",
                attempt=attempts,
                failed_check=result.failed_check,
                story_type=story_type.name,
            )
            break

        next_triad = pick_triad(story_type, catalog, rng, exclude=ctx.triad)
        ctx.bind_triad(next_triad, pick_helper(next_triad, rng))

    document = build_story_frame(ctx, scenes)
    contract = build_story_contract(ctx, rng)

    engine_logger.info(
        "Story emitted",
        story_type=story_type.name,
        ending_mode=ending_mode,
        scene_count=scene_count,
        attempts=attempts,
        validated=result.passed,
    )

    return StoryResult(
        document=document,
        scenes=scenes,
        beats=list(beats),
        context=ctx,
        attempts=attempts,
        validated=result.passed,
        contract=contract,
        failed_checks=failed_checks,
    )


def generate_story_frame(
    options: Optional[StoryOptions],
    triads: Optional[Sequence[Triad]],
    rng: RandomSource,
    policy: Optional[EndingPolicy] = None,
    settings: Optional[AppConfig] = None,
) -> str:
    """Generate a story and return only the frame document."""
    return generate_story(options, triads, rng, policy=policy, settings=settings).document
