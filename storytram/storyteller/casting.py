"""
Per-story casting decisions: ending mode, friends and scene count.

Each decision is made once per generation and consumes draws from the
caller's randomness source in a fixed order.
"""

from typing import List, Literal, Optional, Sequence

from storytram.config import EndingPolicy
from storytram.storyteller.randomness import RandomSource, pick, rand_int_inclusive
from storytram.storyteller.story_types import StoryType

EndingMode = Literal["positive", "bittersweet"]

# Friend-permitting types without ensemble bias
FRIENDS_NONE_BAND = 0.35
FRIENDS_ONE_BAND = 0.40
# Ensemble-bias types
ENSEMBLE_BOTH_CHANCE = 0.5


def decide_ending_mode(
    story_type: StoryType,
    rng: RandomSource,
    policy: EndingPolicy,
) -> EndingMode:
    """
    Pick the ending mode for the whole story.

    Only eligible story types draw; everything else is positive without
    consuming randomness.
    """
    if not policy.allow_bittersweet or story_type.name not in policy.allowed_types:
        return "positive"
    return "bittersweet" if rng() < policy.bittersweet_chance else "positive"


def pick_friends(
    story_type: StoryType,
    rng: RandomSource,
    companions: Sequence[str],
    explicit: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Choose which companions join the hero.

    An explicit list from the caller always wins. Otherwise story types
    that disallow friends get none, the ensemble type leans towards both,
    and the rest split none / one / both across fixed probability bands.
    """
    if explicit is not None:
        return list(explicit)
    if not story_type.allows_friends or not companions:
        return []

    roll = rng()
    if story_type.ensemble_bias:
        if roll < ENSEMBLE_BOTH_CHANCE:
            return list(companions)
        return [pick(rng, companions)]

    if roll < FRIENDS_NONE_BAND:
        return []
    if roll < FRIENDS_NONE_BAND + FRIENDS_ONE_BAND:
        return [pick(rng, companions)]
    return list(companions)


def resolve_scene_count(story_type: StoryType, rng: RandomSource) -> int:
    return rand_int_inclusive(story_type.min_scenes, story_type.max_scenes, rng)
