"""
Beat templates for each story type, plus the expander that grows a base
sequence to the resolved scene count.

A beat is a scene-intent tag, not prose. The renderer turns each beat
into one numbered scene line.
"""

from typing import Dict, List, Sequence, Tuple

from storytram.storyteller.errors import ConfigurationError
from storytram.storyteller.randomness import RandomSource, pick
from storytram.storyteller.story_types import StoryType

# ===== BEAT TAGS =====

OPENING = "opening"
GOAL_FOCUS = "goal_focus"
CAUSE_START = "cause_start"
PROBLEM_REVEAL = "problem_reveal"
REACTION_LOW = "reaction_low"
HELPER_ARRIVAL = "helper_arrival"
HELPER_INTENT = "helper_intent"
TOOLS_ENTER = "tools_enter"
PREP_STATION = "prep_station"
BUILD_STEP = "build_step"
TRAVEL = "travel"
OBSTACLE = "obstacle"
ADJUST = "adjust"
TRY_GENTLY = "try_gently"
TRY_STEP = "try_step"
TEST = "test"
PROGRESS = "progress"
SILLY_SLIP = "silly_slip"
BRAVE_BREATH = "brave_breath"
TEAM_PUSH = "team_push"
SHARE_MOMENT = "share_moment"
ATTEMPT_1 = "attempt_1"
REACTION_PAUSE = "reaction_pause"
ATTEMPT_2 = "attempt_2"
SUCCESS = "success"
RESOLUTION = "resolution"
JOY = "joy"
CLOSING_ECHO = "closing_echo"
EXTRA_CUTE = "extra_cute"
# Bittersweet endings
ACCEPT = "accept"
COMFORT_GIFT = "comfort_gift"
SOFT_REFRAME = "soft_reframe"

# Structural middle of a story; expansion inserts right after the first one found.
MIDDLE_TAGS = frozenset({
    PREP_STATION, BUILD_STEP, TRAVEL, OBSTACLE, ADJUST, TRY_GENTLY, TRY_STEP,
})

# Checked in this order; each rule swaps at most once.
ORDER_RULES: List[Tuple[Tuple[str, ...], Tuple[str, ...]]] = [
    ((PROBLEM_REVEAL,), (REACTION_LOW,)),
    ((REACTION_LOW,), (HELPER_ARRIVAL,)),
    ((HELPER_ARRIVAL,), (ATTEMPT_1,)),
    ((ATTEMPT_1,), (ATTEMPT_2,)),
    ((ATTEMPT_2,), (SUCCESS, RESOLUTION)),
    ((SUCCESS, RESOLUTION), (JOY,)),
    ((JOY,), (CLOSING_ECHO,)),
]

# ===== BASE TEMPLATES =====

_SETUP = [OPENING, GOAL_FOCUS, CAUSE_START, PROBLEM_REVEAL, REACTION_LOW, HELPER_ARRIVAL, HELPER_INTENT]

BEAT_TEMPLATES: Dict[str, List[str]] = {
    "adventure": _SETUP + [
        TOOLS_ENTER, TRAVEL, ATTEMPT_1, REACTION_PAUSE, ATTEMPT_2, SUCCESS, JOY, CLOSING_ECHO,
    ],
    "funny": [OPENING, CAUSE_START, PROBLEM_REVEAL, REACTION_LOW, HELPER_ARRIVAL, HELPER_INTENT,
              TRY_GENTLY, ATTEMPT_1, REACTION_PAUSE, ATTEMPT_2, SUCCESS, JOY, CLOSING_ECHO, EXTRA_CUTE],
    "brave": [OPENING, CAUSE_START, PROBLEM_REVEAL, REACTION_LOW, HELPER_ARRIVAL, HELPER_INTENT,
              TOOLS_ENTER, TRY_STEP, ATTEMPT_1, REACTION_PAUSE, ATTEMPT_2, SUCCESS, JOY, CLOSING_ECHO,
              EXTRA_CUTE],
    "brave_bittersweet": [OPENING, CAUSE_START, PROBLEM_REVEAL, REACTION_LOW, HELPER_ARRIVAL,
                          HELPER_INTENT, TOOLS_ENTER, TRY_STEP, ATTEMPT_1, ATTEMPT_2,
                          ACCEPT, COMFORT_GIFT, SOFT_REFRAME, JOY, CLOSING_ECHO],
    "friendship": _SETUP + [
        SHARE_MOMENT, PREP_STATION, ATTEMPT_1, REACTION_PAUSE, ATTEMPT_2, SUCCESS, JOY, CLOSING_ECHO,
    ],
    "emotional": _SETUP + [
        PREP_STATION, BUILD_STEP, ATTEMPT_1, REACTION_PAUSE, ATTEMPT_2, SUCCESS, JOY, CLOSING_ECHO,
    ],
    "emotional_bittersweet": _SETUP + [
        PREP_STATION, ATTEMPT_1, ATTEMPT_2, ACCEPT, COMFORT_GIFT, SOFT_REFRAME, JOY, CLOSING_ECHO,
    ],
}

BITTERSWEET_TEMPLATES = {"emotional": "emotional_bittersweet", "brave": "brave_bittersweet"}

# Only these beats may be inserted when the scene count exceeds the base.
FILLER_BEATS: Dict[str, List[str]] = {
    "Adventure": [TRAVEL, OBSTACLE, ADJUST, PROGRESS],
    "Funny": [SILLY_SLIP, TRY_GENTLY, ADJUST],
    "Brave": [TRY_STEP, OBSTACLE, BRAVE_BREATH],
    "Friendship": [TEAM_PUSH, SHARE_MOMENT, ADJUST],
    "Emotional": [BUILD_STEP, TEST],
}
DEFAULT_FILLERS = [PROGRESS, ADJUST]


def choose_template_key(story_type: StoryType, ending_mode: str) -> str:
    """Pick the base template key, switching to a bittersweet variant where one exists."""
    if ending_mode == "bittersweet":
        return BITTERSWEET_TEMPLATES.get(story_type.template_key, story_type.template_key)
    return story_type.template_key


def get_beat_template(template_key: str) -> List[str]:
    """Return a copy of a registered base sequence."""
    beats = BEAT_TEMPLATES.get(template_key)
    if beats is None:
        raise ConfigurationError(f"Missing beat template {template_key!r}")
    return list(beats)


def find_middle_index(beats: Sequence[str]) -> int:
    """Index of the first structural middle beat, or the sequence midpoint."""
    for i, beat in enumerate(beats):
        if beat in MIDDLE_TAGS:
            return i
    return len(beats) // 2


def _first_index(beats: Sequence[str], tags: Tuple[str, ...]) -> int:
    for i, beat in enumerate(beats):
        if beat in tags:
            return i
    return -1


def enforce_order(beats: List[str]) -> List[str]:
    """
    Best-effort precedence fix, in place.

    For each rule, if the first beat of the later group sits before the
    first beat of the earlier group, the two positions are swapped once.
    """
    for earlier, later in ORDER_RULES:
        ia = _first_index(beats, earlier)
        ib = _first_index(beats, later)
        if ia == -1 or ib == -1 or ia < ib:
            continue
        beats[ia], beats[ib] = beats[ib], beats[ia]
    return beats


def expand_beats_to_count(
    base: Sequence[str],
    target: int,
    story_type: StoryType,
    rng: RandomSource,
) -> List[str]:
    """
    Grow (or truncate) a base sequence to exactly `target` beats.

    Fillers are drawn from the story type's vocabulary and each one goes
    immediately after the middle index, so the last one drawn ends up
    closest to it.
    """
    beats = list(base)
    if target <= len(beats):
        return beats[:target]

    fillers = FILLER_BEATS.get(story_type.name, DEFAULT_FILLERS)
    middle = find_middle_index(beats)
    for _ in range(target - len(beats)):
        beats.insert(middle + 1, pick(rng, fillers))

    return enforce_order(beats)
