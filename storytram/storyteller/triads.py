"""
Triad catalog and selection.

A triad bundles a problem with the helper role, the helper animals that
can play that role, and the props the fix needs. The bundle is immutable
and always travels together: a re-roll swaps the whole record.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from storytram.storyteller.errors import ConfigurationError
from storytram.storyteller.randomness import RandomSource, pick
from storytram.storyteller.story_types import STORY_TYPES, StoryType


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for value in values:
        value = str(value).strip()
        if value:
            seen.setdefault(value, None)
    return tuple(seen)


def _string_list(value: Any, name: str) -> List[Any]:
    """A JSON list of strings; a bare string counts as a one-item list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ConfigurationError(f"Triad field {name!r} must be a list of strings, got {type(value).__name__}")


def _optional(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() == "none":
        return None
    return value


@dataclass(frozen=True)
class Props:
    object: Optional[str] = None
    tools: Tuple[str, ...] = ()
    vehicle: Optional[str] = None


@dataclass(frozen=True)
class Triad:
    problem: str
    helper_role: str
    allowed_helpers: Tuple[str, ...]
    props: Props = field(default_factory=Props)
    story_types: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.allowed_helpers:
            raise ConfigurationError(f"Triad {self.problem!r} has no allowed helpers")
        if not self.story_types:
            raise ConfigurationError(f"Triad {self.problem!r} has no story types")
        unknown = [t for t in self.story_types if t not in STORY_TYPES]
        if unknown:
            raise ConfigurationError(
                f"Triad {self.problem!r} names unknown story types: {', '.join(unknown)}"
            )

    def supports(self, story_type: StoryType) -> bool:
        return story_type.name in self.story_types


def coerce_triad(d: Dict[str, Any]) -> Triad:
    """Build a Triad from a JSON-style record."""
    if not isinstance(d, dict):
        raise ConfigurationError(f"Triad record must be an object, got {type(d).__name__}")

    problem = str(d.get("problem", "")).strip()
    if not problem:
        raise ConfigurationError("Triad record is missing a problem")

    props = d.get("props") or {}
    if not isinstance(props, dict):
        raise ConfigurationError(f"Triad {problem!r} props must be an object")

    return Triad(
        problem=problem,
        helper_role=str(d.get("helperRole", d.get("helper_role", ""))).strip(),
        allowed_helpers=_unique(_string_list(d.get("allowedHelpers", d.get("allowed_helpers")), "allowedHelpers")),
        props=Props(
            object=_optional(props.get("object")),
            tools=_unique(_string_list(props.get("tools"), "tools")),
            vehicle=_optional(props.get("vehicle")),
        ),
        story_types=_unique(_string_list(d.get("storyTypes", d.get("story_types")), "storyTypes")),
    )


def load_triad_catalog(path: str | Path) -> List[Triad]:
    """Load a JSON list of triad records."""
    try:
        records = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read triad catalog {path}: {e}") from e

    if not isinstance(records, list):
        raise ConfigurationError(f"Triad catalog {path} must be a JSON list")
    return [coerce_triad(record) for record in records]


def pick_triad(
    story_type: StoryType,
    catalog: Sequence[Triad],
    rng: RandomSource,
    exclude: Optional[Triad] = None,
) -> Triad:
    """
    Uniformly pick a triad that supports the story type.

    Args:
        story_type: Requested story type
        catalog: Available triads
        rng: Randomness source
        exclude: Triad to skip on a re-roll, honored only when another
            candidate exists

    Raises:
        ConfigurationError: if no triad in the catalog supports the type
    """
    candidates = [t for t in catalog if t.supports(story_type)]
    if not candidates:
        raise ConfigurationError(f"No triad in the catalog supports story type {story_type.name!r}")

    if exclude is not None:
        others = [t for t in candidates if t is not exclude]
        if others:
            candidates = others

    return pick(rng, candidates)


def pick_helper(triad: Triad, rng: RandomSource) -> str:
    return pick(rng, triad.allowed_helpers)


# ===== BUILT-IN CATALOG =====
# Problems avoid the word "and": the readability check counts it.

DEFAULT_TRIADS: List[Triad] = [
    Triad(
        problem="the bridge is too narrow to cross",
        helper_role="builder",
        allowed_helpers=("Beaver",),
        props=Props(object="a red rubber ball", tools=("small wooden plank", "twine roll"), vehicle=None),
        story_types=("Brave", "Adventure"),
    ),
    Triad(
        problem="the kite is stuck high in a branch",
        helper_role="tree climber rescuer",
        allowed_helpers=("Squirrel", "Raccoon"),
        props=Props(object="a yellow paper kite", tools=("soft rope loop",), vehicle=None),
        story_types=("Funny", "Friendship", "Adventure"),
    ),
    Triad(
        problem="a tiny paw got a small scrape on a rock",
        helper_role="caregiver nurse",
        allowed_helpers=("Rabbit", "Hedgehog"),
        props=Props(object=None, tools=("leaf bandage", "cool water cup"), vehicle=None),
        story_types=("Emotional", "Brave"),
    ),
    Triad(
        problem="the toy wagon wheel keeps falling off",
        helper_role="mechanic",
        allowed_helpers=("Raccoon", "Badger"),
        props=Props(object="a blue toy wagon", tools=("tiny wrench", "wooden peg"), vehicle="toy helper cart"),
        story_types=("Funny", "Adventure", "Friendship"),
    ),
    Triad(
        problem="the picnic basket is too heavy to carry home",
        helper_role="delivery courier",
        allowed_helpers=("Goat", "Pony"),
        props=Props(object="a woven picnic basket", tools=("padded strap",), vehicle="toy pull cart"),
        story_types=("Adventure", "Friendship"),
    ),
    Triad(
        problem="two ducklings both want the same puddle spot",
        helper_role="gentle mediator",
        allowed_helpers=("Owl", "Tortoise"),
        props=Props(object=None, tools=("flat stepping stone",), vehicle=None),
        story_types=("Friendship", "Funny"),
    ),
    Triad(
        problem="the favorite blanket is torn at one corner",
        helper_role="careful seamstress caregiver",
        allowed_helpers=("Mouse", "Hedgehog"),
        props=Props(object="a soft patchwork blanket", tools=("thread spool", "blunt toy needle"), vehicle=None),
        story_types=("Emotional",),
    ),
    Triad(
        problem="the stepping stones across the creek are too far apart",
        helper_role="builder",
        allowed_helpers=("Beaver", "Otter"),
        props=Props(object="a shiny river pebble", tools=("flat wooden plank",), vehicle=None),
        story_types=("Brave", "Adventure"),
    ),
    Triad(
        problem="the little sailboat is drifting away on the pond",
        helper_role="water rescue helper",
        allowed_helpers=("Otter", "Duck"),
        props=Props(object="a little white toy sailboat", tools=("long reed pole",), vehicle=None),
        story_types=("Brave", "Funny", "Emotional"),
    ),
]
