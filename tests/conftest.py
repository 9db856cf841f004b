from __future__ import annotations

import pytest

from storytram.config import AppConfig
from storytram.storyteller import GenerationContext, Props, SequenceSource, STORY_TYPES, Triad
from storytram.utils.logging import get_log_buffer


@pytest.fixture(autouse=True)
def _clear_log_buffer():
    get_log_buffer().clear()
    yield
    get_log_buffer().clear()


@pytest.fixture
def settings():
    return AppConfig(_env_file=None)


@pytest.fixture
def scripted():
    """Factory for deterministic sources replaying the given draws."""
    def _make(*values: float) -> SequenceSource:
        return SequenceSource(list(values))
    return _make


@pytest.fixture
def bridge_triad():
    return Triad(
        problem="the bridge is too narrow",
        helper_role="builder",
        allowed_helpers=("Beaver",),
        props=Props(object=None, tools=("small wooden plank",), vehicle=None),
        story_types=("Brave",),
    )


@pytest.fixture
def tangled_triad():
    # Three "and"s in the problem: always fails the readability check.
    return Triad(
        problem="the rope and the plank and the nail and the hook are loose",
        helper_role="builder",
        allowed_helpers=("Otter",),
        props=Props(object="a red rubber ball", tools=("twine roll",)),
        story_types=("Brave",),
    )


@pytest.fixture
def brave_context(bridge_triad):
    return GenerationContext(
        story_type=STORY_TYPES["Brave"],
        ending_mode="positive",
        scene_count=16,
        triad=bridge_triad,
        hero="Willy the golden puppy",
        helper_animal="Beaver",
        location="Park meadow",
        weather="Spring morning",
    )
