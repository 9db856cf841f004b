from __future__ import annotations

import pytest

from storytram.storyteller import STORY_TYPES, ConfigurationError
from storytram.storyteller.beat_templates import (
    BEAT_TEMPLATES,
    choose_template_key,
    enforce_order,
    expand_beats_to_count,
    find_middle_index,
    get_beat_template,
)


def test_every_template_fits_its_story_types():
    for story_type in STORY_TYPES.values():
        for key in {story_type.template_key, choose_template_key(story_type, "bittersweet")}:
            beats = get_beat_template(key)
            assert 11 <= len(beats) <= 15
            assert len(beats) <= story_type.min_scenes
            # authored already in order
            assert enforce_order(list(beats)) == beats


def test_bittersweet_variants_only_for_emotional_and_brave():
    assert choose_template_key(STORY_TYPES["Brave"], "bittersweet") == "brave_bittersweet"
    assert choose_template_key(STORY_TYPES["Emotional"], "bittersweet") == "emotional_bittersweet"
    assert choose_template_key(STORY_TYPES["Funny"], "bittersweet") == "funny"
    assert choose_template_key(STORY_TYPES["Brave"], "positive") == "brave"

    brave, bitter = BEAT_TEMPLATES["brave"], BEAT_TEMPLATES["brave_bittersweet"]
    assert brave[:7] == bitter[:7]
    assert "success" not in bitter
    assert {"accept", "comfort_gift", "soft_reframe"} <= set(bitter)

    for key in ("brave_bittersweet", "emotional_bittersweet"):
        beats = BEAT_TEMPLATES[key]
        assert beats[-2:] == ["joy", "closing_echo"]


def test_missing_template_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        get_beat_template("western")


def test_get_beat_template_returns_a_copy():
    beats = get_beat_template("funny")
    beats.append("extra")
    assert BEAT_TEMPLATES["funny"][-1] != "extra"


def test_middle_index_prefers_structural_middle_beats():
    assert find_middle_index(BEAT_TEMPLATES["brave"]) == BEAT_TEMPLATES["brave"].index("try_step")
    assert find_middle_index(["a", "b", "c", "d", "e"]) == 2


def test_expansion_inserts_after_middle_last_in_closest(scripted):
    base = BEAT_TEMPLATES["brave"]
    middle = base.index("try_step")
    # Brave fillers: try_step, obstacle, brave_breath
    beats = expand_beats_to_count(base, 18, STORY_TYPES["Brave"], scripted(0.0, 0.5, 0.9))

    assert len(beats) == 18
    assert beats[middle + 1:middle + 4] == ["brave_breath", "obstacle", "try_step"]
    assert beats[-4:] == base[-4:]


def test_expansion_falls_back_to_midpoint(scripted):
    # Emotional fillers: build_step, test
    beats = expand_beats_to_count(["a", "b", "c", "d"], 6, STORY_TYPES["Emotional"], scripted(0.0, 0.9))
    assert beats == ["a", "b", "c", "test", "build_step", "d"]


def test_expansion_truncates_when_target_is_not_larger(scripted):
    rng = scripted(0.5)
    base = BEAT_TEMPLATES["adventure"]
    assert expand_beats_to_count(base, 10, STORY_TYPES["Adventure"], rng) == base[:10]
    assert expand_beats_to_count(base, len(base), STORY_TYPES["Adventure"], rng) == base
    assert rng.calls == 0


def test_expansion_uses_only_type_fillers(scripted):
    base = BEAT_TEMPLATES["adventure"]
    beats = expand_beats_to_count(base, 25, STORY_TYPES["Adventure"], scripted(0.1, 0.3, 0.6, 0.8))
    added = list(beats)
    for beat in base:
        added.remove(beat)
    assert set(added) <= {"travel", "obstacle", "adjust", "progress"}


def test_enforce_order_swaps_inverted_pairs():
    assert enforce_order(["opening", "joy", "success", "closing_echo"]) == [
        "opening", "success", "joy", "closing_echo",
    ]


def test_enforce_order_is_single_swap_per_rule_not_a_sort():
    beats = enforce_order(["attempt_2", "attempt_1", "helper_arrival"])
    assert beats == ["attempt_1", "helper_arrival", "attempt_2"]


def test_enforce_order_treats_resolution_like_success():
    assert enforce_order(["resolution", "attempt_2"]) == ["attempt_2", "resolution"]
