from __future__ import annotations

import json

import pytest

from storytram.storyteller import (
    DEFAULT_TRIADS,
    STORY_TYPES,
    ConfigurationError,
    Props,
    Triad,
    coerce_triad,
    load_triad_catalog,
)
from storytram.storyteller.triads import pick_helper, pick_triad


RECORD = {
    "problem": "the kite is stuck in the tree",
    "helperRole": "tree climber",
    "allowedHelpers": ["Squirrel", "Squirrel", "Raccoon"],
    "props": {"object": "a yellow kite", "tools": ["rope loop"], "vehicle": "none"},
    "storyTypes": ["Funny", "Adventure"],
}


def test_coerce_triad_from_json_record():
    triad = coerce_triad(RECORD)
    assert triad.helper_role == "tree climber"
    assert triad.allowed_helpers == ("Squirrel", "Raccoon")
    assert triad.props == Props(object="a yellow kite", tools=("rope loop",), vehicle=None)
    assert triad.story_types == ("Funny", "Adventure")


@pytest.mark.parametrize(
    "override",
    [
        {"allowedHelpers": []},
        {"storyTypes": []},
        {"storyTypes": ["Spooky"]},
        {"problem": "  "},
    ],
)
def test_coerce_triad_rejects_broken_records(override):
    with pytest.raises(ConfigurationError):
        coerce_triad({**RECORD, **override})


def test_bare_strings_are_one_item_lists():
    triad = coerce_triad({**RECORD, "allowedHelpers": "Beaver", "storyTypes": "Brave"})
    assert triad.allowed_helpers == ("Beaver",)
    assert triad.story_types == ("Brave",)


@pytest.mark.parametrize(
    "record",
    [
        "just a string",
        ["a", "list"],
        {**RECORD, "props": ["plank"]},
        {**RECORD, "allowedHelpers": {"name": "Beaver"}},
        {**RECORD, "storyTypes": 3},
    ],
)
def test_malformed_records_are_configuration_errors(record):
    with pytest.raises(ConfigurationError):
        coerce_triad(record)


def test_catalog_with_malformed_record(tmp_path):
    path = tmp_path / "triads.json"
    path.write_text(json.dumps([RECORD, "just a string"]), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_triad_catalog(path)


def test_load_triad_catalog(tmp_path):
    path = tmp_path / "triads.json"
    path.write_text(json.dumps([RECORD]), encoding="utf-8")
    catalog = load_triad_catalog(path)
    assert [t.problem for t in catalog] == [RECORD["problem"]]


def test_load_triad_catalog_rejects_non_lists(tmp_path):
    path = tmp_path / "triads.json"
    path.write_text(json.dumps(RECORD), encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_triad_catalog(path)
    with pytest.raises(ConfigurationError):
        load_triad_catalog(tmp_path / "missing.json")


def test_triads_are_immutable(bridge_triad):
    with pytest.raises(AttributeError):
        bridge_triad.problem = "something else"  # type: ignore[misc]


def test_pick_triad_filters_by_story_type(scripted):
    for name, story_type in STORY_TYPES.items():
        for value in (0.0, 0.5, 0.99):
            assert name in pick_triad(story_type, DEFAULT_TRIADS, scripted(value)).story_types


def test_pick_triad_without_match_is_a_configuration_error(bridge_triad, scripted):
    with pytest.raises(ConfigurationError):
        pick_triad(STORY_TYPES["Funny"], [bridge_triad], scripted(0.5))


def test_pick_triad_exclude_prefers_another_candidate(bridge_triad, tangled_triad, scripted):
    brave = STORY_TYPES["Brave"]
    catalog = [bridge_triad, tangled_triad]
    assert pick_triad(brave, catalog, scripted(0.0)) is bridge_triad
    assert pick_triad(brave, catalog, scripted(0.0), exclude=bridge_triad) is tangled_triad
    # a lone candidate is picked again
    assert pick_triad(brave, [bridge_triad], scripted(0.0), exclude=bridge_triad) is bridge_triad


def test_pick_helper_comes_from_the_triad(scripted):
    triad = Triad(
        problem="p", helper_role="r", allowed_helpers=("Otter", "Duck"), story_types=("Funny",)
    )
    assert pick_helper(triad, scripted(0.0)) == "Otter"
    assert pick_helper(triad, scripted(0.75)) == "Duck"


def test_default_catalog_covers_every_story_type():
    for name in STORY_TYPES:
        assert sum(1 for t in DEFAULT_TRIADS if name in t.story_types) >= 2
