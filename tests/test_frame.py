from __future__ import annotations

import pytest

from storytram.storyteller import Props, Triad
from storytram.storyteller.frame import SOP_CHECK, build_story_frame, build_title
from storytram.storyteller.prop_dna import build_prop_dna


def test_title_embeds_type_noun_and_problem(brave_context, scripted):
    title = build_title(brave_context, scripted(0.0), "Willy & Friends")
    assert title.startswith("Willy & Friends: Brave Moment | and the Little Problem")
    assert title.endswith("the bridge is too narrow")


def test_long_problems_are_truncated(brave_context, scripted):
    long_problem = "The Very Long Problem " * 5
    triad = Triad(problem=long_problem, helper_role="builder", allowed_helpers=("Beaver",), story_types=("Brave",))
    brave_context.bind_triad(triad, "Beaver")
    title = build_title(brave_context, scripted(0.0), "W")
    tail = title.rsplit(" | ", 1)[1]
    assert len(tail) == 50
    assert tail == long_problem.lower()[:49] + "…"


def test_prop_dna_lines():
    dna = build_prop_dna(Props(object="a blue toy wagon", tools=("tiny wrench", "wooden peg"), vehicle="toy helper cart"))
    assert dna.object_dna.startswith("OBJECT DNA: a blue toy wagon")
    assert "tiny wrench, wooden peg" in dna.tool_dna
    assert dna.vehicle_dna.startswith("VEHICLE DNA: toy-scale toy helper cart")

    empty = build_prop_dna(Props())
    assert empty.lines() == ["OBJECT DNA: none", "TOOL DNA: none", "VEHICLE DNA: none"]


def test_frame_sections_in_order(brave_context):
    brave_context.title = "A Title"
    scenes = ["Scene 1: one.", "Scene 2: two."]
    document = build_story_frame(brave_context, scenes)
    lines = document.split("\n")

    headers = ["STORY TITLE", "STORY SETTINGS", "PROP DNA (must be repeated verbatim in prompts)", "SCENES (2)", "SOP CHECK"]
    positions = [lines.index(h) for h in headers]
    assert positions == sorted(positions)
    assert lines[1] == "A Title"
    assert "- Problem: the bridge is too narrow" in lines
    assert "- Friends (optional): None" in lines
    assert "- Object of affection: None" in lines
    assert lines[-len(SOP_CHECK):] == SOP_CHECK
    assert lines[lines.index("SCENES (2)") + 1:lines.index("SCENES (2)") + 3] == scenes


def test_bind_triad_replaces_every_triad_field(brave_context):
    triad = Triad(
        problem="the boat drifts away",
        helper_role="water rescue helper",
        allowed_helpers=("Otter",),
        props=Props(object="a toy boat"),
        story_types=("Brave",),
    )
    brave_context.title = "old"
    brave_context.bind_triad(triad, "Otter")
    assert (brave_context.problem, brave_context.helper_role, brave_context.helper_animal) == (
        "the boat drifts away", "water rescue helper", "Otter",
    )
    assert brave_context.object_of_affection == "a toy boat"
    assert brave_context.title == ""


def test_bind_triad_rejects_foreign_helper(brave_context):
    with pytest.raises(ValueError):
        brave_context.bind_triad(brave_context.triad, "Otter")
