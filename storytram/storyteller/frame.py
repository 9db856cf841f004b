"""
Title and story frame output.

The frame is the final text document: settings, prop DNA, numbered
scenes and the production checklist.
"""

from typing import Sequence

from storytram.storyteller.context import GenerationContext
from storytram.storyteller.prop_dna import build_prop_dna
from storytram.storyteller.randomness import RandomSource, pick

TITLE_HOOKS = [
    "and the Little Problem That Became a Big Smile",
    "and the Tiny Fix That Felt Like a Hug",
    "and the Brave Step on a Small Day",
    "and the Helpful Friend Who Came Quietly",
    "and the Silly Mishap That Turned Sweet",
]

MAX_TITLE_PROBLEM = 52

SOP_CHECK = [
    "- No dialogue, no text, no subtitles, no logos",
    "- One action per scene (still/slow for detailed interaction)",
    "- Visible cause → effect in every scene",
    "- Physics: weight, gravity, scale are believable",
    "- Animals only (photoreal anatomy, natural fur, no human limbs)",
    "- Calm closing echo of opening",
]


def build_title(ctx: GenerationContext, rng: RandomSource, prefix: str) -> str:
    """Short but specific title; embeds the (possibly re-rolled) problem."""
    hook = pick(rng, TITLE_HOOKS)
    problem = ctx.problem.lower()
    if len(problem) > MAX_TITLE_PROBLEM:
        problem = problem[:MAX_TITLE_PROBLEM - 3] + "…"
    return f"{prefix}: {ctx.story_type.title_noun} | {hook} | {problem}"


def build_story_frame(ctx: GenerationContext, scenes: Sequence[str]) -> str:
    dna = build_prop_dna(ctx.props)
    friends_line = ", ".join(ctx.friends) if ctx.friends else "None"
    object_line = ctx.object_of_affection or "None"

    out = [
        "STORY TITLE",
        ctx.title,
        "",
        "STORY SETTINGS",
        f"- Type: {ctx.story_type.name}",
        f"- Hero: {ctx.hero}",
        f"- Friends (optional): {friends_line}",
        f"- Location: {ctx.location}",
        f"- Weather/Time: {ctx.weather}",
        f"- Helper (animal-only): {ctx.helper_animal}",
        f"- Primary helper role: {ctx.helper_role}",
        f"- Problem: {ctx.problem}",
        f"- Object of affection: {object_line}",
        "",
        "PROP DNA (must be repeated verbatim in prompts)",
        *dna.lines(),
        "",
        f"SCENES ({len(scenes)})",
        *scenes,
        "",
        "SOP CHECK",
        *SOP_CHECK,
    ]
    return "\n".join(out)
