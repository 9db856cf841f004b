"""
Scene renderer: beat -> one scene line.

Every phrase describes a single physical action or a held stillness,
uses animal actors only, and carries no dialogue, written text or
narration. Unknown beats fall back to a generic one-motion line.
"""

import re
from typing import Callable, Dict, List, Sequence

from storytram.storyteller import beat_templates as b
from storytram.storyteller.context import GenerationContext
from storytram.storyteller.randomness import RandomSource, pick

# ===== PHRASE POOLS =====

ONE_MOVES = [
    "takes one small step forward",
    "turns its head once",
    "leans closer once",
    "backs up slightly",
    "pads forward slowly",
]

SMALL_OBSTACLES = [
    "a tiny wobble makes the setup drift (safe)",
    "the surface is a little slippery (safe)",
    "a soft breeze nudges it off-line (safe)",
    "a small gap is just a bit too wide (safe)",
]

ROLE_CATEGORIES = [
    ("caregiver", ("caregiver", "nurse", "medic", "doctor", "vet", "healer")),
    ("builder", ("builder", "carpenter", "construction", "engineer", "mason")),
    ("mechanic", ("mechanic", "repair", "tinker", "fixer")),
    ("delivery", ("delivery", "courier", "carrier", "postal", "mail")),
    ("mediator", ("mediator", "peacemaker", "referee", "counselor")),
]

ROLE_ACTIONS: Dict[str, List[str]] = {
    "caregiver": [
        "dabs the sore spot with a cool wet leaf",
        "wraps a soft leaf bandage around once",
        "blows one slow breath over the sore spot",
        "pats the area softly with one paw",
    ],
    "builder": [
        "sets one plank flat across the gap",
        "presses the plank edge firmly into the mud",
        "slides one support stick under the plank",
        "taps the plank once to seat it",
    ],
    "mechanic": [
        "turns the tiny wrench one quarter turn",
        "pushes the wooden peg into the axle hole",
        "spins the wheel once to test it",
        "lines the wheel up with the axle",
    ],
    "delivery": [
        "loops the padded strap over one shoulder",
        "lifts the load onto the cart bed",
        "tugs the cart forward one step",
        "balances the load with one nudge",
    ],
    "mediator": [
        "sets a flat stone between the two sides",
        "sits calmly between the two sides",
        "nudges one side a step apart",
        "points toward a second spot with a slow nod",
    ],
    "generic": [
        "reaches toward the problem with one paw",
        "steadies the setup with one gentle push",
        "lifts the tool into place",
        "nudges the item into a better spot",
    ],
}


def role_category(helper_role: str) -> str:
    """Match a free-text helper role to an action category."""
    for category, keywords in ROLE_CATEGORIES:
        if any(re.search(rf"\b{k}\b", helper_role, re.IGNORECASE) for k in keywords):
            return category
    return "generic"


def _role_action(ctx: GenerationContext, rng: RandomSource) -> str:
    return pick(rng, ROLE_ACTIONS[role_category(ctx.helper_role)])


def _friends_text(ctx: GenerationContext) -> str:
    return " & ".join(ctx.friends)


# ===== BEAT RENDERERS =====

def _opening(ctx, rng):
    obj = ctx.object_of_affection
    near = f"rests near {obj}" if obj else "sits still in the middle of the frame"
    company = f" with {_friends_text(ctx)} close by" if ctx.friends else ""
    return f"Calm opening in {ctx.location} under {ctx.weather}. {ctx.hero} {near}{company}, tiny blep visible."


def _goal_focus(ctx, rng):
    obj = ctx.object_of_affection
    target = obj if obj else "the spot where the trouble waits"
    return f"{ctx.hero} looks from the surroundings back to {target}, showing a clear wish without words (still/slow)."


def _cause_start(ctx, rng):
    return f"Cause: {ctx.hero} starts moving with purpose toward the goal area (one clear motion)."


def _problem_reveal(ctx, rng):
    return f"Effect: {ctx.problem} becomes clearly visible with believable physics (safe)."


def _reaction_low(ctx, rng):
    target = ctx.object_of_affection or "the trouble"
    return f"{ctx.hero} pauses, ears low, tail still, staring at {target} (one still beat)."


def _helper_arrival(ctx, rng):
    return (f"{ctx.helper_animal} arrives, stopping at a respectful distance, "
            f"looking at {ctx.hero} then at the problem (never the camera).")


def _helper_intent(ctx, rng):
    return f"{ctx.helper_animal}, the {ctx.helper_role}, {_role_action(ctx, rng)} (one action)."


def _tools_enter(ctx, rng):
    tools, vehicle = ctx.props.tools, ctx.props.vehicle
    if vehicle and tools:
        return f"{ctx.helper_animal} rolls the {vehicle} into frame carrying the {tools[0]} (one action, realistic rolling)."
    if vehicle:
        return f"{ctx.helper_animal} rolls the {vehicle} into frame, parking it neatly (one action, realistic rolling)."
    if tools:
        return f"{ctx.helper_animal} carries the {tools[0]} into frame, setting it down neatly (one action)."
    return f"{ctx.helper_animal} clears a small work spot with one sweep of a paw (one action)."


def _prep_station(ctx, rng):
    laid_out = ", ".join(f"the {t}" for t in ctx.props.tools) or "a few small sticks"
    return f"{ctx.helper_animal} lays out {laid_out} in a neat row near the problem (one action)."


def _build_step(ctx, rng):
    return f"Close work beat: {ctx.helper_animal} {_role_action(ctx, rng)} with realistic weight (still/slow)."


def _travel(ctx, rng):
    return f"Movement shot: {ctx.helper_animal} leads the route, {ctx.hero} following a little slower (one motion total)."


def _obstacle(ctx, rng):
    return f"Small complication: {pick(rng, SMALL_OBSTACLES)}; {ctx.helper_animal} freezes for a moment (still)."


def _adjust(ctx, rng):
    return f"Micro-adjustment: {ctx.helper_animal} changes one small thing, the angle or the grip (one action)."


def _try_gently(ctx, rng):
    return f"{ctx.helper_animal} tries a gentle nudge first; it slips sideways in a silly but safe way (one action)."


def _try_step(ctx, rng):
    return f"{ctx.hero} takes one brave step closer while {ctx.helper_animal} steadies the way (one motion)."


def _test(ctx, rng):
    return f"Test beat: {ctx.helper_animal} presses down once to test the fix, watching closely (still/slow)."


def _progress(ctx, rng):
    return (f"Progress beat: the fix looks closer to working; {ctx.hero} watches {ctx.helper_animal}, "
            f"tail giving one tiny wag (still/slow).")


def _silly_slip(ctx, rng):
    return (f"Silly slip: {ctx.hero} skids a little near {ctx.helper_animal}, "
            f"then sits down with a soft plop (one motion, safe).")


def _brave_breath(ctx, rng):
    return f"{ctx.hero} takes one slow breath, chest rising, eyes fixed on the problem (still)."


def _team_push(ctx, rng):
    if ctx.friends:
        return f"Teamwork: {_friends_text(ctx)} lean in beside {ctx.hero}, pushing together once (one motion)."
    return f"Teamwork: {ctx.hero} leans in beside {ctx.helper_animal}, pushing together once (one motion)."


def _share_moment(ctx, rng):
    if ctx.friends:
        return f"{ctx.hero} shares a quick look with {_friends_text(ctx)}, tails wagging once (still/slow)."
    return f"{ctx.hero} shares a quick look with {ctx.helper_animal}, tails giving one wag (still/slow)."


def _attempt_1(ctx, rng):
    return (f"Attempt 1: {ctx.helper_animal} {_role_action(ctx, rng)}; "
            f"it does not hold yet, failing visibly but safely (one action).")


def _reaction_pause(ctx, rng):
    return f"Reaction pause: {ctx.hero} stares at the result, head tilted, puzzled (still/slow)."


def _attempt_2(ctx, rng):
    return f"Attempt 2: {ctx.helper_animal} {_role_action(ctx, rng)} from a better angle (one action)."


def _success(ctx, rng):
    return "Success: the adjustment works; the problem is resolved cleanly, safely (one readable action)."


def _resolution(ctx, rng):
    return f"Resolution: {ctx.helper_animal} checks the finished fix once; it is completed, safe (still)."


def _joy(ctx, rng):
    if ctx.ending_mode == "bittersweet":
        return f"{ctx.hero} leans quietly against {ctx.helper_animal}, calm, a small soft smile (still)."
    target = ctx.object_of_affection or ctx.helper_animal
    return f"{ctx.hero} reacts with visible joy, soft eyes, tiny blep, stepping closer to {target} (one motion)."


def _closing_echo(ctx, rng):
    if ctx.ending_mode == "bittersweet":
        return (f"Calm closing echo in {ctx.location} under {ctx.weather}. "
                f"{ctx.hero} rests close beside {ctx.helper_animal}, comforted (still).")
    return (f"Calm closing echo in {ctx.location} under {ctx.weather}. "
            f"{ctx.hero} stays near {ctx.helper_animal}, both relaxed.")


def _extra_cute(ctx, rng):
    obj = ctx.object_of_affection
    target = obj if obj else ctx.helper_animal
    verb = "taps" if obj else "nose-boops"
    return f"Extra cute beat: {ctx.hero} gently {verb} {target} once as a thank-you, then settles (one motion)."


def _accept(ctx, rng):
    return f"{ctx.hero} sits down beside {ctx.helper_animal}, slowly accepting that {ctx.problem} for now (still)."


def _comfort_gift(ctx, rng):
    obj = ctx.object_of_affection
    where = f"beside {ctx.hero} near {obj}" if obj else f"beside {ctx.hero}"
    return f"{ctx.helper_animal} sets a small comfort gift, a soft leaf, {where} (one action)."


def _soft_reframe(ctx, rng):
    return f"{ctx.hero} curls up calmly, looking at the problem from a new, softer angle (still/slow)."


def _fallback(ctx, rng):
    return f"{ctx.hero} {pick(rng, ONE_MOVES)} while staying focused on the goal (one motion)."


RENDERERS: Dict[str, Callable[[GenerationContext, RandomSource], str]] = {
    b.OPENING: _opening,
    b.GOAL_FOCUS: _goal_focus,
    b.CAUSE_START: _cause_start,
    b.PROBLEM_REVEAL: _problem_reveal,
    b.REACTION_LOW: _reaction_low,
    b.HELPER_ARRIVAL: _helper_arrival,
    b.HELPER_INTENT: _helper_intent,
    b.TOOLS_ENTER: _tools_enter,
    b.PREP_STATION: _prep_station,
    b.BUILD_STEP: _build_step,
    b.TRAVEL: _travel,
    b.OBSTACLE: _obstacle,
    b.ADJUST: _adjust,
    b.TRY_GENTLY: _try_gently,
    b.TRY_STEP: _try_step,
    b.TEST: _test,
    b.PROGRESS: _progress,
    b.SILLY_SLIP: _silly_slip,
    b.BRAVE_BREATH: _brave_breath,
    b.TEAM_PUSH: _team_push,
    b.SHARE_MOMENT: _share_moment,
    b.ATTEMPT_1: _attempt_1,
    b.REACTION_PAUSE: _reaction_pause,
    b.ATTEMPT_2: _attempt_2,
    b.SUCCESS: _success,
    b.RESOLUTION: _resolution,
    b.JOY: _joy,
    b.CLOSING_ECHO: _closing_echo,
    b.EXTRA_CUTE: _extra_cute,
    b.ACCEPT: _accept,
    b.COMFORT_GIFT: _comfort_gift,
    b.SOFT_REFRAME: _soft_reframe,
}


def render_beat(beat: str, ctx: GenerationContext, rng: RandomSource) -> str:
    """Render one beat; never raises for an unknown tag."""
    return RENDERERS.get(beat, _fallback)(ctx, rng)


def render_scenes(beats: Sequence[str], ctx: GenerationContext, rng: RandomSource) -> List[str]:
    """Render numbered scene lines, one per beat."""
    return [f"Scene {i}: {render_beat(beat, ctx, rng)}" for i, beat in enumerate(beats, start=1)]
