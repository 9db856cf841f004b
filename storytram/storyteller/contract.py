"""Story contract: the goal, lesson and stakes a finished story commits to."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from storytram.storyteller.context import GenerationContext
from storytram.storyteller.randomness import RandomSource, pick

LESSONS = [
    "asking for help is brave",
    "patience makes things work",
    "being careful matters",
    "friends make hard things easier",
    "trying again is okay",
]


@dataclass(frozen=True)
class StoryContract:
    goal: str
    lesson: str
    location: str
    weather: str
    time_flow: str
    stakes: str
    object_of_focus: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_story_contract(ctx: GenerationContext, rng: RandomSource) -> StoryContract:
    return StoryContract(
        goal=ctx.problem,
        lesson=pick(rng, LESSONS),
        location=ctx.location,
        weather=ctx.weather,
        time_flow="continuous",
        stakes="problem remains unresolved if actions fail",
        object_of_focus=ctx.object_of_affection,
    )
