"""Working record for a single generation attempt."""

from dataclasses import dataclass, field
from typing import List, Optional

from storytram.storyteller.story_types import StoryType
from storytram.storyteller.triads import Props, Triad


@dataclass
class GenerationContext:
    story_type: StoryType
    ending_mode: str
    scene_count: int
    triad: Triad
    hero: str
    helper_animal: str
    location: str
    weather: str
    friends: List[str] = field(default_factory=list)
    title: str = ""

    # Triad-bound fields, always replaced together by bind_triad()
    helper_role: str = field(init=False)
    problem: str = field(init=False)
    props: Props = field(init=False)

    def __post_init__(self):
        self.bind_triad(self.triad, self.helper_animal)

    def bind_triad(self, triad: Triad, helper_animal: str):
        """Swap in a whole triad; the title is cleared until rebuilt."""
        if helper_animal not in triad.allowed_helpers:
            raise ValueError(f"{helper_animal!r} cannot play the role in {triad.problem!r}")
        self.triad = triad
        self.helper_animal = helper_animal
        self.helper_role = triad.helper_role
        self.problem = triad.problem
        self.props = triad.props
        self.title = ""

    @property
    def object_of_affection(self) -> Optional[str]:
        return self.props.object
