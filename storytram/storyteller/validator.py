"""
Structural gate for rendered stories.

Checks are cheap text heuristics run in a fixed order; the first failure
stops the run. A failure is an expected outcome that triggers a triad
re-roll, not an error.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from storytram.storyteller.context import GenerationContext

EARLY_WINDOW = 6
ENDING_WINDOW = 5
PROBLEM_WORDS = 4
PROBLEM_CHARS = 18
HELPER_DENSITY = 0.35
MAX_AND_PER_SCENE = 2

ENDING_KEYWORDS = {
    "positive": ("success", "resolved", "works", "completed", "fixed", "delivered", "safe"),
    "bittersweet": ("comfort", "accept", "calm", "relax", "beside", "close"),
}

_AND = re.compile(r"\band\b", re.IGNORECASE)


@dataclass
class ValidationResult:
    """Result of a validation run."""
    passed: bool
    failed_check: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"passed": self.passed, "failed_check": self.failed_check}


def problem_surfaces_early(scenes: Sequence[str], problem: str) -> bool:
    early = " ".join(scenes[:EARLY_WINDOW]).lower()
    problem = problem.lower().strip()
    lead_words = " ".join(problem.split()[:PROBLEM_WORDS])
    if lead_words and lead_words in early:
        return True
    return problem[:PROBLEM_CHARS] in early


def ending_matches_mode(scenes: Sequence[str], ending_mode: str) -> bool:
    ending = " ".join(scenes[-ENDING_WINDOW:]).lower()
    keywords = ENDING_KEYWORDS.get(ending_mode, ENDING_KEYWORDS["positive"])
    return any(k in ending for k in keywords)


def helper_is_present(scenes: Sequence[str], helper_animal: str, scene_count: int) -> bool:
    needed = math.floor(HELPER_DENSITY * scene_count)
    name = helper_animal.lower()
    return sum(1 for s in scenes if name in s.lower()) >= needed


def scenes_are_readable(scenes: Sequence[str]) -> bool:
    return all(len(_AND.findall(s)) <= MAX_AND_PER_SCENE for s in scenes)


def check_story(scenes: Sequence[str], ctx: GenerationContext) -> ValidationResult:
    """Run every check in order and report the first one that fails."""
    if not problem_surfaces_early(scenes, ctx.problem):
        return ValidationResult(False, "problem_early")
    if not ending_matches_mode(scenes, ctx.ending_mode):
        return ValidationResult(False, "ending_mode")
    if not helper_is_present(scenes, ctx.helper_animal, ctx.scene_count):
        return ValidationResult(False, "helper_presence")
    if not scenes_are_readable(scenes):
        return ValidationResult(False, "readability")
    return ValidationResult(True)


def validate_story(scenes: Sequence[str], ctx: GenerationContext) -> bool:
    return check_story(scenes, ctx).passed
