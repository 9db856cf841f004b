"""
Randomness helpers.

The engine never owns a random generator: every function that needs
randomness takes a zero-argument source returning a float in [0, 1).
"""

import math
import random
from typing import Callable, Sequence, TypeVar

RandomSource = Callable[[], float]

T = TypeVar("T")


def pick(rng: RandomSource, items: Sequence[T]) -> T:
    """Uniformly pick one item using a single draw."""
    if not items:
        raise ValueError("cannot pick from an empty sequence")
    index = min(int(math.floor(rng() * len(items))), len(items) - 1)
    return items[index]


def rand_int_inclusive(lo: int, hi: int, rng: RandomSource) -> int:
    """Uniform integer in [lo, hi] using a single draw."""
    span = hi - lo + 1
    return lo + min(int(math.floor(rng() * span)), span - 1)


class SequenceSource:
    """
    Replays a fixed list of values, cycling when exhausted.

    Useful for reproducing a logged run or scripting exact draws in tests.
    """

    def __init__(self, values: Sequence[float]):
        if not values:
            raise ValueError("SequenceSource needs at least one value")
        for v in values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"random values must be in [0, 1), got {v}")
        self._values = list(values)
        self._index = 0
        self.calls = 0

    def __call__(self) -> float:
        value = self._values[self._index]
        self._index = (self._index + 1) % len(self._values)
        self.calls += 1
        return value


def seeded_source(seed: int) -> RandomSource:
    """Seed-driven source for callers (CLI, HTTP) that want reproducible runs."""
    return random.Random(seed).random
