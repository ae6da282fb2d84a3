"""Pluggable randomness for the rule-based generator."""
from __future__ import annotations

import random
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def next(self) -> float:
        """Return a float in [0, 1)."""
        ...


class PythonRandom:
    """RandomSource backed by :mod:`random`; seedable for reproducible runs."""

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def next(self) -> float:
        return self._random.random()


def random_index(rng: RandomSource, upper: int) -> int:
    """Uniform index in ``range(upper)``."""
    # Clamp in case a fake source hands back 1.0
    return min(int(rng.next() * upper), upper - 1)


def shuffled(items: list[T], rng: RandomSource) -> list[T]:
    """Fisher-Yates shuffle into a new list."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = random_index(rng, i + 1)
        result[i], result[j] = result[j], result[i]
    return result
