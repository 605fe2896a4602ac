"""
neuro_snake/evolution/selection.py

Fitness-proportionate (roulette wheel) parent selection.

A slot is picked with probability fitness_i / total. When the whole
generation scored zero there is nothing to be proportional to, and
every slot is equally likely instead.
"""

from __future__ import annotations
from typing import Sequence, TypeVar

import numpy as np

T = TypeVar("T")


def roulette_index(fitnesses: Sequence[float], rng: np.random.Generator) -> int:
    """
    Draw one slot index with probability proportional to its fitness.

    Walks the slots in order, subtracting each fitness from a draw in
    [0, total) until it drops below zero. Falls back to a uniform draw
    when total fitness is zero.
    """
    values = np.asarray(fitnesses, dtype=np.float64)
    if values.size == 0:
        raise ValueError("Cannot select from an empty population")
    if np.any(values < 0):
        raise ValueError("Fitness values must be non-negative")

    total = values.sum()
    if total <= 0:
        return int(rng.integers(values.size))

    r = rng.uniform(0.0, total)
    for index, fitness in enumerate(values):
        r -= fitness
        if r < 0:
            return index

    # Float rounding can leave r at exactly zero; the last positive slot owns it
    return int(np.flatnonzero(values)[-1])


def select_parent(
    candidates: Sequence[T],
    fitnesses: Sequence[float],
    rng: np.random.Generator,
) -> T:
    """Pick one candidate by fitness-proportionate selection."""
    if len(candidates) != len(fitnesses):
        raise ValueError(
            f"Got {len(candidates)} candidates but {len(fitnesses)} fitness values"
        )
    return candidates[roulette_index(fitnesses, rng)]
