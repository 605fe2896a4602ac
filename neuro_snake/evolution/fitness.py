"""
neuro_snake/evolution/fitness.py

Fitness policy for snake evaluation.

Fitness is what we select on. Score is what we watch.
By default a snake is rewarded for staying alive, not for eating;
the food weight exists so that policy can be tuned without code changes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from neuro_snake.environments.grid_world import GridWorld


@dataclass
class EvaluationResult:
    """
    Result of evaluating one population slot.

    Contains the fitness used for selection plus the raw counters
    it was derived from.
    """

    fitness: float
    time_alive: int
    score: int
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FitnessPolicy:
    """
    fitness = survival_weight * time_alive + food_weight * score

    Defaults reproduce plain survival time.
    """

    survival_weight: float = 1.0
    food_weight: float = 0.0

    def __post_init__(self):
        if self.survival_weight < 0 or self.food_weight < 0:
            raise ValueError("Fitness weights must be non-negative")

    def evaluate(self, world: GridWorld) -> EvaluationResult:
        fitness = (
            self.survival_weight * world.time_alive
            + self.food_weight * world.score
        )
        return EvaluationResult(
            fitness=float(fitness),
            time_alive=world.time_alive,
            score=world.score,
            metadata={"length": len(world.agent)},
        )
