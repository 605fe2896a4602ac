"""
neuro_snake/evolution/

Generational neuroevolution for snake controllers.

One generation:
- Evaluate every genome in its own game (lockstep ticks)
- Score survival time
- Select parents in proportion to fitness, mutate, replace
"""

from .genome import NetworkGenome, ShapeMismatch
from .fitness import EvaluationResult, FitnessPolicy
from .selection import roulette_index, select_parent
from .population import EvolutionConfig, Population, PopulationSnapshot, Slot

__all__ = [
    "NetworkGenome",
    "ShapeMismatch",
    "EvaluationResult",
    "FitnessPolicy",
    "roulette_index",
    "select_parent",
    "EvolutionConfig",
    "Population",
    "PopulationSnapshot",
    "Slot",
]
