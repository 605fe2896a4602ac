"""
neuro_snake/evolution/population.py

Generational neuroevolution over a fixed-size population of snakes.

Every slot plays its own game in lockstep. When the last snake is done,
the whole generation is scored at once, parents are drawn by
fitness-proportionate selection, and a fresh set of slots is built from
their mutated copies and swapped in whole.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging

import numpy as np

from neuro_snake.core.agent import SnakeAgent
from neuro_snake.environments.grid_world import GridConfig, GridWorld, WorldSnapshot
from .fitness import EvaluationResult, FitnessPolicy
from .genome import NetworkGenome
from .selection import select_parent

logger = logging.getLogger(__name__)

N_OUTPUTS = 4  # One output per cardinal direction


@dataclass
class EvolutionConfig:
    """Configuration for the evolutionary loop."""
    population_size: int = 50
    n_hidden: int = 16
    mutation_rate: float = 0.1
    seed: int = 42
    fitness: FitnessPolicy = field(default_factory=FitnessPolicy)

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if self.n_hidden < 1:
            raise ValueError(f"n_hidden must be positive, got {self.n_hidden}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        if isinstance(self.fitness, dict):
            self.fitness = FitnessPolicy(**self.fitness)


@dataclass(frozen=True)
class Slot:
    """One genome, the world it is evaluated in, and the snake it drives."""
    genome: NetworkGenome
    environment: GridWorld
    agent: SnakeAgent


@dataclass(frozen=True)
class PopulationSnapshot:
    """Read-only view of the whole population at one tick."""
    generation: int
    alive: int
    worlds: Tuple[WorldSnapshot, ...]


class Population:
    """
    Fixed-size population evolved one generation at a time.

    Lifecycle of a generation:
    1. step() ticks every live world once, in slot order
    2. Finished worlds decrement the alive count exactly once
    3. At alive == 0 the generation is scored and replaced
    """

    def __init__(
        self,
        config: Optional[EvolutionConfig] = None,
        grid_config: Optional[GridConfig] = None,
    ):
        self.config = config or EvolutionConfig()
        self.grid_config = grid_config or GridConfig()
        self.rng = np.random.default_rng(self.config.seed)

        self.generation = 0
        self.ticks = 0
        self.visualize = False
        self.history: List[Dict[str, Any]] = []

        self.best_genome: Optional[NetworkGenome] = None
        self.best_fitness = float('-inf')

        genomes = [
            NetworkGenome.random(
                self.rng,
                self.grid_config.n_inputs,
                self.config.n_hidden,
                N_OUTPUTS,
            )
            for _ in range(self.config.population_size)
        ]
        self.slots: Tuple[Slot, ...] = tuple(
            self._new_slot(genome) for genome in genomes
        )
        self.alive = len(self.slots)

    @property
    def size(self) -> int:
        return len(self.slots)

    def _spawn(self, genome: NetworkGenome) -> SnakeAgent:
        return SnakeAgent.spawn(
            self.grid_config.start_cell,
            self.grid_config.initial_length,
            genome=genome,
        )

    def _new_slot(self, genome: NetworkGenome) -> Slot:
        agent = self._spawn(genome)
        world = GridWorld(agent, self.rng, self.grid_config)
        return Slot(genome=genome, environment=world, agent=agent)

    # ==================== Simulation ====================

    def step(self) -> bool:
        """
        Tick every live world once.

        Returns True if this tick finished the generation and a new one
        was put in place.
        """
        for slot in self.slots:
            if slot.environment.tick():
                self.alive -= 1
        self.ticks += 1

        if self.alive <= 0:
            self._next_generation()
            return True
        return False

    def run_generation(self) -> Dict[str, Any]:
        """Step until the current generation is replaced; return its stats."""
        while not self.step():
            pass
        return self.history[-1]

    def run(self, generations: int) -> List[Dict[str, Any]]:
        return [self.run_generation() for _ in range(generations)]

    # ==================== Reproduction ====================

    def evaluate(self) -> List[EvaluationResult]:
        """Score every slot with the configured fitness policy."""
        return [self.config.fitness.evaluate(slot.environment) for slot in self.slots]

    def _next_generation(self) -> None:
        results = self.evaluate()
        fitnesses = np.array([r.fitness for r in results])
        total = fitnesses.sum()

        degenerate = total <= 0
        if degenerate:
            logger.warning(
                f"Generation {self.generation}: total fitness is zero, "
                f"selecting parents uniformly at random"
            )

        best_idx = int(fitnesses.argmax())
        if fitnesses[best_idx] > self.best_fitness:
            self.best_fitness = float(fitnesses[best_idx])
            self.best_genome = self.slots[best_idx].genome

        # Build the next generation aside; worlds are reused, so they are
        # only reset once every child exists
        next_slots = []
        for old in self.slots:
            parent = select_parent(self.slots, fitnesses, self.rng).genome
            child = parent.mutate(self.rng, self.config.mutation_rate)
            agent = self._spawn(child)
            next_slots.append(Slot(genome=child, environment=old.environment, agent=agent))

        self.history.append({
            'generation': self.generation,
            'mean_fitness': float(fitnesses.mean()),
            'max_fitness': float(fitnesses.max()),
            'min_fitness': float(fitnesses.min()),
            'total_fitness': float(total),
            'food_eaten': int(sum(r.score for r in results)),
            'best_overall': self.best_fitness,
            'degenerate': bool(degenerate),
        })
        logger.info(
            f"Generation {self.generation}: "
            f"mean={fitnesses.mean():.2f} max={fitnesses.max():.0f} "
            f"food={self.history[-1]['food_eaten']}"
        )

        for slot in next_slots:
            slot.environment.reset(slot.agent, self.rng)
        self.slots = tuple(next_slots)
        self.alive = len(self.slots)
        self.generation += 1

    # ==================== Observation ====================

    def snapshot(self) -> PopulationSnapshot:
        return PopulationSnapshot(
            generation=self.generation,
            alive=self.alive,
            worlds=tuple(slot.environment.snapshot() for slot in self.slots),
        )

    def get_best(self) -> Tuple[Optional[NetworkGenome], float]:
        """Return best genome seen in any finished generation and its fitness."""
        return self.best_genome, self.best_fitness

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'generation': self.generation,
            'population_size': self.size,
            'alive': self.alive,
            'ticks': self.ticks,
            'best_fitness': self.best_fitness,
            'mutation_rate': self.config.mutation_rate,
        }

    def __repr__(self) -> str:
        return (
            f"Population(size={self.size}, "
            f"generation={self.generation}, "
            f"alive={self.alive})"
        )
