"""
Study 01: Evolution Observation

Run: python -m neuro_snake.studies.01_evolution.observe

Evolve a population of snake controllers and watch the numbers move.
Optional YAML config:

    grid:
      cell_nb: 20
      max_ticks: 50
    evolution:
      population_size: 100
      n_hidden: 16
      seed: 7
      fitness:
        survival_weight: 1.0
        food_weight: 0.0
"""

import argparse
import logging
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import yaml

from neuro_snake.environments.grid_world import GridConfig
from neuro_snake.evolution.population import EvolutionConfig, Population

logger = logging.getLogger(__name__)


def load_config(config_path: Optional[str] = None) -> Tuple[GridConfig, EvolutionConfig]:
    """Load grid and evolution configuration from a YAML file."""
    if config_path is None:
        return GridConfig(), EvolutionConfig()

    with open(Path(config_path)) as f:
        data = yaml.safe_load(f) or {}

    return (
        GridConfig(**data.get("grid", {})),
        EvolutionConfig(**data.get("evolution", {})),
    )


def run_study(
    generations: int = 50,
    grid_config: Optional[GridConfig] = None,
    evolution_config: Optional[EvolutionConfig] = None,
    animate: bool = False,
) -> Population:
    """
    Evolve snakes for a number of generations.

    Watch:
    - Mean and max survival per generation
    - Food eaten per generation
    - Degenerate generations (all fitness zero)
    """
    print("=" * 50)
    print("Study 01: Evolution Observation")
    print("=" * 50)
    print("\nPrinciple: Selection without gradients")
    print("-" * 50)

    population = Population(evolution_config, grid_config)
    print(f"\nPopulation created: {population}")
    print(f"Grid: {population.grid_config.cell_nb}x{population.grid_config.cell_nb}, "
          f"tick cap={population.grid_config.max_ticks}")
    print(f"\nRunning {generations} generations...")

    if animate:
        from neuro_snake.observations.visualize import watch
        watch(population, generations)
    else:
        population.run(generations)

    # Analysis
    print("\n" + "=" * 50)
    print("Observations")
    print("=" * 50)

    if population.history:
        means = [h['mean_fitness'] for h in population.history]
        food = [h['food_eaten'] for h in population.history]
        degenerate = sum(1 for h in population.history if h['degenerate'])

        print(f"\nMean fitness: first={means[0]:.2f}, last={means[-1]:.2f}, "
              f"peak={max(means):.2f}")
        print(f"Food eaten per generation: mean={np.mean(food):.2f}, max={max(food)}")
        print(f"Degenerate generations: {degenerate} / {len(population.history)}")

        best, fitness = population.get_best()
        print(f"Best genome: {best} (fitness {fitness:.0f})")

    print("\n" + "=" * 50)
    print("Study complete. What did you observe?")
    print("=" * 50)

    return population


def main():
    parser = argparse.ArgumentParser(description="Snake Neuroevolution Study")
    parser.add_argument("--generations", type=int, default=50, help="Generations to run")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--seed", type=int, default=None, help="Override random seed")
    parser.add_argument("--animate", action="store_true", help="Show the matplotlib viewer")
    parser.add_argument("--verbose", action="store_true", help="Log per-generation summaries")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    grid_config, evolution_config = load_config(args.config)
    if args.config:
        logger.info(f"Loaded config from {args.config}")
    if args.seed is not None:
        evolution_config.seed = args.seed

    run_study(
        generations=args.generations,
        grid_config=grid_config,
        evolution_config=evolution_config,
        animate=args.animate,
    )


if __name__ == "__main__":
    main()
