"""
Tests for studies/01_evolution/observe.py

Config loading and a short headless run.
"""

import importlib

import pytest

from neuro_snake.environments.grid_world import GridConfig
from neuro_snake.evolution.population import EvolutionConfig

observe = importlib.import_module("neuro_snake.studies.01_evolution.observe")


class TestLoadConfig:
    """Tests for YAML configuration loading."""

    def test_defaults_without_file(self):
        grid, evolution = observe.load_config(None)
        assert grid == GridConfig()
        assert evolution == EvolutionConfig()

    def test_yaml_sections(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "grid:\n"
            "  cell_nb: 12\n"
            "  max_ticks: 30\n"
            "  start: [2, 3]\n"
            "evolution:\n"
            "  population_size: 8\n"
            "  seed: 7\n"
            "  fitness:\n"
            "    food_weight: 5.0\n"
        )

        grid, evolution = observe.load_config(str(path))

        assert grid.cell_nb == 12
        assert grid.max_ticks == 30
        assert grid.start_cell == (2, 3)
        assert evolution.population_size == 8
        assert evolution.seed == 7
        assert evolution.fitness.food_weight == 5.0

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        grid, evolution = observe.load_config(str(path))

        assert grid.cell_nb == 25
        assert evolution.population_size == 50

    def test_unknown_key_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("grid:\n  walls: 3\n")

        with pytest.raises(TypeError):
            observe.load_config(str(path))


class TestRunStudy:
    def test_headless_run(self, capsys):
        population = observe.run_study(
            generations=2,
            grid_config=GridConfig(cell_nb=6, max_ticks=5),
            evolution_config=EvolutionConfig(population_size=3, n_hidden=2),
        )

        assert population.generation == 2
        assert len(population.history) == 2
        out = capsys.readouterr().out
        assert "Study 01" in out
        assert "Degenerate generations: 0 / 2" in out
