"""
Tests for observations/visualize.py

Rasterization only; no figure is ever opened.
"""

import numpy as np

from neuro_snake.environments.grid_world import GridConfig, WorldSnapshot
from neuro_snake.evolution.population import EvolutionConfig, Population
from neuro_snake.observations.visualize import (
    GREY,
    RED,
    WHITE,
    PopulationVisualizer,
    world_to_image,
)


def snapshot(done=False):
    return WorldSnapshot(
        grid_size=5,
        food=(4, 0),
        body=((1, 2), (2, 2), (3, 2)),
        done=done,
        score=0,
        time_alive=3,
    )


class TestWorldToImage:
    """Tests for world_to_image."""

    def test_shape(self):
        assert world_to_image(snapshot()).shape == (5, 5, 3)

    def test_colors(self):
        image = world_to_image(snapshot())

        assert tuple(image[2, 1]) == RED
        assert tuple(image[2, 2]) == WHITE
        assert tuple(image[0, 4]) == WHITE
        assert tuple(image[4, 4]) == (0.0, 0.0, 0.0)

    def test_finished_world_is_grey(self):
        image = world_to_image(snapshot(done=True))

        assert tuple(image[2, 1]) == GREY
        assert tuple(image[2, 3]) == GREY


class TestPopulationVisualizer:
    """Tests for PopulationVisualizer without matplotlib."""

    def make_population(self):
        return Population(
            EvolutionConfig(population_size=3, n_hidden=2, seed=3),
            GridConfig(cell_nb=6, max_ticks=5),
        )

    def test_render_disabled_does_not_open_figure(self):
        population = self.make_population()
        viz = PopulationVisualizer(population)

        viz.render()

        assert viz._plt is None
        viz.close()

    def test_focus_skips_finished_worlds(self):
        population = self.make_population()
        population.slots[0].environment.done = True
        viz = PopulationVisualizer(population)

        assert viz.focus_index() == 1

    def test_focus_defaults_to_first(self):
        population = self.make_population()
        for slot in population.slots:
            slot.environment.done = True
        viz = PopulationVisualizer(population)

        assert viz.focus_index() == 0
