"""
observations/visualize.py

Watch the snakes learn.

The viewer only reads snapshots. Turning it on or off never changes
what the population does.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from neuro_snake.environments.grid_world import WorldSnapshot
    from neuro_snake.evolution.population import Population

# RGB
BLACK = (0.0, 0.0, 0.0)
WHITE = (1.0, 1.0, 1.0)
RED = (1.0, 0.0, 0.0)
GREY = (0.35, 0.35, 0.35)


def world_to_image(world: WorldSnapshot) -> np.ndarray:
    """
    Rasterize one world into a (grid, grid, 3) RGB array.

    Row index is y, column index is x. Finished games are drawn grey.
    """
    n = world.grid_size
    image = np.zeros((n, n, 3))
    image[:, :] = BLACK

    body_color = GREY if world.done else WHITE
    fx, fy = world.food
    image[fy, fx] = WHITE
    for x, y in world.body[1:]:
        image[y, x] = body_color
    hx, hy = world.body[0]
    image[hy, hx] = GREY if world.done else RED

    return image


class PopulationVisualizer:
    """
    Matplotlib view of one population slot.

    Follows the first slot that is still playing, so there is always
    something moving on screen while the generation runs.
    """

    def __init__(self, population: Population, figsize: tuple = (6, 6)):
        self.population = population
        self.figsize = figsize

        # Lazy import matplotlib
        self._plt = None
        self._fig = None
        self._ax = None

    def _setup_plot(self):
        """Initialize matplotlib figure."""
        import matplotlib.pyplot as plt
        self._plt = plt

        self._fig, self._ax = plt.subplots(figsize=self.figsize)
        self._fig.patch.set_facecolor('#16213e')

    def focus_index(self) -> int:
        """Index of the slot being shown."""
        snapshot = self.population.snapshot()
        for index, world in enumerate(snapshot.worlds):
            if not world.done:
                return index
        return 0

    def render(self, pause: float = 0.01) -> None:
        if not self.population.visualize:
            return
        if self._plt is None:
            self._setup_plot()

        snapshot = self.population.snapshot()
        index = self.focus_index()
        world = snapshot.worlds[index]

        self._ax.clear()
        self._ax.imshow(world_to_image(world), interpolation='nearest')
        self._ax.set_xticks([])
        self._ax.set_yticks([])
        self._ax.set_title(
            f"Gen: {snapshot.generation} | Alive: {snapshot.alive} | "
            f"Slot: {index} | Score: {world.score}",
            color='white', fontsize=11
        )

        self._plt.pause(pause)

    def save_frame(self, path: str) -> None:
        """Save current frame to file."""
        if self._fig is not None:
            self._fig.savefig(path, dpi=150, facecolor=self._fig.get_facecolor())

    def close(self) -> None:
        """Close the visualization."""
        if self._plt is not None:
            self._plt.close(self._fig)


def watch(
    population: Population,
    generations: int = 10,
    save_path: Optional[str] = None
) -> None:
    """Run a population with the viewer attached."""
    population.visualize = True
    viz = PopulationVisualizer(population)

    try:
        for _ in range(generations):
            advanced = False
            while not advanced:
                advanced = population.step()
                viz.render()

        if save_path:
            viz.save_frame(save_path)

    finally:
        viz.close()
