"""
environments/grid_world.py

A square grid, one snake, one piece of food.

The world is the referee: it encodes what the snake can see,
asks the genome for a direction, moves the snake, and decides
when the game is over.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple
import logging

import numpy as np

from neuro_snake.core.agent import AgentStatus, Cell, Direction, SnakeAgent

logger = logging.getLogger(__name__)


class CellValue(IntEnum):
    """Values written into the encoded state vector."""
    EMPTY = 0
    FOOD = 1
    SNAKE = 2
    HEAD = 3


@dataclass
class GridConfig:
    """Configuration for the grid world."""
    cell_nb: int = 25                      # Side length of the square grid
    max_ticks: Optional[int] = 50          # Ticks before forced game over (None = no cap)
    initial_length: int = 3                # Body length at spawn
    start: Optional[Tuple[int, int]] = None  # Head at spawn (default: grid center)

    def __post_init__(self):
        if self.cell_nb < 1:
            raise ValueError(f"cell_nb must be positive, got {self.cell_nb}")
        if self.max_ticks is not None and self.max_ticks < 0:
            raise ValueError(f"max_ticks must be non-negative, got {self.max_ticks}")
        if self.initial_length < 1:
            raise ValueError(f"initial_length must be positive, got {self.initial_length}")
        if self.start is not None:
            self.start = (int(self.start[0]), int(self.start[1]))

        x, y = self.start_cell
        tail_x = x + self.initial_length - 1
        if x < 0 or y < 0 or y >= self.cell_nb or tail_x >= self.cell_nb:
            raise ValueError(
                f"A snake of length {self.initial_length} at {self.start_cell} "
                f"does not fit a {self.cell_nb}x{self.cell_nb} grid"
            )

    @property
    def start_cell(self) -> Cell:
        if self.start is not None:
            return self.start
        return (self.cell_nb // 2, self.cell_nb // 2)

    @property
    def n_inputs(self) -> int:
        return self.cell_nb * self.cell_nb


@dataclass(frozen=True)
class WorldSnapshot:
    """Read-only view of one world, for renderers and logs."""
    grid_size: int
    food: Cell
    body: Tuple[Cell, ...]
    done: bool
    score: int
    time_alive: int


class GridWorld:
    """
    One game of snake.

    Features:
    - Flat state encoding (index = y * cell_nb + x)
    - Argmax decoding of the genome's output into a heading
    - Tick budget (timeout) on top of wall and body collisions
    - Manual mode where the heading comes from steer() instead of a genome
    """

    def __init__(
        self,
        agent: SnakeAgent,
        rng: np.random.Generator,
        config: Optional[GridConfig] = None,
        manual: bool = False,
    ):
        self.config = config or GridConfig()
        self.manual = manual
        self.rng = rng
        self.reset(agent)

    def reset(self, agent: SnakeAgent, rng: Optional[np.random.Generator] = None) -> None:
        """Start a new game: new snake, new food, counters zeroed."""
        if rng is not None:
            self.rng = rng
        self.agent = agent
        self.score = 0
        self.time_alive = 0
        self.done = False
        self.food = self._place_food()

    @property
    def grid_size(self) -> int:
        return self.config.cell_nb

    # ==================== Perception ====================

    def encode(self) -> np.ndarray:
        """
        Flatten the grid into the network's input vector.

        FOOD is written first, then SNAKE, then HEAD, so later marks win.
        """
        n = self.grid_size
        state = np.full(n * n, float(CellValue.EMPTY))

        fx, fy = self.food
        state[fy * n + fx] = CellValue.FOOD
        for x, y in self.agent.body:
            state[y * n + x] = CellValue.SNAKE
        hx, hy = self.agent.head
        state[hy * n + hx] = CellValue.HEAD

        return state

    def decide(self) -> Direction:
        """Ask the genome where to go next."""
        if self.agent.genome is None:
            raise ValueError("Agent has no genome; use manual mode to steer it")
        outputs = self.agent.genome.forward(self.encode())
        return Direction.from_index(int(np.argmax(outputs)))

    # ==================== Control ====================

    def steer(self, direction: Direction) -> bool:
        """
        Manual heading override.

        Rejected (returns False) when it would reverse the snake straight
        into its own neck, or when asked to go back to UNDECIDED.
        """
        if direction is Direction.UNDECIDED:
            return False
        heading = self.agent.heading
        if heading is not Direction.UNDECIDED and direction is heading.opposite:
            return False
        self.agent.heading = direction
        return True

    def tick(self) -> bool:
        """
        Advance the game by one tick.

        Returns True only on the tick the game became terminal.
        """
        if self.done:
            return False

        direction = self.agent.heading if self.manual else self.decide()
        self.time_alive += 1

        status = self.agent.step(direction, self.grid_size, food=self.food)
        if status is AgentStatus.DEAD:
            logger.debug(f"Collision at tick {self.time_alive}: {self.agent}")
            self.done = True

        cap = self.config.max_ticks
        if cap is not None and self.time_alive > cap:
            self.done = True

        if self.agent.ate:
            self.food = self._place_food()
            self.score += 1

        return self.done

    def _place_food(self) -> Cell:
        # Food may land under the snake's body
        x, y = self.rng.integers(0, self.grid_size, size=2)
        return (int(x), int(y))

    # ==================== Observation ====================

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            grid_size=self.grid_size,
            food=self.food,
            body=tuple(self.agent.body),
            done=self.done,
            score=self.score,
            time_alive=self.time_alive,
        )

    def __repr__(self) -> str:
        return (
            f"GridWorld(size={self.grid_size}, "
            f"time={self.time_alive}, "
            f"score={self.score}, "
            f"done={self.done})"
        )
