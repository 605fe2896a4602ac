"""
core/agent.py

A snake is a list of cells and a heading.
Everything else belongs to the world it lives in.

Movement is a two-state machine: ALIVE until a wall or its own
body is hit, then DEAD for the rest of the generation.
"""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from neuro_snake.evolution.genome import NetworkGenome

Cell = Tuple[int, int]


class Direction(Enum):
    """Heading of a snake. UNDECIDED holds until the first decision."""
    UNDECIDED = "undecided"
    N = "N"
    S = "S"
    W = "W"
    E = "E"

    @property
    def delta(self) -> Cell:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @classmethod
    def from_index(cls, index: int) -> "Direction":
        """
        Decode a network output index.

        0 -> N, 1 -> S, 2 -> W, anything else -> E.
        """
        if index == 0:
            return cls.N
        if index == 1:
            return cls.S
        if index == 2:
            return cls.W
        return cls.E


_DELTAS = {
    Direction.UNDECIDED: (0, 0),
    Direction.N: (0, -1),
    Direction.S: (0, 1),
    Direction.W: (-1, 0),
    Direction.E: (1, 0),
}

_OPPOSITES = {
    Direction.UNDECIDED: Direction.UNDECIDED,
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.W: Direction.E,
    Direction.E: Direction.W,
}


class AgentStatus(Enum):
    ALIVE = "alive"
    DEAD = "dead"


class SnakeAgent:
    """
    A snake on a square grid.

    Principles embodied:
    - The head is body[0]; the body only grows within a generation
    - Collisions are state transitions, never exceptions
    - The genome decides, the world asks; the agent only moves
    """

    def __init__(
        self,
        body: List[Cell],
        genome: Optional[NetworkGenome] = None,
        heading: Direction = Direction.UNDECIDED,
    ):
        if not body:
            raise ValueError("A snake needs at least one body cell")

        self.body: List[Cell] = [(int(x), int(y)) for x, y in body]
        self.genome = genome
        self.heading = heading
        self.status = AgentStatus.ALIVE
        self.ate = False               # Set by step() when the last move reached food

    @classmethod
    def spawn(
        cls,
        head: Cell,
        length: int = 3,
        genome: Optional[NetworkGenome] = None,
    ) -> "SnakeAgent":
        """Fresh snake: head first, remaining segments trailing to the east."""
        if length < 1:
            raise ValueError(f"length must be at least 1, got {length}")
        x, y = head
        return cls([(x + i, y) for i in range(length)], genome=genome)

    # ==================== Movement ====================

    def step(
        self,
        direction: Direction,
        grid_size: int,
        food: Optional[Cell] = None,
    ) -> AgentStatus:
        """
        Move one cell in `direction`.

        1. UNDECIDED leaves everything in place
        2. Leaving [0, grid_size)^2 kills the snake
        3. Moving onto any current segment kills the snake
        4. Otherwise every segment takes its predecessor's place

        If `food` is given and the new head lands on it, the snake grows
        in the same tick and `ate` is set.
        """
        self.ate = False
        if self.status is AgentStatus.DEAD:
            return self.status

        self.heading = direction
        if direction is Direction.UNDECIDED:
            return self.status

        candidate = self._candidate(direction)
        x, y = candidate

        # Walls
        if x < 0 or x >= grid_size or y < 0 or y >= grid_size:
            self.status = AgentStatus.DEAD
            return self.status

        # Own body
        if candidate in self.body:
            self.status = AgentStatus.DEAD
            return self.status

        for index in range(len(self.body) - 1, 0, -1):
            self.body[index] = self.body[index - 1]
        self.body[0] = candidate

        if food is not None and candidate == tuple(food):
            self.grow()
            self.ate = True

        return self.status

    def grow(self) -> None:
        """Duplicate the tail; it separates on the next move."""
        self.body.append(self.body[-1])

    def _candidate(self, direction: Direction) -> Cell:
        dx, dy = direction.delta
        x, y = self.body[0]
        return (x + dx, y + dy)

    # ==================== Utilities ====================

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def alive(self) -> bool:
        return self.status is AgentStatus.ALIVE

    def __len__(self) -> int:
        return len(self.body)

    def __repr__(self) -> str:
        return (
            f"SnakeAgent(head={self.head}, "
            f"length={len(self.body)}, "
            f"heading={self.heading.value}, "
            f"status={self.status.value})"
        )
