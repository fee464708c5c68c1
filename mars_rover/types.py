from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Direction(Enum):
    """Compass heading of a rover.

    Declaration order is the clockwise cycle N -> E -> S -> W -> N.
    """

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @classmethod
    def from_letter(cls, letter: str) -> "Direction":
        """Decode an uppercase direction letter. Raises ValueError otherwise."""
        return cls(letter)

    @property
    def letter(self) -> str:
        return self.value

    @property
    def vector(self) -> Tuple[int, int]:
        """Unit step (dx, dy) for a forward move."""
        return _VECTORS[self]

    def right(self) -> "Direction":
        order = list(Direction)
        return order[(order.index(self) + 1) % len(order)]

    def left(self) -> "Direction":
        order = list(Direction)
        return order[(order.index(self) - 1) % len(order)]


_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}


class Instruction(Enum):
    """Single rover command."""

    TURN_LEFT = "L"
    TURN_RIGHT = "R"
    MOVE_FORWARD = "M"

    @classmethod
    def from_letter(cls, letter: str) -> "Instruction":
        return cls(letter)


@dataclass(frozen=True)
class Position:
    """Grid coordinate. Signed, so unbounded runs may go below the origin."""

    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        dx, dy = direction.vector
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Plateau:
    """Rectangular grid with inclusive upper bounds.

    Attributes
    ----------
    width : int
        Largest valid x coordinate.
    height : int
        Largest valid y coordinate.
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"plateau bounds must be non-negative, got ({self.width}, {self.height})"
            )

    def contains(self, position: Position) -> bool:
        return 0 <= position.x <= self.width and 0 <= position.y <= self.height


@dataclass(frozen=True)
class RoverState:
    """Position and heading of a rover at one point of its run."""

    position: Position
    direction: Direction

    def as_triple(self) -> Tuple[int, int, str]:
        return self.position.x, self.position.y, self.direction.letter

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.position.x,
            "y": self.position.y,
            "direction": self.direction.letter,
        }


@dataclass(frozen=True)
class RoverSpec:
    """Parsed rover: start state plus its instruction sequence.

    ``line`` is the 1-based input line of the position record; the
    instruction record follows it.
    """

    rover_id: int
    position: Position
    direction: Direction
    instructions: Tuple[Instruction, ...] = ()
    line: Optional[int] = None

    @property
    def initial_state(self) -> RoverState:
        return RoverState(self.position, self.direction)


@dataclass(frozen=True)
class Mission:
    """Everything a command file describes."""

    plateau: Plateau
    rovers: Tuple[RoverSpec, ...]
