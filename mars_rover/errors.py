from __future__ import annotations

from typing import Optional

from .types import Position, RoverState


class RoverError(Exception):
    """Base class for command-file and rover execution errors."""


class ParseError(RoverError):
    """Command file could not be turned into a mission. Fatal to the run."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class EmptyInput(ParseError):
    def __init__(self) -> None:
        super().__init__("command file is empty: missing plateau bounds", line=1)


class MalformedRecord(ParseError):
    def __init__(self, line: int, reason: str) -> None:
        self.reason = reason
        super().__init__(f"malformed record: {reason}", line=line)


class UnpairedRoverRecord(ParseError):
    def __init__(self, line: int) -> None:
        super().__init__("rover position has no instruction record", line=line)


class OutOfBounds(RoverError):
    """A forward move would leave the plateau.

    Scoped to one rover: ``state`` is the last valid state, ``attempted``
    the rejected destination and ``instruction_index`` the 0-based index of
    the offending move.
    """

    def __init__(
        self,
        state: RoverState,
        attempted: Position,
        instruction_index: int,
        rover_id: Optional[int] = None,
    ) -> None:
        self.state = state
        self.attempted = attempted
        self.instruction_index = instruction_index
        self.rover_id = rover_id
        who = f"rover {rover_id}" if rover_id is not None else "rover"
        super().__init__(
            f"{who} would cross the plateau boundary at ({attempted.x}, {attempted.y}) "
            f"on instruction {instruction_index + 1}; stopped at "
            f"({state.position.x}, {state.position.y}) facing {state.direction.letter}"
        )
