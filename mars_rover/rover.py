from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import OutOfBounds
from .types import Direction, Instruction, Plateau, Position, RoverSpec, RoverState


def step(
    state: RoverState,
    instruction: Instruction,
    plateau: Optional[Plateau] = None,
    index: int = 0,
) -> RoverState:
    """Apply one instruction and return the next state.

    Passing a plateau enables bounds checking: a move whose destination is
    off the plateau raises ``OutOfBounds`` and ``state`` is left as the last
    valid state. Turns never fail.
    """
    if instruction is Instruction.TURN_LEFT:
        return RoverState(state.position, state.direction.left())
    if instruction is Instruction.TURN_RIGHT:
        return RoverState(state.position, state.direction.right())

    target = state.position.moved(state.direction)
    if plateau is not None and not plateau.contains(target):
        raise OutOfBounds(state=state, attempted=target, instruction_index=index)
    return RoverState(target, state.direction)


@dataclass(frozen=True)
class RoverResult:
    """Outcome of one rover's run.

    ``error`` is set when the run stopped early; position and direction are
    then the last valid state. ``trajectory`` holds every visited state,
    starting with the initial one, when recording was requested.
    """

    rover_id: int
    position: Position
    direction: Direction
    error: Optional[OutOfBounds] = None
    instructions_executed: int = 0
    trajectory: Optional[Tuple[RoverState, ...]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def state(self) -> RoverState:
        return RoverState(self.position, self.direction)

    @property
    def error_tag(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None

    def as_triple(self) -> Tuple[int, int, str]:
        return self.position.x, self.position.y, self.direction.letter

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rover": self.rover_id,
            "x": self.position.x,
            "y": self.position.y,
            "direction": self.direction.letter,
            "error": self.error_tag,
        }


class Rover:
    """A single rover stepping through its instructions on a plateau.

    Holds its own state; nothing is shared between rovers.
    """

    def __init__(
        self,
        spec: RoverSpec,
        plateau: Optional[Plateau] = None,
        record_trajectory: bool = False,
    ) -> None:
        self.spec = spec
        self.plateau = plateau
        self.record_trajectory = record_trajectory
        self.reset()

    # ------------------------------------------------------------------
    # State manipulation
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Return to the start state and clear any recorded run."""
        self.state = self.spec.initial_state
        self.executed = 0
        self.error: Optional[OutOfBounds] = None
        self.trajectory: List[RoverState] = [self.state]

    def apply(self, instruction: Instruction) -> None:
        """Advance by one instruction. Raises OutOfBounds in bounded mode."""
        try:
            self.state = step(self.state, instruction, self.plateau, self.executed)
        except OutOfBounds as exc:
            raise OutOfBounds(
                state=exc.state,
                attempted=exc.attempted,
                instruction_index=exc.instruction_index,
                rover_id=self.spec.rover_id,
            ) from None
        self.executed += 1
        if self.record_trajectory:
            self.trajectory.append(self.state)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(self) -> RoverResult:
        """Execute every instruction, stopping at the first boundary violation."""
        self.reset()
        for instruction in self.spec.instructions:
            try:
                self.apply(instruction)
            except OutOfBounds as exc:
                self.error = exc
                break
        return RoverResult(
            rover_id=self.spec.rover_id,
            position=self.state.position,
            direction=self.state.direction,
            error=self.error,
            instructions_executed=self.executed,
            trajectory=tuple(self.trajectory) if self.record_trajectory else None,
        )


def execute(
    spec: RoverSpec,
    plateau: Plateau,
    enforce_bounds: bool = True,
    record_trajectory: bool = False,
) -> RoverResult:
    """Run one rover to completion (or to its first out-of-bounds move)."""
    rover = Rover(
        spec,
        plateau=plateau if enforce_bounds else None,
        record_trajectory=record_trajectory,
    )
    return rover.run()
