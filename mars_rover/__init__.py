"""
Top-level package for the Mars rover command interpreter.

Components:
- types: plateau, position, direction, instruction and rover value types
- parser: command-file parsing into a Mission
- rover: the per-rover state machine (step / execute)
- engine: batch execution of every rover under a bounds policy
- report: text/JSON serialization of results
- config: YAML run configuration
- metrics: per-rover counters and run summary
- cli: command-line entry point
"""

from .types import Direction, Instruction, Mission, Plateau, Position, RoverSpec, RoverState
from .errors import (
    EmptyInput,
    MalformedRecord,
    OutOfBounds,
    ParseError,
    RoverError,
    UnpairedRoverRecord,
)
from .parser import parse, parse_records
from .rover import Rover, RoverResult, execute, step
from .engine import ExecutionEngine, run_mission

__all__ = [
    "Direction",
    "Instruction",
    "Mission",
    "Plateau",
    "Position",
    "RoverSpec",
    "RoverState",
    "RoverError",
    "ParseError",
    "EmptyInput",
    "MalformedRecord",
    "UnpairedRoverRecord",
    "OutOfBounds",
    "parse",
    "parse_records",
    "Rover",
    "RoverResult",
    "execute",
    "step",
    "ExecutionEngine",
    "run_mission",
]
