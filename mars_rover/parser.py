"""
Command-file parser.

Turns the textual mission description into a validated ``Mission``:

    <width>,<height>
    <x>,<y>,<direction>
    <instructions>
    ...

Fields are comma separated and whitespace around them is ignored. Any
malformed record aborts the whole parse.
"""

from __future__ import annotations

import csv
import re
from typing import Iterable, List, Tuple

from .errors import EmptyInput, MalformedRecord, UnpairedRoverRecord
from .types import Direction, Instruction, Mission, Plateau, Position, RoverSpec


_INT_RE = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def split_fields(record: str) -> List[str]:
    """Split one CSV record into stripped fields. A blank record has none."""
    if not record.strip():
        return []
    row = next(csv.reader([record]))
    return [field.strip() for field in row]


def parse_int(value: str, line: int, name: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise MalformedRecord(line, f"{name} is not an integer: {value!r}")
    try:
        return int(value)
    except ValueError:
        # too many digits for int()
        raise MalformedRecord(line, f"{name} is out of range ({len(value)} characters)") from None


def parse_direction(value: str, line: int) -> Direction:
    try:
        return Direction.from_letter(value)
    except ValueError:
        raise MalformedRecord(line, f"unknown direction {value!r}") from None


def parse_instructions(value: str, line: int) -> Tuple[Instruction, ...]:
    instructions = []
    for column, char in enumerate(value, start=1):
        try:
            instructions.append(Instruction.from_letter(char))
        except ValueError:
            raise MalformedRecord(
                line, f"unknown instruction {char!r} at column {column}"
            ) from None
    return tuple(instructions)


def _expect_fields(record: str, count: int, line: int, shape: str) -> List[str]:
    fields = split_fields(record)
    if len(fields) != count:
        raise MalformedRecord(
            line, f"expected {count} fields ({shape}), got {len(fields)}"
        )
    return fields


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def parse_plateau(record: str, line: int = 1) -> Plateau:
    """Parse the ``width,height`` header."""
    width_s, height_s = _expect_fields(record, 2, line, "width,height")
    width = parse_int(width_s, line, "width")
    height = parse_int(height_s, line, "height")
    if width < 0 or height < 0:
        raise MalformedRecord(line, f"plateau bounds must be non-negative, got {width},{height}")
    return Plateau(width=width, height=height)


def parse_start(record: str, line: int) -> Tuple[Position, Direction]:
    """Parse a rover's ``x,y,direction`` record."""
    x_s, y_s, dir_s = _expect_fields(record, 3, line, "x,y,direction")
    position = Position(parse_int(x_s, line, "x"), parse_int(y_s, line, "y"))
    return position, parse_direction(dir_s, line)


def parse_instruction_record(record: str, line: int) -> Tuple[Instruction, ...]:
    fields = split_fields(record)
    if not fields:
        return ()
    if len(fields) != 1:
        raise MalformedRecord(line, f"expected 1 field (instructions), got {len(fields)}")
    return parse_instructions(fields[0], line)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def parse_records(records: Iterable[str]) -> Mission:
    """Parse a sequence of records (lines) into a ``Mission``."""
    lines = list(records)
    if not any(line.strip() for line in lines):
        raise EmptyInput()

    plateau = parse_plateau(lines[0], line=1)

    body = lines[1:]
    # A trailing blank line left over after the last complete pair is not a rover.
    while len(body) % 2 == 1 and not body[-1].strip():
        body.pop()

    rovers: List[RoverSpec] = []
    for offset in range(0, len(body), 2):
        start_line = offset + 2
        if offset + 1 >= len(body):
            raise UnpairedRoverRecord(start_line)
        position, direction = parse_start(body[offset], start_line)
        instructions = parse_instruction_record(body[offset + 1], start_line + 1)
        rovers.append(
            RoverSpec(
                rover_id=len(rovers) + 1,
                position=position,
                direction=direction,
                instructions=instructions,
                line=start_line,
            )
        )

    return Mission(plateau=plateau, rovers=tuple(rovers))


def parse(text: str) -> Mission:
    """Parse a full command file."""
    return parse_records(text.splitlines())
