"""
Run metrics for rover missions.

Per-rover counters (moves, turns, displacement, cells visited) and a
run-level summary with a human-readable table, in the spirit of an
evaluation report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import json
import os

import numpy as np

from .rover import RoverResult
from .types import Instruction, RoverSpec


# ---------------------------------------------------------------------------
# Per-rover metrics
# ---------------------------------------------------------------------------


@dataclass
class RoverMetrics:
    """Counters for a single rover's run."""

    rover_id: int
    instructions_total: int
    instructions_executed: int
    moves: int
    turns: int
    failed: bool
    displacement: int
    cells_visited: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rover_id": self.rover_id,
            "instructions_total": self.instructions_total,
            "instructions_executed": self.instructions_executed,
            "moves": self.moves,
            "turns": self.turns,
            "failed": self.failed,
            "displacement": self.displacement,
            "cells_visited": self.cells_visited,
        }


def rover_metrics(spec: RoverSpec, result: RoverResult) -> RoverMetrics:
    """Count what a rover actually did (instructions after a failure are not counted)."""
    executed = spec.instructions[: result.instructions_executed]
    moves = sum(1 for i in executed if i is Instruction.MOVE_FORWARD)
    displacement = abs(result.position.x - spec.position.x) + abs(
        result.position.y - spec.position.y
    )
    cells = None
    if result.trajectory is not None:
        cells = len({(s.position.x, s.position.y) for s in result.trajectory})
    return RoverMetrics(
        rover_id=spec.rover_id,
        instructions_total=len(spec.instructions),
        instructions_executed=result.instructions_executed,
        moves=moves,
        turns=len(executed) - moves,
        failed=not result.ok,
        displacement=displacement,
        cells_visited=cells,
    )


# ---------------------------------------------------------------------------
# Run summary
# ---------------------------------------------------------------------------


@dataclass
class RunSummary:
    """Aggregate statistics over every rover of one run."""

    num_rovers: int = 0
    num_succeeded: int = 0
    num_failed: int = 0
    failure_rate: float = 0.0
    total_moves: int = 0
    mean_displacement: float = 0.0
    max_displacement: int = 0
    # (xmin, ymin, xmax, ymax) over final positions
    final_bounds: Optional[Tuple[int, int, int, int]] = None
    per_rover: List[RoverMetrics] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_rovers": self.num_rovers,
            "num_succeeded": self.num_succeeded,
            "num_failed": self.num_failed,
            "failure_rate": self.failure_rate,
            "total_moves": self.total_moves,
            "mean_displacement": self.mean_displacement,
            "max_displacement": self.max_displacement,
            "final_bounds": list(self.final_bounds) if self.final_bounds else None,
            "per_rover": [m.to_dict() for m in self.per_rover],
        }

    def save(self, path: str) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)


def summarize(specs: Sequence[RoverSpec], results: Sequence[RoverResult]) -> RunSummary:
    """Build a RunSummary from specs and their results (same order)."""
    if len(specs) != len(results):
        raise ValueError(f"got {len(specs)} specs but {len(results)} results")
    if not results:
        return RunSummary()

    per_rover = [rover_metrics(s, r) for s, r in zip(specs, results)]
    failed = np.array([m.failed for m in per_rover], dtype=bool)
    displacement = np.array([m.displacement for m in per_rover], dtype=np.int64)
    finals = np.array([[r.position.x, r.position.y] for r in results], dtype=np.int64)
    xmin, ymin = finals.min(axis=0)
    xmax, ymax = finals.max(axis=0)

    return RunSummary(
        num_rovers=len(results),
        num_succeeded=int((~failed).sum()),
        num_failed=int(failed.sum()),
        failure_rate=float(np.mean(failed)),
        total_moves=int(sum(m.moves for m in per_rover)),
        mean_displacement=float(np.mean(displacement)),
        max_displacement=int(displacement.max()),
        final_bounds=(int(xmin), int(ymin), int(xmax), int(ymax)),
        per_rover=per_rover,
    )


# ---------------------------------------------------------------------------
# Text formatting
# ---------------------------------------------------------------------------


def format_summary_table(summary: RunSummary) -> str:
    """Produce a human-readable table string for the summary."""
    lines = [
        "=" * 60,
        "ROVER RUN SUMMARY",
        "=" * 60,
        f"  Rovers:            {summary.num_rovers}",
        f"  Succeeded:         {summary.num_succeeded}",
        f"  Failed:            {summary.num_failed}",
        "  Failure rate:      {:.1%}".format(summary.failure_rate),
        f"  Total moves:       {summary.total_moves}",
        "  Mean displacement: {:.2f}".format(summary.mean_displacement),
        "",
        "-" * 60,
        f"  {'Rover':<8} {'Executed':>10} {'Moves':>8} {'Turns':>8} {'Disp':>8} {'Status':>10}",
        "-" * 60,
    ]
    for m in summary.per_rover:
        executed = f"{m.instructions_executed}/{m.instructions_total}"
        status = "STOPPED" if m.failed else "ok"
        lines.append(
            f"  {m.rover_id:<8} {executed:>10} {m.moves:>8} {m.turns:>8} {m.displacement:>8} {status:>10}"
        )
    lines.append("-" * 60)
    return "\n".join(lines)
