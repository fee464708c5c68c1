from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from .parser import parse
from .rover import RoverResult, execute
from .types import Mission, Plateau, RoverSpec


class ExecutionEngine:
    """Runs every rover of a mission against one plateau.

    Parameters
    ----------
    plateau : Plateau
        Shared, read-only grid.
    enforce_bounds : bool
        Reject forward moves that leave the plateau (bounded mode).
    max_workers : int
        Values above 1 run rovers on a thread pool. Results are always
        returned in input order.
    record_trajectory : bool
        Attach every visited state to each result.
    """

    def __init__(
        self,
        plateau: Plateau,
        enforce_bounds: bool = True,
        max_workers: int = 1,
        record_trajectory: bool = False,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.plateau = plateau
        self.enforce_bounds = enforce_bounds
        self.max_workers = max_workers
        self.record_trajectory = record_trajectory

    def run_one(self, spec: RoverSpec) -> RoverResult:
        return execute(
            spec,
            self.plateau,
            enforce_bounds=self.enforce_bounds,
            record_trajectory=self.record_trajectory,
        )

    def run(self, specs: Iterable[RoverSpec]) -> List[RoverResult]:
        """Execute each rover independently; one result per spec, same order."""
        specs = list(specs)
        if self.max_workers == 1 or len(specs) < 2:
            return [self.run_one(spec) for spec in specs]
        with ThreadPoolExecutor(max_workers=self.max_workers) as ex:
            # map() yields in submission order
            return list(ex.map(self.run_one, specs))

    @classmethod
    def for_mission(cls, mission: Mission, **kwargs) -> "ExecutionEngine":
        return cls(mission.plateau, **kwargs)


def run_mission(
    text: str,
    enforce_bounds: bool = True,
    max_workers: int = 1,
    record_trajectory: bool = False,
    mission: Optional[Mission] = None,
) -> List[RoverResult]:
    """Parse a command file and execute it.

    Parse errors propagate before any rover runs.
    """
    if mission is None:
        mission = parse(text)
    engine = ExecutionEngine.for_mission(
        mission,
        enforce_bounds=enforce_bounds,
        max_workers=max_workers,
        record_trajectory=record_trajectory,
    )
    return engine.run(mission.rovers)
