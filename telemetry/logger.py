from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, Optional, TextIO

from mars_rover.rover import RoverResult


class TelemetryLogger:
    """Structured JSONL logger for rover telemetry.

    Thread-safe, append-only logging of dict records, one JSON object per line.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        line = json.dumps(record, separators=(",", ":"))
        with self._lock:
            self._fp.write(line + "\n")
            self._fp.flush()

    def log_result(self, result: RoverResult) -> None:
        """Log a rover's trajectory (if recorded) and then its outcome."""
        for index, state in enumerate(result.trajectory or ()):
            self.log_step({"rover": result.rover_id, "step": index, **state.to_dict()})
        outcome = {"rover": result.rover_id, "event": "result", **result.to_dict()}
        outcome["instructions_executed"] = result.instructions_executed
        if result.error is not None:
            outcome["message"] = str(result.error)
        self.log_step(outcome)

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
