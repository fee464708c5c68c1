from __future__ import annotations

import json

from mars_rover.engine import run_mission
from telemetry.logger import TelemetryLogger


def read_jsonl(path) -> list:
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def test_log_result_writes_trajectory_then_outcome(tmp_path) -> None:
    results = run_mission("2,2\n1,1,N\nMM\n", record_trajectory=True)
    path = tmp_path / "logs" / "rovers.jsonl"
    with TelemetryLogger(str(path)) as logger:
        logger.log_result(results[0])

    records = read_jsonl(path)
    assert [r["y"] for r in records[:-1]] == [1, 2]
    assert records[0] == {"rover": 1, "step": 0, "x": 1, "y": 1, "direction": "N"}
    outcome = records[-1]
    assert outcome["event"] == "result"
    assert outcome["error"] == "OutOfBounds"
    assert outcome["instructions_executed"] == 1
    assert "boundary" in outcome["message"]


def test_log_without_trajectory_writes_only_outcome(tmp_path) -> None:
    results = run_mission("5,5\n1,2,N\nLMLMLMLMM\n")
    path = tmp_path / "rovers.jsonl"
    logger = TelemetryLogger(str(path))
    logger.log_result(results[0])
    logger.close()
    # logging after close is a no-op
    logger.log_step({"ignored": True})

    records = read_jsonl(path)
    assert len(records) == 1
    assert records[0]["x"] == 1 and records[0]["y"] == 3
    assert records[0]["error"] is None
    assert "message" not in records[0]
