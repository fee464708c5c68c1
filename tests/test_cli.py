from __future__ import annotations

import json

from mars_rover.cli import EXIT_FAILURE, EXIT_OK, EXIT_ROVER_ERROR, main


CLASSIC = "5,5\n1,2,N\nLMLMLMLMM\n3,3,E\nMMRMMRMRRM\n"


def write_input(tmp_path, text: str) -> str:
    path = tmp_path / "instructions.txt"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_prints_report_to_stdout(tmp_path, capsys) -> None:
    code = main([write_input(tmp_path, CLASSIC)])
    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert out == "1,3,N\n5,1,E\n"


def test_output_file(tmp_path, capsys) -> None:
    out_path = tmp_path / "result.txt"
    code = main([write_input(tmp_path, CLASSIC), "-o", str(out_path)])
    assert code == EXIT_OK
    assert out_path.read_text(encoding="utf-8") == "1,3,N\n5,1,E\n"
    assert capsys.readouterr().out == ""


def test_unbounded_flag(tmp_path, capsys) -> None:
    code = main([write_input(tmp_path, "2,2\n0,0,S\nM\n"), "--unbounded"])
    assert code == EXIT_OK
    assert capsys.readouterr().out == "0,-1,S\n"


def test_bounded_failure_is_reported_not_fatal(tmp_path, capsys) -> None:
    code = main([write_input(tmp_path, "2,2\n2,2,N\nM\n1,1,E\nM\n")])
    captured = capsys.readouterr()
    assert code == EXIT_OK
    assert captured.out == "2,2,N,OutOfBounds\n2,1,E\n"
    assert "rover 1" in captured.err


def test_fail_on_rover_error(tmp_path, capsys) -> None:
    code = main([write_input(tmp_path, "2,2\n2,2,N\nM\n"), "--fail-on-rover-error"])
    assert code == EXIT_ROVER_ERROR
    assert capsys.readouterr().out == "2,2,N,OutOfBounds\n"


def test_parse_error_produces_no_report(tmp_path, capsys) -> None:
    code = main([write_input(tmp_path, "5\n1,2,N\nM\n")])
    captured = capsys.readouterr()
    assert code == EXIT_FAILURE
    assert captured.out == ""
    assert "malformed record" in captured.err


def test_missing_input_file(tmp_path, capsys) -> None:
    code = main([str(tmp_path / "nope.txt")])
    assert code == EXIT_FAILURE
    assert "could not read" in capsys.readouterr().err


def test_config_file_and_json_format(tmp_path, capsys) -> None:
    cfg_path = tmp_path / "run.yaml"
    cfg_path.write_text(
        "engine:\n  enforce_bounds: false\n  max_workers: 2\nreport:\n  format: json\n",
        encoding="utf-8",
    )
    code = main([write_input(tmp_path, "2,2\n0,0,S\nM\n"), "--config", str(cfg_path)])
    assert code == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data == [{"rover": 1, "x": 0, "y": -1, "direction": "S", "error": None}]


def test_invalid_config(tmp_path, capsys) -> None:
    cfg_path = tmp_path / "run.yaml"
    cfg_path.write_text("report:\n  format: xml\n", encoding="utf-8")
    code = main([write_input(tmp_path, CLASSIC), "--config", str(cfg_path)])
    assert code == EXIT_FAILURE
    assert "invalid configuration" in capsys.readouterr().err


def test_telemetry_and_summary(tmp_path, capsys) -> None:
    log_path = tmp_path / "telemetry.jsonl"
    code = main(
        [write_input(tmp_path, CLASSIC), "--telemetry-path", str(log_path), "--summary"]
    )
    captured = capsys.readouterr()
    assert code == EXIT_OK
    assert "ROVER RUN SUMMARY" in captured.err

    lines = log_path.read_text(encoding="utf-8").splitlines()
    # 10 + 11 trajectory states plus one outcome record per rover
    assert len(lines) == 23


def test_unwritable_telemetry_path_fails_cleanly(tmp_path, capsys) -> None:
    # a directory cannot be opened as the JSONL log
    code = main([write_input(tmp_path, CLASSIC), "--telemetry-path", str(tmp_path)])
    captured = capsys.readouterr()
    assert code == EXIT_FAILURE
    assert captured.out == "1,3,N\n5,1,E\n"
    assert "could not write telemetry" in captured.err


def test_non_mapping_config_fails_cleanly(tmp_path, capsys) -> None:
    cfg_path = tmp_path / "run.yaml"
    cfg_path.write_text("- a\n", encoding="utf-8")
    code = main([write_input(tmp_path, CLASSIC), "--config", str(cfg_path)])
    assert code == EXIT_FAILURE
    assert "invalid configuration" in capsys.readouterr().err


def test_summary_path_saves_json(tmp_path, capsys) -> None:
    summary_path = tmp_path / "runs" / "summary.json"
    code = main([write_input(tmp_path, CLASSIC), "--summary-path", str(summary_path)])
    assert code == EXIT_OK
    assert capsys.readouterr().out == "1,3,N\n5,1,E\n"
    data = json.loads(summary_path.read_text(encoding="utf-8"))
    assert data["num_rovers"] == 2
    assert data["num_failed"] == 0
    assert data["final_bounds"] == [1, 1, 5, 3]
