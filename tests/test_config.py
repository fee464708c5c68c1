from __future__ import annotations

import os

import pytest

from mars_rover.config import RunConfig, load_config, load_yaml


CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "configs", "rovers.yaml")


def test_shipped_config_matches_defaults() -> None:
    assert load_config(CONFIG_PATH) == RunConfig()


def test_no_path_gives_defaults() -> None:
    cfg = load_config()
    assert cfg.engine.enforce_bounds is True
    assert cfg.engine.max_workers == 1
    assert cfg.report.format == "text"
    assert cfg.logging.telemetry_path is None


def test_partial_config_keeps_defaults(tmp_path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text("engine:\n  enforce_bounds: false\n", encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg.engine.enforce_bounds is False
    assert cfg.engine.max_workers == 1
    assert cfg.report.fail_on_rover_error is False


def test_empty_yaml_file(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_yaml(str(path)) == {}
    assert load_config(str(path)) == RunConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"engine": {"max_workers": 0}},
        {"report": {"format": "xml"}},
    ],
)
def test_invalid_values(data) -> None:
    with pytest.raises(ValueError):
        RunConfig.from_dict(data)


def test_full_config_from_dict() -> None:
    cfg = RunConfig.from_dict(
        {
            "engine": {"enforce_bounds": False, "max_workers": 3, "record_trajectory": True},
            "report": {"format": "json", "output_path": "out.json", "fail_on_rover_error": True},
            "logging": {"telemetry_path": "logs/run.jsonl"},
        }
    )
    assert cfg.engine.max_workers == 3
    assert cfg.engine.record_trajectory is True
    assert cfg.report.output_path == "out.json"
    assert cfg.logging.telemetry_path == "logs/run.jsonl"


@pytest.mark.parametrize(
    "data",
    [
        ["a"],
        {"engine": ["enforce_bounds"]},
        {"engine": {"enforce_bounds": "false"}},
        {"report": {"fail_on_rover_error": 1}},
        {"engine": {"max_workers": "4"}},
        {"engine": {"max_workers": True}},
    ],
)
def test_wrongly_typed_config_is_rejected(data) -> None:
    with pytest.raises(ValueError):
        RunConfig.from_dict(data)


def test_list_yaml_file_is_rejected(tmp_path) -> None:
    path = tmp_path / "run.yaml"
    path.write_text("- a\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config(str(path))
