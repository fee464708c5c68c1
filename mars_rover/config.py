from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from .report import REPORT_FORMATS


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"{name} must be a mapping, got {type(section).__name__}")
    return section


def _flag(section: Dict[str, Any], name: str, key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{name}.{key} must be true or false, got {value!r}")
    return value


def _count(section: Dict[str, Any], name: str, key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name}.{key} must be an integer, got {value!r}")
    return value


@dataclass
class EngineConfig:
    enforce_bounds: bool = True
    max_workers: int = 1
    record_trajectory: bool = False


@dataclass
class ReportConfig:
    format: str = "text"
    output_path: Optional[str] = None
    fail_on_rover_error: bool = False


@dataclass
class LoggingConfig:
    telemetry_path: Optional[str] = None


@dataclass
class RunConfig:
    """Settings for one command-file run (see configs/rovers.yaml)."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> "RunConfig":
        if self.engine.max_workers < 1:
            raise ValueError(f"engine.max_workers must be >= 1, got {self.engine.max_workers}")
        if self.report.format not in REPORT_FORMATS:
            raise ValueError(
                f"report.format must be one of {REPORT_FORMATS}, got {self.report.format!r}"
            )
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        """Build a config from a parsed YAML dict; missing keys keep defaults."""
        if not isinstance(data, dict):
            raise ValueError(f"config must be a mapping, got {type(data).__name__}")
        engine_cfg = _section(data, "engine")
        report_cfg = _section(data, "report")
        logging_cfg = _section(data, "logging")

        engine = EngineConfig(
            enforce_bounds=_flag(engine_cfg, "engine", "enforce_bounds", True),
            max_workers=_count(engine_cfg, "engine", "max_workers", 1),
            record_trajectory=_flag(engine_cfg, "engine", "record_trajectory", False),
        )
        report = ReportConfig(
            format=str(report_cfg.get("format", "text")),
            output_path=report_cfg.get("output_path"),
            fail_on_rover_error=_flag(report_cfg, "report", "fail_on_rover_error", False),
        )
        log = LoggingConfig(telemetry_path=logging_cfg.get("telemetry_path"))
        return cls(engine=engine, report=report, logging=log).validate()


def load_config(path: Optional[str] = None) -> RunConfig:
    """Load a run config from YAML, or return defaults when no path is given."""
    if path is None:
        return RunConfig()
    return RunConfig.from_dict(load_yaml(path))
