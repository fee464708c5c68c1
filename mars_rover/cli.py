from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import yaml

from telemetry.logger import TelemetryLogger

from .config import RunConfig, load_config
from .engine import ExecutionEngine
from .errors import ParseError
from .metrics import format_summary_table, summarize
from .parser import parse
from .report import REPORT_FORMATS, failed, format_report, write_report


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_ROVER_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mars-rover",
        description="Run rover instructions from a command file and report final positions.",
    )
    parser.add_argument("input_path", type=str, help="Path to the instructions file.")
    parser.add_argument(
        "-u",
        "--unbounded",
        action="store_true",
        help="Let rovers leave the plateau instead of stopping them at its edge.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Save the report to this path. By default it is printed to stdout.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a run YAML config (e.g. configs/rovers.yaml).",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=REPORT_FORMATS,
        default=None,
        help="Report format.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of threads used to run rovers.",
    )
    parser.add_argument(
        "--telemetry-path",
        type=str,
        default=None,
        help="Append per-step rover trajectories to this JSONL file.",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a run summary table to stderr.",
    )
    parser.add_argument(
        "--summary-path",
        type=str,
        default=None,
        help="Save the run summary as JSON to this path.",
    )
    parser.add_argument(
        "--fail-on-rover-error",
        action="store_true",
        help="Exit with status 2 when any rover is stopped at the plateau edge.",
    )
    return parser


def apply_overrides(cfg: RunConfig, args: argparse.Namespace) -> RunConfig:
    """Command-line flags take precedence over the config file."""
    if args.unbounded:
        cfg.engine.enforce_bounds = False
    if args.workers is not None:
        cfg.engine.max_workers = args.workers
    if args.output is not None:
        cfg.report.output_path = args.output
    if args.format is not None:
        cfg.report.format = args.format
    if args.fail_on_rover_error:
        cfg.report.fail_on_rover_error = True
    if args.telemetry_path is not None:
        cfg.logging.telemetry_path = args.telemetry_path
    if cfg.logging.telemetry_path:
        cfg.engine.record_trajectory = True
    return cfg.validate()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = apply_overrides(load_config(args.config), args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Rover error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        with open(args.input_path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as exc:
        print(f"Rover error: could not read instructions file: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        mission = parse(text)
    except ParseError as exc:
        print(f"Rover error: could not parse {args.input_path}: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    engine = ExecutionEngine.for_mission(
        mission,
        enforce_bounds=cfg.engine.enforce_bounds,
        max_workers=cfg.engine.max_workers,
        record_trajectory=cfg.engine.record_trajectory,
    )
    results = engine.run(mission.rovers)

    try:
        write_report(format_report(results, cfg.report.format), cfg.report.output_path)
    except OSError as exc:
        print(f"Rover error: could not save the report: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if cfg.logging.telemetry_path:
        try:
            with TelemetryLogger(cfg.logging.telemetry_path) as telemetry_logger:
                for result in results:
                    telemetry_logger.log_result(result)
        except OSError as exc:
            print(f"Rover error: could not write telemetry: {exc}", file=sys.stderr)
            return EXIT_FAILURE

    stopped = failed(results)
    for result in stopped:
        print(f"Rover warning: {result.error}", file=sys.stderr)

    if args.summary or args.summary_path:
        summary = summarize(mission.rovers, results)
        if args.summary:
            print(format_summary_table(summary), file=sys.stderr)
        if args.summary_path:
            try:
                summary.save(args.summary_path)
            except OSError as exc:
                print(f"Rover error: could not save the summary: {exc}", file=sys.stderr)
                return EXIT_FAILURE
            print(f"Saved run summary to {args.summary_path}", file=sys.stderr)

    if stopped and cfg.report.fail_on_rover_error:
        return EXIT_ROVER_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
