from __future__ import annotations

import json
import os
from typing import Iterable, List, Optional

from .rover import RoverResult


REPORT_FORMATS = ("text", "json")


def format_result(result: RoverResult) -> str:
    """``x,y,D`` for a finished rover, ``x,y,D,<ErrorTag>`` for a stopped one."""
    x, y, letter = result.as_triple()
    fields = [str(x), str(y), letter]
    if result.error_tag is not None:
        fields.append(result.error_tag)
    return ",".join(fields)


def format_report(results: Iterable[RoverResult], fmt: str = "text") -> str:
    results = list(results)
    if fmt == "text":
        return "\n".join(format_result(r) for r in results)
    if fmt == "json":
        return json.dumps([r.to_dict() for r in results], indent=2)
    raise ValueError(f"unknown report format {fmt!r}, expected one of {REPORT_FORMATS}")


def write_report(report: str, path: Optional[str] = None) -> None:
    """Write the report to ``path``, or print it when no path is given."""
    if path is None:
        print(report)
        return
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(report)
        if report:
            f.write("\n")


def failed(results: Iterable[RoverResult]) -> List[RoverResult]:
    return [r for r in results if not r.ok]
