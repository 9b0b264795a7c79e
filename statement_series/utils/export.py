"""
Value series export: JSON files and the plain text report.
"""

import json
from pathlib import Path
from typing import List, Union

import structlog

from ..models import Value

logger = structlog.get_logger()


def values_to_json(values: List[Value]) -> List[dict]:
    return [v.to_dict() for v in values]


def write_json_values(values: List[Value], path: Union[str, Path]) -> Path:
    """Write values as an ordered JSON list of {date, source, value}."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(values_to_json(values), f, indent=2, ensure_ascii=False)
    logger.info("Values exported", path=str(path), count=len(values))
    return path


def read_json_values(path: Union[str, Path]) -> List[Value]:
    with open(path, "r", encoding="utf-8") as f:
        return [Value.from_dict(item) for item in json.load(f)]


def format_cents(cents: int, width: int = 0) -> str:
    """Render cents as major.minor units, right aligned on width digits."""
    sign = "-" if cents < 0 else ""
    major, minor = divmod(abs(cents), 100)
    return f"{sign}{major}".rjust(width) + f".{minor:02d}"


def format_report(values: List[Value]) -> str:
    """
    One line per value: date, balance, change since the previous line and
    source. The first line shows a zero change.
    """
    lines = []
    prev = None
    for v in values:
        delta = 0 if prev is None else v.value - prev
        prev = v.value
        lines.append(
            f"{v.date.isoformat()} - {format_cents(v.value, 6)} / "
            f"{format_cents(delta, 4)} - {v.source}"
        )
    return "\n".join(lines)
