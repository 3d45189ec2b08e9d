from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Mapping

from .models import Process


class WorkloadError(ValueError):
    """Raised when a workload file cannot be turned into processes."""


# Sample set offered as a starting point: five processes with priorities so
# every algorithm can run on it unchanged.
EXAMPLE_WORKLOAD = (
    Process("P1", arrival_time=0, burst_time=5, priority=2),
    Process("P2", arrival_time=1, burst_time=3, priority=1),
    Process("P3", arrival_time=2, burst_time=8, priority=3),
    Process("P4", arrival_time=3, burst_time=6, priority=2),
    Process("P5", arrival_time=4, burst_time=4, priority=1),
)

_ALIASES = {
    "pid": ("pid", "id"),
    "arrival_time": ("arrival_time", "arrival"),
    "burst_time": ("burst_time", "burst"),
}


def example_workload() -> List[Process]:
    return list(EXAMPLE_WORKLOAD)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if not path.exists():
        raise WorkloadError(f"Workload not found: {path}")
    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise WorkloadError(f"Invalid JSON in {path}: {exc}") from exc
    except (UnicodeDecodeError, OSError) as exc:
        raise WorkloadError(f"Cannot read workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
    except (UnicodeDecodeError, OSError, csv.Error) as exc:
        raise WorkloadError(f"Cannot read workload {path}: {exc}") from exc

    return [_process_from_mapping(row) for row in rows]


def _lookup(mapping: Mapping, field: str):
    for key in _ALIASES.get(field, (field,)):
        value = mapping.get(key)
        if value not in (None, ""):
            return value
    raise KeyError(field)


def _as_int(value) -> int:
    # JSON gives real numbers, CSV gives strings; fractions and booleans are rejected.
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"expected an integer, got {value!r}")


def _process_from_mapping(mapping) -> Process:
    if not isinstance(mapping, Mapping):
        raise WorkloadError(f"Invalid process entry: {mapping!r}")

    try:
        pid = str(_lookup(mapping, "pid"))
        arrival_time = _as_int(_lookup(mapping, "arrival_time"))
        burst_time = _as_int(_lookup(mapping, "burst_time"))
        priority_val = mapping.get("priority")
        priority = _as_int(priority_val) if priority_val not in (None, "") else None
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
