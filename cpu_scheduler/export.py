"""
JSON export of a finished run.

The record bundles the input processes, the per-process results, the
timeline, the metrics and a UTC timestamp so a run can be archived or
re-plotted elsewhere.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from .models import Metrics, Process, ScheduleResult

logger = logging.getLogger(__name__)


def default_export_name(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"cpu_scheduling_results_{int(now.timestamp() * 1000)}.json"


def build_export_record(
    processes: Iterable[Process],
    result: ScheduleResult,
    metrics: Optional[Metrics],
    now: Optional[datetime] = None,
) -> dict:
    now = now or datetime.now(timezone.utc)
    record = {"processes": [p.to_dict() for p in processes]}
    record.update(result.to_dict())
    record["metrics"] = metrics.to_dict() if metrics is not None else None
    record["timestamp"] = now.isoformat()
    return record


def write_export(record: dict, path: str | Path) -> Path:
    path = Path(path)
    if path.is_dir():
        path = path / default_export_name()

    with path.open("w", encoding="utf-8") as f:
        json.dump(record, f, indent=2)
        f.write("\n")

    logger.info("Exported results to %s", path)
    return path
