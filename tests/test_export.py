import json
from datetime import datetime, timezone
from pathlib import Path

from cpu_scheduler.algorithms import schedule_rr
from cpu_scheduler.export import build_export_record, default_export_name, write_export
from cpu_scheduler.metrics import compute_metrics
from cpu_scheduler.models import Process

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _record():
    procs = [
        Process("P1", arrival_time=0, burst_time=5),
        Process("P2", arrival_time=1, burst_time=3),
    ]
    result = schedule_rr(procs, quantum=2)
    return build_export_record(procs, result, compute_metrics(result.results), now=NOW)


def test_record_contents():
    record = _record()
    assert record["algorithm"] == "Round Robin"
    assert record["quantum"] == 2
    assert [p["pid"] for p in record["processes"]] == ["P1", "P2"]
    assert [r["completion_time"] for r in record["results"]] == [8, 7]
    assert record["timeline"][0] == {"pid": "P1", "start_time": 0, "end_time": 2, "duration": 2}
    assert record["metrics"]["total_time"] == 8
    assert record["timestamp"] == "2024-01-01T00:00:00+00:00"


def test_record_is_json_serialisable():
    record = _record()
    assert json.loads(json.dumps(record)) == record


def test_write_export_to_file(tmp_path: Path):
    target = tmp_path / "run.json"
    written = write_export(_record(), target)
    assert written == target
    assert json.loads(target.read_text(encoding="utf-8"))["quantum"] == 2


def test_write_export_to_directory(tmp_path: Path):
    written = write_export(_record(), tmp_path)
    assert written.parent == tmp_path
    assert written.name.startswith("cpu_scheduling_results_")
    assert written.suffix == ".json"


def test_default_export_name():
    assert default_export_name(NOW) == "cpu_scheduling_results_1704067200000.json"
