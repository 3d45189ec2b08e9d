from __future__ import annotations

from typing import Iterable, Optional

from .models import Metrics, ProcessResult


def compute_metrics(results: Iterable[ProcessResult]) -> Optional[Metrics]:
    """
    Compute averages, CPU utilization and throughput for a finished run.

    Returns ``None`` for an empty result list instead of dividing by zero.
    """
    results = list(results)
    if not results:
        return None

    n = len(results)
    total_time = max(r.completion_time for r in results)
    cpu_busy_time = sum(r.burst_time for r in results)

    return Metrics(
        avg_waiting=sum(r.waiting_time for r in results) / n,
        avg_turnaround=sum(r.turnaround_time for r in results) / n,
        total_time=total_time,
        cpu_utilization=100 * cpu_busy_time / total_time,
        throughput=n / total_time,
        cpu_busy_time=cpu_busy_time,
        process_count=n,
    )
