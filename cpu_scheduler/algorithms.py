from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Optional, Tuple

from .errors import UnknownAlgorithm
from .models import Process, ProcessResult, ScheduleResult, TimelineSegment
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)


def _by_pid(results: List[ProcessResult]) -> Tuple[ProcessResult, ...]:
    return tuple(sorted(results, key=lambda r: r.pid))


def schedule_fcfs(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Ties on arrival keep the caller's input order. Results are reported in
    execution order.
    """
    processes_sorted = sorted(validate_processes(processes), key=lambda p: p.arrival_time)

    time = 0
    timeline: List[TimelineSegment] = []
    results: List[ProcessResult] = []

    for p in processes_sorted:
        if time < p.arrival_time:
            logger.debug("t=%d: CPU idle until %d", time, p.arrival_time)
            time = p.arrival_time

        start_time = time
        end_time = start_time + p.burst_time
        logger.debug("t=%d: dispatch %s until %d", start_time, p.pid, end_time)

        timeline.append(TimelineSegment(pid=p.pid, start_time=start_time, end_time=end_time))
        results.append(ProcessResult.from_process(p, start_time=start_time, completion_time=end_time))

        time = end_time

    logger.info("FCFS finished %d processes at t=%d", len(results), time)
    return ScheduleResult(algorithm="FCFS", quantum=None, results=tuple(results), timeline=tuple(timeline))


def _schedule_non_preemptive(
    processes: List[Process],
    selector: Callable[[Process], int],
    algorithm: str,
) -> ScheduleResult:
    """
    Shared loop for SJF and Priority.

    Arrived processes sit in a heap keyed on (selector value, arrival time,
    input position), so the lowest selector value wins, then the earliest
    arrival, then whichever the caller listed first.
    """
    pending = sorted(enumerate(processes), key=lambda item: item[1].arrival_time)
    ready: List[Tuple[int, int, int]] = []

    time = 0
    next_idx = 0
    timeline: List[TimelineSegment] = []
    results: List[ProcessResult] = []

    while next_idx < len(pending) or ready:
        # Release everything that has arrived by now.
        while next_idx < len(pending) and pending[next_idx][1].arrival_time <= time:
            order, p = pending[next_idx]
            heapq.heappush(ready, (selector(p), p.arrival_time, order))
            next_idx += 1

        if not ready:
            # If nothing is ready, jump time to the next arrival.
            next_arrival = pending[next_idx][1].arrival_time
            logger.debug("t=%d: CPU idle until %d", time, next_arrival)
            time = next_arrival
            continue

        _, _, order = heapq.heappop(ready)
        p = processes[order]

        start_time = time
        end_time = start_time + p.burst_time
        logger.debug("t=%d: dispatch %s until %d", start_time, p.pid, end_time)

        timeline.append(TimelineSegment(pid=p.pid, start_time=start_time, end_time=end_time))
        results.append(ProcessResult.from_process(p, start_time=start_time, completion_time=end_time))

        time = end_time

    logger.info("%s finished %d processes at t=%d", algorithm, len(results), time)
    return ScheduleResult(algorithm=algorithm, quantum=None, results=_by_pid(results), timeline=tuple(timeline))


def schedule_sjf(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time (tie-breaker:
    earlier arrival, then input order).
    """
    checked = validate_processes(processes)
    return _schedule_non_preemptive(checked, lambda p: p.burst_time, "SJF (non-preemptive)")


def schedule_priority(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Every process must
    carry a priority; ties break on earlier arrival, then input order.
    """
    checked = validate_processes(processes, require_priority=True)
    return _schedule_non_preemptive(checked, lambda p: p.priority, "Priority (non-preemptive)")


def schedule_rr(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs join the ready queue before the
    preempted process goes back to the tail.
    """
    quantum = validate_quantum(quantum)
    processes_sorted = sorted(validate_processes(processes), key=lambda p: p.arrival_time)

    # Remaining burst time per PID
    remaining: Dict[str, int] = {p.pid: p.burst_time for p in processes_sorted}
    proc_by_pid = {p.pid: p for p in processes_sorted}
    first_start: Dict[str, int] = {}

    time = 0
    next_idx = 0
    timeline: List[TimelineSegment] = []
    results: List[ProcessResult] = []
    ready: Deque[str] = deque()

    def enqueue_new_arrivals(current_time: int) -> None:
        nonlocal next_idx
        while next_idx < len(processes_sorted) and processes_sorted[next_idx].arrival_time <= current_time:
            ready.append(processes_sorted[next_idx].pid)
            next_idx += 1

    # Initialize with processes that arrive at time 0
    enqueue_new_arrivals(time)

    while ready or next_idx < len(processes_sorted):
        if not ready:
            # Jump to next arrival if CPU is idle
            next_arrival = processes_sorted[next_idx].arrival_time
            logger.debug("t=%d: CPU idle until %d", time, next_arrival)
            time = next_arrival
            enqueue_new_arrivals(time)

        pid = ready.popleft()
        first_start.setdefault(pid, time)

        run_time = min(quantum, remaining[pid])
        slice_end = time + run_time
        logger.debug("t=%d: dispatch %s for %d", time, pid, run_time)
        timeline.append(TimelineSegment(pid=pid, start_time=time, end_time=slice_end))

        time = slice_end
        remaining[pid] -= run_time

        # Enqueue any new arrivals that appeared during this slice
        enqueue_new_arrivals(time)

        if remaining[pid] > 0:
            ready.append(pid)
        else:
            results.append(
                ProcessResult.from_process(proc_by_pid[pid], start_time=first_start[pid], completion_time=time)
            )

    logger.info("Round Robin (q=%d) finished %d processes at t=%d", quantum, len(results), time)
    return ScheduleResult(algorithm="Round Robin", quantum=quantum, results=_by_pid(results), timeline=tuple(timeline))


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    key = name.lower() if isinstance(name, str) else None
    if key not in ALGORITHMS:
        raise UnknownAlgorithm(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[key]
    return func(processes, quantum=quantum)
