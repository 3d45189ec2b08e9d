"""
CPU scheduling simulator.

Runs FCFS, SJF, Priority and Round Robin over a small process list and
reports per-process timings, the execution timeline and aggregate metrics.
"""

from .algorithms import ALGORITHMS, run_algorithm, schedule_fcfs, schedule_priority, schedule_rr, schedule_sjf
from .errors import EmptyInput, InvalidProcess, InvalidQuantum, MissingPriority, SchedulingError, UnknownAlgorithm
from .metrics import compute_metrics
from .models import Metrics, Process, ProcessResult, ScheduleResult, TimelineSegment

__all__ = [
    "ALGORITHMS",
    "EmptyInput",
    "InvalidProcess",
    "InvalidQuantum",
    "Metrics",
    "MissingPriority",
    "Process",
    "ProcessResult",
    "ScheduleResult",
    "SchedulingError",
    "TimelineSegment",
    "UnknownAlgorithm",
    "compute_metrics",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_sjf",
]
