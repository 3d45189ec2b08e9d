from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class TimelineSegment:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def to_dict(self) -> dict:
        data = asdict(self)
        data["duration"] = self.duration
        return data


@dataclass(frozen=True)
class ProcessResult:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int
    response_time: int
    priority: Optional[int] = None

    @classmethod
    def from_process(cls, process: Process, start_time: int, completion_time: int) -> "ProcessResult":
        turnaround_time = completion_time - process.arrival_time
        return cls(
            pid=process.pid,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            start_time=start_time,
            completion_time=completion_time,
            turnaround_time=turnaround_time,
            waiting_time=turnaround_time - process.burst_time,
            response_time=start_time - process.arrival_time,
            priority=process.priority,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Metrics:
    avg_waiting: float
    avg_turnaround: float
    total_time: int
    cpu_utilization: float
    throughput: float
    cpu_busy_time: int
    process_count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    results: Tuple[ProcessResult, ...] = field(default_factory=tuple)
    timeline: Tuple[TimelineSegment, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "algorithm": self.algorithm,
            "quantum": self.quantum,
            "results": [r.to_dict() for r in self.results],
            "timeline": [s.to_dict() for s in self.timeline],
        }
