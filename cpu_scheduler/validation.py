from __future__ import annotations

from typing import Iterable, List

from .errors import EmptyInput, InvalidProcess, InvalidQuantum, MissingPriority
from .models import Process


def _is_int(value) -> bool:
    # bool is an int subclass but never a valid time value.
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Iterable[Process], require_priority: bool = False) -> List[Process]:
    """
    Check a process list before simulating it and return it as a new list.

    The whole run is rejected on the first problem found; nothing is
    simulated for a partially valid input.
    """
    checked: List[Process] = list(processes)
    if not checked:
        raise EmptyInput("At least one process is required")

    seen: set[str] = set()
    for p in checked:
        if not isinstance(p.pid, str) or not p.pid:
            raise InvalidProcess(f"Process id must be a non-empty string (got {p.pid!r})")
        if p.pid in seen:
            raise InvalidProcess(f"Duplicate process id '{p.pid}'")
        seen.add(p.pid)

        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidProcess(f"{p.pid}: arrival time must be an integer >= 0 (got {p.arrival_time!r})")
        if not _is_int(p.burst_time) or p.burst_time <= 0:
            raise InvalidProcess(f"{p.pid}: burst time must be an integer > 0 (got {p.burst_time!r})")

        if p.priority is None:
            if require_priority:
                raise MissingPriority(f"{p.pid}: priority scheduling requires a priority for every process")
        elif not _is_int(p.priority) or p.priority <= 0:
            raise InvalidProcess(f"{p.pid}: priority must be an integer > 0 (got {p.priority!r})")

    return checked


def validate_quantum(quantum) -> int:
    if quantum is None:
        raise InvalidQuantum("Round Robin requires a time quantum")
    if not _is_int(quantum) or quantum <= 0:
        raise InvalidQuantum(f"Time quantum must be a positive integer (got {quantum!r})")
    return quantum
