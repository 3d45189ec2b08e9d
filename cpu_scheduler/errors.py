"""
Exceptions raised when a simulation run is rejected.

All of them derive from ``ValueError`` so callers that already guard
scheduler calls with ``except ValueError`` keep working.
"""

from __future__ import annotations


class SchedulingError(ValueError):
    """Base class for every rejected simulation run."""


class EmptyInput(SchedulingError):
    pass


class InvalidProcess(SchedulingError):
    pass


class MissingPriority(SchedulingError):
    pass


class InvalidQuantum(SchedulingError):
    pass


class UnknownAlgorithm(SchedulingError):
    pass
