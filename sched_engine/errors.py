from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the scheduler engine."""


class InvalidInputError(SchedulerError, ValueError):
    """
    Raised when a workload, quantum or algorithm name is rejected before
    a simulation starts. The caller is expected to fix the input and resubmit.
    """


class InternalInvariantViolation(SchedulerError, RuntimeError):
    """
    Raised when the engine reaches a state that validated input can never
    produce. Always indicates a logic defect.
    """
