"""
Scheduler engine package.

Simulates CPU scheduling (SJF, Round Robin, HRRN) over a list of processes
and produces an execution timeline with per-process and average metrics.
"""

from .algorithms import (
    ALGORITHMS,
    DEFAULT_QUANTUM,
    response_ratio,
    run_algorithm,
    schedule_hrrn,
    schedule_rr,
    schedule_sjf,
)
from .errors import InternalInvariantViolation, InvalidInputError, SchedulerError
from .models import (
    ExecutionInterval,
    IntervalKind,
    ProcessSpec,
    ProcessState,
    SimulationResult,
    SystemMetrics,
)

__all__ = [
    "ALGORITHMS",
    "DEFAULT_QUANTUM",
    "ExecutionInterval",
    "IntervalKind",
    "InternalInvariantViolation",
    "InvalidInputError",
    "ProcessSpec",
    "ProcessState",
    "SchedulerError",
    "SimulationResult",
    "SystemMetrics",
    "response_ratio",
    "run_algorithm",
    "schedule_hrrn",
    "schedule_rr",
    "schedule_sjf",
]
