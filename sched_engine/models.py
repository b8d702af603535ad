from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .errors import InternalInvariantViolation

IDLE_PID = "IDLE"


@dataclass(frozen=True)
class ProcessSpec:
    pid: str
    arrival_time: int
    burst_time: int


@dataclass(frozen=True)
class ProcessState:
    """
    Per-process view of a simulation. Completion, turnaround and waiting
    times stay ``None`` until the process finishes.
    """

    pid: str
    arrival_time: int
    burst_time: int
    remaining_time: int
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None

    @classmethod
    def pending(cls, spec: ProcessSpec) -> "ProcessState":
        return cls(
            pid=spec.pid,
            arrival_time=spec.arrival_time,
            burst_time=spec.burst_time,
            remaining_time=spec.burst_time,
        )

    @property
    def is_finished(self) -> bool:
        return self.completion_time is not None

    def finished(self, completion_time: int) -> "ProcessState":
        if self.is_finished:
            raise InternalInvariantViolation(f"{self.pid} finalized twice")

        turnaround_time = completion_time - self.arrival_time
        waiting_time = turnaround_time - self.burst_time
        if waiting_time < 0:
            raise InternalInvariantViolation(
                f"{self.pid} would finish at {completion_time} with negative waiting time {waiting_time}"
            )

        return replace(
            self,
            remaining_time=0,
            completion_time=completion_time,
            turnaround_time=turnaround_time,
            waiting_time=waiting_time,
        )


class IntervalKind(Enum):
    PROCESS = "process"
    IDLE = "idle"


@dataclass(frozen=True)
class ExecutionInterval:
    """
    One contiguous block of the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int
    kind: IntervalKind = IntervalKind.PROCESS

    def __post_init__(self) -> None:
        if self.end_time <= self.start_time:
            raise InternalInvariantViolation(
                f"empty interval for {self.pid}: [{self.start_time}, {self.end_time})"
            )

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.kind is IntervalKind.IDLE


@dataclass(frozen=True)
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    starvation_count: int = 0


@dataclass(frozen=True)
class SimulationResult:
    algorithm: str
    quantum: Optional[int]
    timeline: Tuple[ExecutionInterval, ...] = ()
    processes: Tuple[ProcessState, ...] = ()
    average_waiting_time: float = 0.0
    average_turnaround_time: float = 0.0
    system: Optional[SystemMetrics] = None

    @property
    def busy_timeline(self) -> Tuple[ExecutionInterval, ...]:
        return tuple(iv for iv in self.timeline if not iv.is_idle)
