from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import InternalInvariantViolation
from .models import ExecutionInterval, ProcessState, SimulationResult, SystemMetrics


def compute_system_metrics(
    processes: Sequence[ProcessState], timeline: Sequence[ExecutionInterval]
) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given finished per-process states
    and timeline intervals. Idle intervals do not count as busy time.
    """
    if not processes:
        return SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(p.completion_time for p in processes)
    cpu_busy_time = sum(iv.duration for iv in timeline if not iv.is_idle)

    throughput = len(processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    # Count processes whose waiting time is more than 2x the average waiting time.
    avg_wait = sum(p.waiting_time for p in processes) / len(processes)
    starvation_count = sum(1 for p in processes if p.waiting_time > 2 * avg_wait)

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        starvation_count=starvation_count,
    )


def build_result(
    algorithm: str,
    quantum: Optional[int],
    timeline: List[ExecutionInterval],
    states: Sequence[ProcessState],
) -> SimulationResult:
    """
    Freeze a finished run into a SimulationResult. Averages are computed once,
    here, over finalized states only.
    """
    unfinished = [s.pid for s in states if not s.is_finished]
    if unfinished:
        raise InternalInvariantViolation(f"simulation ended with unfinished processes: {unfinished}")

    n = len(states)
    return SimulationResult(
        algorithm=algorithm,
        quantum=quantum,
        timeline=tuple(timeline),
        processes=tuple(states),
        average_waiting_time=sum(s.waiting_time for s in states) / n,
        average_turnaround_time=sum(s.turnaround_time for s in states) / n,
        system=compute_system_metrics(states, timeline),
    )


def format_metric(value: float) -> str:
    return f"{value:.2f}"
