from __future__ import annotations

import logging
from collections import deque
from dataclasses import replace
from fractions import Fraction
from typing import Callable, Deque, Iterable, List, Optional, Sequence, Union

from .errors import InternalInvariantViolation, InvalidInputError
from .metrics import build_result
from .models import (
    IDLE_PID,
    ExecutionInterval,
    IntervalKind,
    ProcessSpec,
    ProcessState,
    SimulationResult,
)
from .validation import validate_quantum, validate_specs

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2

# (ready indices, states, current time) -> index of the process to run
Selector = Callable[[List[int], List[ProcessState], int], int]


def _next_arrival(states: Sequence[ProcessState], candidates: Iterable[int]) -> int:
    arrivals = [states[i].arrival_time for i in candidates]
    if not arrivals:
        raise InternalInvariantViolation("CPU idle but no process is left to arrive")
    return min(arrivals)


def _idle_until(time: int, target: int, timeline: List[ExecutionInterval], include_idle: bool) -> int:
    """
    Jump the clock across an idle gap. Only records the gap when asked to.
    """
    if target <= time:
        raise InternalInvariantViolation(f"idle advance from {time} to {target} does not move the clock")

    logger.debug("CPU idle from t=%d to t=%d", time, target)
    if include_idle:
        timeline.append(
            ExecutionInterval(pid=IDLE_PID, start_time=time, end_time=target, kind=IntervalKind.IDLE)
        )
    return target


def _schedule_non_preemptive(
    specs: Sequence[ProcessSpec],
    algorithm: str,
    select: Selector,
    include_idle: bool,
) -> SimulationResult:
    """
    Shared loop for disciplines that run the selected process to completion.
    """
    specs = list(specs)
    validate_specs(specs)

    states = [ProcessState.pending(spec) for spec in specs]

    time = 0
    timeline: List[ExecutionInterval] = []

    while not all(s.is_finished for s in states):
        pending = [i for i, s in enumerate(states) if not s.is_finished]
        ready = [i for i in pending if states[i].arrival_time <= time]

        if not ready:
            time = _idle_until(time, _next_arrival(states, pending), timeline, include_idle)
            continue

        idx = select(ready, states, time)
        p = states[idx]

        start_time = time
        end_time = start_time + p.burst_time
        logger.debug("%s: t=%d run %s until t=%d", algorithm, start_time, p.pid, end_time)

        timeline.append(ExecutionInterval(pid=p.pid, start_time=start_time, end_time=end_time))

        states[idx] = p.finished(end_time)
        time = end_time

    return build_result(algorithm, None, timeline, states)


def _shortest_burst(ready: List[int], states: List[ProcessState], time: int) -> int:
    # Smallest burst time; tie-breaker: earlier arrival, then input order.
    return min(ready, key=lambda i: (states[i].burst_time, states[i].arrival_time, i))


def schedule_sjf(
    processes: Sequence[ProcessSpec], quantum: Optional[int] = None, *, include_idle: bool = False
) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time.
    """
    return _schedule_non_preemptive(processes, "SJF (non-preemptive)", _shortest_burst, include_idle)


def _exact_ratio(p: Union[ProcessSpec, ProcessState], clock: int) -> Fraction:
    return Fraction(clock - p.arrival_time + p.burst_time, p.burst_time)


def response_ratio(p: Union[ProcessSpec, ProcessState], clock: int) -> float:
    """
    (time waited so far + burst time) / burst time.

    Equals 1.0 at arrival and grows with every unit of waiting.
    """
    if clock < p.arrival_time:
        raise InvalidInputError(f"{p.pid} has not arrived at t={clock}")
    return float(_exact_ratio(p, clock))


def _highest_ratio(ready: List[int], states: List[ProcessState], time: int) -> int:
    # Ratios are compared as fractions so equal ratios really tie and fall
    # through to earlier arrival, then input order.
    return max(ready, key=lambda i: (_exact_ratio(states[i], time), -states[i].arrival_time, -i))


def schedule_hrrn(
    processes: Sequence[ProcessSpec], quantum: Optional[int] = None, *, include_idle: bool = False
) -> SimulationResult:
    """
    Highest Response Ratio Next (non-preemptive).

    Among ready processes, run the one that has waited longest relative to
    its burst time, so long jobs cannot starve behind a stream of short ones.
    """
    return _schedule_non_preemptive(processes, "HRRN", _highest_ratio, include_idle)


def schedule_rr(
    processes: Sequence[ProcessSpec], quantum: Optional[int] = None, *, include_idle: bool = False
) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs join the queue before the
    preempted process is put back at its tail.
    """
    specs = list(processes)
    validate_specs(specs)
    quantum = validate_quantum(quantum)

    states = [ProcessState.pending(spec) for spec in specs]
    n = len(states)

    time = 0
    completed = 0
    timeline: List[ExecutionInterval] = []

    # Ready queue as indices into states
    ready: Deque[int] = deque()
    queued = [False] * n

    def enqueue(i: int) -> None:
        # A process is never resident in the queue twice.
        if not queued[i]:
            ready.append(i)
            queued[i] = True

    for i, s in enumerate(states):
        if s.arrival_time == 0:
            enqueue(i)

    while completed < n:
        if not ready:
            waiting = [i for i, s in enumerate(states) if s.remaining_time > 0 and not queued[i]]
            time = _idle_until(time, _next_arrival(states, waiting), timeline, include_idle)
            for i, s in enumerate(states):
                if s.remaining_time > 0 and s.arrival_time <= time:
                    enqueue(i)
            continue

        idx = ready.popleft()
        queued[idx] = False
        p = states[idx]

        run_time = min(quantum, p.remaining_time)
        slice_start = time
        slice_end = time + run_time
        logger.debug("Round Robin: t=%d run %s for %d", slice_start, p.pid, run_time)

        timeline.append(ExecutionInterval(pid=p.pid, start_time=slice_start, end_time=slice_end))

        time = slice_end
        states[idx] = p = replace(p, remaining_time=p.remaining_time - run_time)

        # Arrivals during this slice go first...
        for i, s in enumerate(states):
            if s.remaining_time > 0 and slice_start < s.arrival_time <= slice_end:
                enqueue(i)

        # ...then the preempted process goes back to the tail.
        if p.remaining_time > 0:
            enqueue(idx)
        else:
            states[idx] = p.finished(time)
            completed += 1

    return build_result("Round Robin", quantum, timeline, states)


ALGORITHMS = {
    "sjf": schedule_sjf,
    "rr": schedule_rr,
    "hrrn": schedule_hrrn,
}


def run_algorithm(
    name: str,
    processes: Sequence[ProcessSpec],
    quantum: Optional[int] = None,
    *,
    include_idle: bool = False,
) -> SimulationResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise InvalidInputError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[key]
    return func(processes, quantum=quantum, include_idle=include_idle)
