import dataclasses

import pytest

from sched_engine.algorithms import (
    _idle_until,
    _next_arrival,
    run_algorithm,
    schedule_hrrn,
    schedule_rr,
    schedule_sjf,
)
from sched_engine.errors import InternalInvariantViolation, InvalidInputError
from sched_engine.models import ExecutionInterval, ProcessSpec, ProcessState


def _ok():
    return [ProcessSpec("P1", 0, 3), ProcessSpec("P2", 1, 2)]


@pytest.mark.parametrize("schedule", [schedule_sjf, schedule_hrrn])
def test_empty_workload_rejected(schedule):
    with pytest.raises(InvalidInputError):
        schedule([])


@pytest.mark.parametrize(
    "bad",
    [
        ProcessSpec("P1", 0, 0),
        ProcessSpec("P1", 0, -2),
        ProcessSpec("P1", -1, 3),
        ProcessSpec("P1", 0, True),
        ProcessSpec("P1", 0.5, 3),
        ProcessSpec("", 0, 3),
    ],
)
def test_bad_process_rejected(bad):
    with pytest.raises(InvalidInputError):
        schedule_sjf([ProcessSpec("P0", 0, 1), bad])


def test_duplicate_ids_rejected():
    with pytest.raises(InvalidInputError, match="Duplicate"):
        schedule_hrrn([ProcessSpec("P1", 0, 3), ProcessSpec("P1", 2, 2)])


@pytest.mark.parametrize("quantum", [None, 0, -3, 1.5])
def test_bad_quantum_rejected(quantum):
    with pytest.raises(InvalidInputError):
        schedule_rr(_ok(), quantum=quantum)


def test_unknown_algorithm_rejected():
    with pytest.raises(InvalidInputError, match="fcfs"):
        run_algorithm("fcfs", _ok())


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        schedule_rr(_ok(), quantum=0)


def test_process_state_finalizes_once():
    state = ProcessState.pending(ProcessSpec("P1", 2, 3)).finished(7)
    assert (state.completion_time, state.turnaround_time, state.waiting_time) == (7, 5, 2)
    with pytest.raises(InternalInvariantViolation):
        state.finished(9)


def test_negative_waiting_time_is_a_defect():
    with pytest.raises(InternalInvariantViolation):
        ProcessState.pending(ProcessSpec("P1", 2, 3)).finished(4)


def test_empty_interval_is_a_defect():
    with pytest.raises(InternalInvariantViolation):
        ExecutionInterval("P1", 4, 4)


def test_result_is_frozen():
    res = schedule_sjf(_ok())
    with pytest.raises(dataclasses.FrozenInstanceError):
        res.average_waiting_time = 0.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        res.processes[0].waiting_time = 0


def test_idle_advance_without_pending_processes_is_a_defect():
    states = [ProcessState.pending(ProcessSpec("P1", 0, 3)).finished(3)]
    with pytest.raises(InternalInvariantViolation):
        _next_arrival(states, [])


def test_idle_advance_must_move_the_clock():
    with pytest.raises(InternalInvariantViolation):
        _idle_until(5, 5, [], include_idle=False)
    with pytest.raises(InternalInvariantViolation):
        _idle_until(5, 3, [], include_idle=True)
