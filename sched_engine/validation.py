from __future__ import annotations

from typing import Any, Sequence

from .errors import InvalidInputError
from .models import ProcessSpec


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid time value
    return isinstance(value, int) and not isinstance(value, bool)


def validate_specs(specs: Sequence[ProcessSpec]) -> None:
    """
    Reject a workload the engine cannot simulate.

    The whole list is checked before any state is created, so a partially
    invalid workload never produces a partial schedule.
    """
    if not specs:
        raise InvalidInputError("At least one process is required")

    seen: set[str] = set()
    for spec in specs:
        if not isinstance(spec, ProcessSpec):
            raise InvalidInputError(f"Expected ProcessSpec, got {type(spec).__name__}")
        if not isinstance(spec.pid, str) or not spec.pid:
            raise InvalidInputError(f"Process id must be a non-empty string, got {spec.pid!r}")
        if spec.pid in seen:
            raise InvalidInputError(f"Duplicate process id '{spec.pid}'")
        seen.add(spec.pid)

        if not _is_int(spec.arrival_time) or spec.arrival_time < 0:
            raise InvalidInputError(
                f"{spec.pid}: arrival time must be a non-negative integer, got {spec.arrival_time!r}"
            )
        if not _is_int(spec.burst_time) or spec.burst_time <= 0:
            raise InvalidInputError(
                f"{spec.pid}: burst time must be a positive integer, got {spec.burst_time!r}"
            )


def validate_quantum(quantum: Any) -> int:
    if quantum is None:
        raise InvalidInputError("Round Robin requires a quantum (use --quantum)")
    if not _is_int(quantum) or quantum <= 0:
        raise InvalidInputError(f"Quantum must be a positive integer, got {quantum!r}")
    return quantum
