from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Union

from .errors import InvalidInputError
from .models import ProcessSpec
from .validation import validate_specs

logger = logging.getLogger(__name__)

# Accepted column names, snake_case first.
_PID_KEYS = ("pid", "id")
_ARRIVAL_KEYS = ("arrival_time", "arrivalTime")
_BURST_KEYS = ("burst_time", "burstTime")


def load_workload(path: Union[str, Path]) -> List[ProcessSpec]:
    """
    Load a workload from a JSON or CSV file into a validated list of ProcessSpec.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        specs = _load_json(path)
    elif suffix == ".csv":
        specs = _load_csv(path)
    else:
        raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    validate_specs(specs)
    logger.info("Loaded %d processes from %s", len(specs), path)
    return specs


def _load_json(path: Path) -> List[ProcessSpec]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise InvalidInputError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[ProcessSpec]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return [_process_from_mapping(row) for row in reader]


def _lookup(mapping, keys):
    for key in keys:
        if key in mapping:
            return mapping[key]
    raise KeyError(keys[0])


def _time_value(value):
    # CSV cells are text; JSON values go to validate_specs unchanged.
    if isinstance(value, str):
        return int(value.strip())
    return value


def _process_from_mapping(mapping) -> ProcessSpec:
    try:
        raw_pid = _lookup(mapping, _PID_KEYS)
        if raw_pid is None:
            raise ValueError("missing pid")
        pid = str(raw_pid).strip()
        arrival_time = _time_value(_lookup(mapping, _ARRIVAL_KEYS))
        burst_time = _time_value(_lookup(mapping, _BURST_KEYS))
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid process entry: {mapping!r}") from exc

    return ProcessSpec(pid=pid, arrival_time=arrival_time, burst_time=burst_time)
