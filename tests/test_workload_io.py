from pathlib import Path

import pytest

from sched_engine.errors import InvalidInputError
from sched_engine.models import ProcessSpec
from sched_engine.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], ProcessSpec)
    assert procs[1].arrival_time == 1


def test_load_json_camel_case(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"id":"P1","arrivalTime":0,"burstTime":5}]')
    assert load_workload(p) == [ProcessSpec("P1", 0, 5)]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,3\nB,1,2\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].burst_time == 2


def test_missing_field_rejected(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time\nA,0\n")
    with pytest.raises(InvalidInputError, match="Invalid process entry"):
        load_workload(p)


def test_loaded_workload_is_validated(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":0}]')
    with pytest.raises(InvalidInputError):
        load_workload(p)


def test_json_must_be_a_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid":"A","arrival_time":0,"burst_time":3}')
    with pytest.raises(InvalidInputError):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("A 0 3")
    with pytest.raises(InvalidInputError, match="Unsupported"):
        load_workload(p)


@pytest.mark.parametrize(
    "entry",
    [
        '{"pid":"A","arrival_time":0,"burst_time":2.7}',
        '{"pid":"A","arrival_time":true,"burst_time":3}',
        '{"pid":null,"arrival_time":0,"burst_time":3}',
    ],
)
def test_json_values_are_not_coerced(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(InvalidInputError):
        load_workload(p)


def test_csv_rejects_fractional_times(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,1.5\n")
    with pytest.raises(InvalidInputError, match="Invalid process entry"):
        load_workload(p)
