from sched_engine.algorithms import schedule_rr, schedule_sjf
from sched_engine.gantt import (
    PALETTE,
    assign_colors,
    build_rich_gantt,
    execution_log,
    render_gantt,
    replay_frames,
)
from sched_engine.metrics import format_metric
from sched_engine.models import ExecutionInterval, IntervalKind, ProcessSpec


def _procs():
    return [
        ProcessSpec("P1", arrival_time=0, burst_time=5),
        ProcessSpec("P2", arrival_time=1, burst_time=3),
        ProcessSpec("P3", arrival_time=2, burst_time=8),
    ]


def test_colors_follow_first_appearance():
    res = schedule_rr(_procs(), quantum=2)
    assert assign_colors(res.timeline) == {"P1": PALETTE[0], "P2": PALETTE[1], "P3": PALETTE[2]}


def test_colors_cycle_past_palette():
    timeline = [ExecutionInterval(f"P{i}", i, i + 1) for i in range(len(PALETTE) + 2)]
    colors = assign_colors(timeline)
    assert colors[f"P{len(PALETTE)}"] == PALETTE[0]
    assert colors[f"P{len(PALETTE) + 1}"] == PALETTE[1]


def test_idle_blocks_get_no_color():
    timeline = [
        ExecutionInterval("IDLE", 0, 2, kind=IntervalKind.IDLE),
        ExecutionInterval("P1", 2, 4),
    ]
    assert assign_colors(timeline) == {"P1": PALETTE[0]}


def test_render_gantt_shows_idle_gap():
    res = schedule_sjf([ProcessSpec("P1", 5, 3)])
    chart = render_gantt(res.timeline)
    assert chart.splitlines() == ["Gantt Chart:", "|.....===|", "     P1 ", "0  5  8"]


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_rich_gantt_time_marks():
    res = schedule_sjf(_procs())
    _, time_marks = build_rich_gantt(res.timeline)
    assert time_marks == "0  5  8 16"


def test_execution_log_rows():
    res = schedule_rr(_procs(), quantum=2)
    rows = execution_log(res.timeline)
    assert rows[0] == (1, "P1", 0, 2, 2)
    assert rows[4] == (5, "P2", 8, 9, 1)
    assert len(rows) == len(res.timeline)


def test_replay_frames_grow_one_block_at_a_time():
    res = schedule_rr(_procs(), quantum=2)
    frames = list(replay_frames(res.timeline))
    assert [len(f) for f in frames] == list(range(1, len(res.timeline) + 1))
    assert frames[-1] == res.timeline


def test_format_metric_rounds_for_display():
    res = schedule_sjf(_procs())
    assert format_metric(res.average_waiting_time) == "3.33"
    assert res.average_waiting_time != 3.33
