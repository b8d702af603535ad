from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM, run_algorithm
from .errors import InvalidInputError
from .gantt import build_rich_gantt, execution_log, render_gantt, replay_frames
from .metrics import format_metric
from .models import SimulationResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sched-engine",
        description="CPU scheduling simulator (SJF, RR, HRRN).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING). DEBUG traces every scheduling decision.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (sjf, rr, hrrn).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by SJF and HRRN).",
    )
    run_parser.add_argument(
        "--show-idle",
        action="store_true",
        help="Record idle gaps as IDLE blocks in the timeline.",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of colored blocks.",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the Gantt chart one block at a time before the summary.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: sjf rr hrrn).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _print_result(result: SimulationResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    proc_table = Table(title="Scheduling metrics", box=box.SIMPLE_HEAVY)
    for h in ["Process", "AT", "BT", "CT", "TAT", "WT"]:
        proc_table.add_column(h, justify="center" if h == "Process" else "right")

    for p in result.processes:
        proc_table.add_row(
            escape(p.pid),
            str(p.arrival_time),
            str(p.burst_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
        )

    console.print(proc_table)
    console.print("[dim]AT = Arrival Time | BT = Burst Time | CT = Completion Time | "
                  "TAT = Turnaround Time | WT = Waiting Time[/dim]")
    console.print()

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", format_metric(result.average_waiting_time))
    sys_table.add_row("Avg turnaround", format_metric(result.average_turnaround_time))
    if result.system:
        sys = result.system
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Starvation count", str(sys.starvation_count))

    console.print(sys_table)
    console.print()

    log_table = Table(title="Execution log", box=box.SIMPLE_HEAVY)
    for h in ["#", "Process", "Start", "End", "Duration"]:
        log_table.add_column(h, justify="left" if h == "Process" else "right")
    for row in execution_log(result.timeline):
        log_table.add_row(*(escape(str(v)) for v in row))

    console.print(log_table)


def _animate_result(result: SimulationResult, delay: float, console: Console) -> None:
    """
    Replay the computed timeline block by block. The simulation is not re-run.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Replaying {result.algorithm}[/bold] ({len(result.timeline)} blocks)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for frame in replay_frames(result.timeline):
        panel, time_marks = build_rich_gantt(frame)
        console.print(panel)
        console.print(time_marks)
        time.sleep(delay)


def _run_compare(workload_path: Path, algorithms: list[str], quantum: int, console: Console) -> None:
    processes = load_workload(workload_path)

    summary_table = Table(title=f"Algorithm comparison: {escape(str(workload_path))}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for alg in algorithms:
        q = quantum if alg.lower() == "rr" else None
        result = run_algorithm(alg, processes, quantum=q)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            format_metric(result.average_waiting_time),
            format_metric(result.average_turnaround_time),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = run_algorithm(
                args.algorithm, processes, quantum=args.quantum, include_idle=args.show_idle
            )
            if args.step:
                try:
                    _animate_result(result, delay=args.step_delay, console=console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            _run_compare(Path(args.workload), args.algorithms, args.quantum, console)
            return 0
    except (InvalidInputError, OSError) as exc:
        logger.debug("Rejected input", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
