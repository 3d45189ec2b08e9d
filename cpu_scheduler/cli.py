from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulingError
from .export import build_export_record, write_export
from .gantt import build_rich_gantt, render_gantt
from .metrics import compute_metrics
from .models import Process, ScheduleResult
from .workload_io import WorkloadError, example_workload, load_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--example",
        action="store_true",
        help="Use the built-in five-process example workload.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpu-scheduler",
        description="CPU scheduling simulator (FCFS, SJF, Priority, Round Robin).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING). DEBUG traces every dispatch.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (fcfs, sjf, priority, rr).",
    )
    _add_workload_args(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}; ignored by FCFS, SJF, Priority).",
    )
    run_parser.add_argument(
        "--export",
        metavar="PATH",
        default=None,
        help="Write the run as JSON to PATH (a directory gets a timestamped file name).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print a plain-text Gantt chart instead of the colored one.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_args(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: fcfs sjf priority rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    subparsers.add_parser("example", help="Print the built-in example workload as JSON.")

    return parser


def _configure_logging(level: str) -> None:
    package_logger = logging.getLogger("cpu_scheduler")
    package_logger.setLevel(level)

    # Replace the handler from an earlier main() call so stderr is re-bound.
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, log_time_format="[%X]")
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)


def _load_processes(args: argparse.Namespace) -> List[Process]:
    if args.example:
        return example_workload()
    return load_workload(Path(args.workload))


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
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
            console.print(time_marks, highlight=False)

    console.print()

    show_priority = any(r.priority is not None for r in result.results)
    headers = ["PID", "Arrive", "Burst"]
    if show_priority:
        headers.append("Priority")
    headers += ["Start", "Complete", "Turnaround", "Wait", "Response"]

    proc_table = Table(title="Per-process results", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for r in result.results:
        row = [escape(r.pid), str(r.arrival_time), str(r.burst_time)]
        if show_priority:
            row.append("-" if r.priority is None else str(r.priority))
        row += [
            str(r.start_time),
            str(r.completion_time),
            str(r.turnaround_time),
            str(r.waiting_time),
            str(r.response_time),
        ]
        proc_table.add_row(*row)

    console.print(proc_table)
    console.print()

    metrics = compute_metrics(result.results)
    if metrics is None:
        console.print("[dim]No metrics to display.[/dim]")
        return

    sys_table = Table(title="Performance metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{metrics.avg_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{metrics.avg_turnaround:.2f}")
    sys_table.add_row("Total time", str(metrics.total_time))
    sys_table.add_row("CPU utilization", f"{metrics.cpu_utilization:.2f}%")
    sys_table.add_row("Throughput (proc/time)", f"{metrics.throughput:.2f}")

    console.print(sys_table)


def _run_compare(processes: List[Process], algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("CPU util.", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for alg in algorithms:
        q = quantum if alg.lower() == "rr" else None
        try:
            result = run_algorithm(alg, processes, quantum=q)
        except SchedulingError as exc:
            logger.warning("Skipping %s: %s", alg, exc)
            summary_table.add_row(escape(alg), "", "-", "-", "-", "-")
            continue

        metrics = compute_metrics(result.results)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{metrics.avg_waiting:.2f}",
            f"{metrics.avg_turnaround:.2f}",
            f"{metrics.cpu_utilization:.2f}%",
            f"{metrics.throughput:.2f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    console = Console()

    if args.command == "example":
        print(json.dumps([p.to_dict() for p in example_workload()], indent=2))
        return 0

    try:
        processes = _load_processes(args)

        if args.command == "run":
            q = args.quantum if args.algorithm.lower() == "rr" else None
            result = run_algorithm(args.algorithm, processes, quantum=q)
            _print_result(result, console, plain=args.plain)
            if args.export:
                record = build_export_record(processes, result, compute_metrics(result.results))
                path = write_export(record, args.export)
                console.print(f"[green]Results exported to {path}[/green]")
            return 0

        if args.command == "compare":
            _run_compare(processes, args.algorithms, args.quantum, console)
            return 0
    except (SchedulingError, WorkloadError) as exc:
        Console(stderr=True).print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
