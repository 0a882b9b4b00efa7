from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_TICKS,
    DEFAULT_QUANTUM,
    LOG_LEVELS,
    SimulationConfig,
    configure_logging,
)
from .gantt import build_rich_gantt
from .metrics import summarize_process_metrics
from .models import SimulationResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procsim",
        description="Tick-driven CPU scheduling simulator (FCFS, SJF, SRTF, HRRN, RR).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        help="Logging level (default: $PROCSIM_LOG_LEVEL or WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate one algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to a .txt (labelled lines), JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the others).",
    )
    run_parser.add_argument(
        "--max-ticks",
        type=int,
        default=DEFAULT_MAX_TICKS,
        help=f"Abort after this many ticks with a process on the CPU or waiting (default: {DEFAULT_MAX_TICKS}).",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Also print which process ran on every tick.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to a .txt (labelled lines), JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    console.print(build_rich_gantt(result.ticks, [p.name for p in result.processes]))

    console.print()

    headers = ["Name", "Arrive", "Burst", "Finish", "Wait", "Turnaround", "Response"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        proc_table.add_column(h, justify="center" if h == "Name" else "right")

    for p in result.processes:
        proc_table.add_row(
            p.name,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.finish_time),
            str(p.wait_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
        sys_table.add_row("Makespan (ticks)", str(sys.makespan))
        sys_table.add_row("Throughput (proc/tick)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Starvation count", str(sys.starvation_count))

        console.print(sys_table)


def _print_trace(result: SimulationResult, console: Console) -> None:
    table = Table(title="Tick trace", box=box.SIMPLE_HEAVY)
    table.add_column("t", justify="right")
    table.add_column("Running", justify="center")
    table.add_column("Ready")
    for record in result.ticks:
        table.add_row(str(record.time), record.running or "[dim]idle[/dim]", " ".join(record.ready))
    console.print(table)


def _run(args: argparse.Namespace, console: Console) -> int:
    processes = load_workload(Path(args.workload))
    config = SimulationConfig(quantum=args.quantum, max_ticks=args.max_ticks)
    result = run_algorithm(args.algorithm, processes, config=config)
    if args.trace:
        _print_trace(result, console)
    _print_result(result, console)
    return 0


def _compare(args: argparse.Namespace, console: Console) -> int:
    processes = load_workload(Path(args.workload))

    summary_table = Table(title=f"Algorithm comparison: {args.workload}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for alg in args.algorithms:
        q = args.quantum if alg.lower() == "rr" else None
        result = run_algorithm(alg, [p.fresh() for p in processes], quantum=q)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
        )

    console.print(summary_table)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    commands = {"run": _run, "compare": _compare}

    try:
        configure_logging(args.log_level)
        return commands[args.command](args, console)
    except (OSError, ValueError) as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
