import io

from rich.console import Console

from procsim.algorithms import run_algorithm
from procsim.gantt import build_rich_gantt, slices_from_ticks
from procsim.metrics import compute_system_metrics, summarize_process_metrics
from procsim.models import Process, SimulationResult, TickRecord


def test_summary_of_empty_list():
    assert summarize_process_metrics([]) == {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}


def test_summary_averages_process_counters():
    res = run_algorithm("fcfs", [Process("P1", 0, 2), Process("P2", 0, 1)])
    summary = summarize_process_metrics(res.processes)
    assert summary["avg_waiting"] == 1.0
    assert summary["avg_turnaround"] == 2.5
    assert summary["avg_response"] == 1.0


def test_system_metrics_count_idle_ticks():
    res = run_algorithm("fcfs", [Process("P1", 2, 2)])
    sys = res.system
    assert sys.makespan == 4
    assert sys.cpu_busy_time == 2
    assert sys.cpu_utilization == 0.5
    assert sys.throughput == 0.25


def test_system_metrics_flags_starved_process():
    procs = [Process("A", 0, 10), Process("B", 0, 1), Process("C", 0, 1), Process("D", 0, 1)]
    res = run_algorithm("fcfs", procs)
    # waits: A 0, B 10, C 11, D 12 -> none above 2x avg (8.25)
    assert res.system.starvation_count == 0

    procs = [Process("A", 0, 30)] + [Process(f"S{i}", 30, 1) for i in range(4)] + [Process("L", 0, 1)]
    res = run_algorithm("fcfs", procs)
    assert res.system.starvation_count == 1


def test_system_metrics_without_processes():
    result = SimulationResult(algorithm="none", quantum=None)
    sys = compute_system_metrics(result)
    assert sys.makespan == 0
    assert sys.throughput == 0.0
    assert result.system is sys


def test_slices_merge_consecutive_ticks():
    ticks = [
        TickRecord(0, "A"),
        TickRecord(1, "A"),
        TickRecord(2, None),
        TickRecord(3, "A"),
        TickRecord(4, "B"),
    ]
    slices = slices_from_ticks(ticks)
    assert [(s.name, s.start_time, s.end_time) for s in slices] == [("A", 0, 2), ("A", 3, 4), ("B", 4, 5)]


def _render(renderable) -> str:
    console = Console(file=io.StringIO(), width=80)
    console.print(renderable)
    return console.file.getvalue()


def test_rich_gantt_draws_a_lane_per_process():
    procs = [Process("P1", 0, 2), Process("P2", 0, 1), Process("P3", 5, 1)]
    res = run_algorithm("fcfs", procs)
    out = _render(build_rich_gantt(res.ticks, [p.name for p in procs]))
    assert "Gantt Chart" in out
    # ticks 3 and 4 were skipped while nothing had arrived
    assert "012··5" in out
    assert "P1 ██" in out
    assert "P2 ░░█" in out
    assert "P3      █" in out


def test_rich_gantt_without_ticks():
    out = _render(build_rich_gantt([], ["P1"]))
    assert "No execution" in out
