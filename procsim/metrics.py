from __future__ import annotations

from typing import List

from .models import Process, SimulationResult, SystemMetrics


def compute_system_metrics(result: SimulationResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the per-tick record and the
    counters each process accrued. Makespan runs from the start of the
    simulation to the tick after the last finish, idle stretches included.
    """
    makespan = result.end_time - result.start_time
    if not result.processes or makespan <= 0:
        system = SystemMetrics(cpu_busy_time=0, makespan=max(makespan, 0), throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    cpu_busy_time = sum(1 for t in result.ticks if t.running is not None)

    throughput = len(result.processes) / makespan
    cpu_utilization = cpu_busy_time / makespan

    # Processes whose waiting time is more than 2x the average.
    avg_wait = sum(p.wait_time for p in result.processes) / len(result.processes)
    starvation_count = sum(1 for p in result.processes if p.wait_time > 2 * avg_wait)

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        starvation_count=starvation_count,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[Process]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.wait_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
