from __future__ import annotations

from collections import deque
from dataclasses import replace
from typing import Deque, List, Optional

from .config import SimulationConfig
from .models import Process, ProcessState, SimulationResult
from .simulation import Simulation


def _running(active: List[Process]) -> Optional[Process]:
    """The process that held the CPU on the previous tick, if still active."""
    return next((p for p in active if p.state is ProcessState.RUNNING), None)


class FCFSPolicy:
    """
    First-Come First-Serve (non-preemptive).

    Ties on arrival time go to the process listed first in the workload.
    """

    label = "FCFS"

    def __init__(self, quantum: Optional[int] = None):
        self.quantum = quantum

    def __call__(self, active: List[Process], time: int) -> Optional[Process]:
        current = _running(active)
        if current is not None:
            return current
        return min(active, key=lambda p: p.arrival_time)


class SJFPolicy(FCFSPolicy):
    """
    Shortest Job First (non-preemptive).

    When the CPU frees up, pick the arrived process with the smallest burst
    time (tie-breaker: earlier arrival, then workload order).
    """

    label = "SJF (non-preemptive)"

    def __call__(self, active: List[Process], time: int) -> Optional[Process]:
        current = _running(active)
        if current is not None:
            return current
        return min(active, key=lambda p: (p.burst_time, p.arrival_time))


class SRTFPolicy(FCFSPolicy):
    """
    Shortest Remaining Time First (preemptive SJF).

    Re-evaluated every tick. On a tie the running process keeps the CPU.
    """

    label = "SRTF"

    def __call__(self, active: List[Process], time: int) -> Optional[Process]:
        return min(
            active,
            key=lambda p: (p.time_remaining, p.state is not ProcessState.RUNNING, p.arrival_time),
        )


class HRRNPolicy(FCFSPolicy):
    """
    Highest Response Ratio Next (non-preemptive).

    ratio = (wait_time + burst_time) / burst_time, using the wait time the
    process has accrued so far.
    """

    label = "HRRN"

    def __call__(self, active: List[Process], time: int) -> Optional[Process]:
        current = _running(active)
        if current is not None:
            return current
        return max(active, key=lambda p: ((p.wait_time + p.burst_time) / p.burst_time, -p.arrival_time))


class RoundRobinPolicy:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive on the tick a quantum expires are queued ahead of
    the preempted process.
    """

    label = "Round Robin"

    def __init__(self, quantum: Optional[int] = None):
        if quantum is None or quantum <= 0:
            raise ValueError("Round Robin requires a positive quantum (use --quantum)")
        self.quantum = quantum
        self.queue: Deque[Process] = deque()
        self.current: Optional[Process] = None
        self.used = 0

    def __call__(self, active: List[Process], time: int) -> Optional[Process]:
        for p in active:
            if p is not self.current and not any(p is q for q in self.queue):
                self.queue.append(p)

        if self.current is not None:
            if self.current.finished():
                self.current = None
            elif self.used >= self.quantum:
                if self.queue:
                    self.queue.append(self.current)
                    self.current = None
                else:
                    # nobody waiting, start a fresh quantum
                    self.used = 0

        if self.current is None:
            if not self.queue:
                return None
            self.current = self.queue.popleft()
            self.used = 0

        self.used += 1
        return self.current


ALGORITHMS = {
    "fcfs": FCFSPolicy,
    "sjf": SJFPolicy,
    "srtf": SRTFPolicy,
    "hrrn": HRRNPolicy,
    "rr": RoundRobinPolicy,
}


def run_algorithm(
    name: str,
    processes: List[Process],
    quantum: Optional[int] = None,
    config: Optional[SimulationConfig] = None,
) -> SimulationResult:
    """
    Simulate `processes` under the named policy. The processes are mutated in
    place; pass fresh copies to run the same workload again.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    config = config or SimulationConfig()
    if quantum is not None:
        config = replace(config, quantum=quantum)

    policy = ALGORITHMS[name](config.quantum)
    return Simulation(processes, config).run(policy, algorithm=policy.label)
