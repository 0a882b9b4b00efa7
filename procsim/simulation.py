from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from .config import SimulationConfig
from .gantt import slices_from_ticks
from .metrics import compute_system_metrics
from .models import Process, SimulationResult, TickRecord

logger = logging.getLogger(__name__)

# Picks at most one of the active processes to run for the tick at `time`.
Policy = Callable[[List[Process], int], Optional[Process]]


class SimulationError(ValueError):
    pass


class Simulation:
    """
    Owns a set of processes and drives them through simulated time.

    step() is the only place select/deselect/tick are called, so every
    process sees a stable state for the whole tick.
    """

    def __init__(self, processes: Sequence[Process], config: Optional[SimulationConfig] = None):
        self.processes: List[Process] = list(processes)
        self.config = config or SimulationConfig()
        self.time = self.config.start_time
        self.ticks: List[TickRecord] = []

    def active(self, time: int) -> List[Process]:
        return [p for p in self.processes if p.arrived(time) and not p.finished()]

    def done(self) -> bool:
        return all(p.finished() for p in self.processes)

    def step(self, time: int, chosen: Optional[Process]) -> TickRecord:
        """
        Run one tick with `chosen` on the CPU and every other active process
        waiting. `chosen` may be None for a tick where nothing runs.
        """
        active = self.active(time)
        if chosen is not None and not any(p is chosen for p in active):
            raise SimulationError(
                f"t={time}: cannot run {chosen.name!r}, it has not arrived or has already finished"
            )

        for p in active:
            if p is chosen:
                p.select(time)
            else:
                p.deselect()

        ready = [p.name for p in active if p is not chosen]
        for p in active:
            p.tick(time)

        record = TickRecord(time=time, running=chosen.name if chosen else None, ready=ready)
        logger.debug("t=%d running=%s ready=%s", time, record.running, ready)
        return record

    def run(self, policy: Policy, algorithm: str = "custom") -> SimulationResult:
        """
        Tick until every process has finished and return the collected result.
        Idle stretches before an arrival are skipped, not stepped; they still
        count toward the makespan.
        """
        logger.info("Running %s on %d processes", algorithm, len(self.processes))
        start = self.time

        while not self.done():
            active = self.active(self.time)
            if not active:
                # CPU idle: jump to the next arrival
                self.time = min(p.arrival_time for p in self.processes if not p.finished())
                continue
            if len(self.ticks) >= self.config.max_ticks:
                raise SimulationError(
                    f"simulation did not finish within {self.config.max_ticks} busy ticks"
                )
            self.ticks.append(self.step(self.time, policy(active, self.time)))
            self.time += 1

        result = SimulationResult(
            algorithm=algorithm,
            quantum=self.config.quantum,
            processes=self.processes,
            ticks=self.ticks,
            timeline=slices_from_ticks(self.ticks),
            start_time=start,
            end_time=self.time,
        )
        compute_system_metrics(result)
        logger.info("%s finished at t=%d", algorithm, self.time)
        return result
