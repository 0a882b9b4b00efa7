from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class ProcessState(Enum):
    """
    Lifecycle state of a process.

    INACTIVE covers both "not yet arrived" and "already finished"; use
    Process.finished() to tell them apart.
    """

    INACTIVE = "inactive"
    READY = "ready"
    RUNNING = "running"


@dataclass(eq=False)
class Process:
    """
    One schedulable unit of work and its accumulated metrics.

    The owning loop drives it one tick at a time: select()/deselect() fix the
    state for the tick, then tick() accrues counters. Callers must not select
    or tick a process before arrived(time) holds; this is not checked.

    response_time counts ticks spent Ready before the first run. It is an
    accrual, not first_run - arrival.
    """

    name: str
    arrival_time: int
    burst_time: int
    time_remaining: int = field(init=False)
    state: ProcessState = field(init=False, default=ProcessState.INACTIVE)

    turnaround_time: int = field(init=False, default=0)
    response_time: int = field(init=False, default=0)
    wait_time: int = field(init=False, default=0)
    finish_time: int = field(init=False, default=0)
    last_selection_time: Optional[int] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.time_remaining = self.burst_time

    def tick(self, cur_time: int) -> None:
        """
        Advance this process by one unit of simulated time ending at cur_time.
        """
        if self.state is ProcessState.READY:
            self.turnaround_time += 1
            self.wait_time += 1
            # never run yet
            if self.time_remaining == self.burst_time:
                self.response_time += 1
        elif self.state is ProcessState.RUNNING:
            self.turnaround_time += 1
            self.time_remaining -= 1
            if self.time_remaining == 0:
                self._finish(cur_time)

    def select(self, cur_time: int) -> None:
        self.state = ProcessState.RUNNING
        self.last_selection_time = cur_time
        logger.debug("t=%d select %s (remaining %d)", cur_time, self.name, self.time_remaining)

    def deselect(self) -> None:
        """Put the process back to READY unless it has already finished."""
        if not self.finished():
            self.state = ProcessState.READY

    def _finish(self, cur_time: int) -> None:
        self.state = ProcessState.INACTIVE
        self.finish_time = cur_time
        logger.debug("t=%d finish %s", cur_time, self.name)

    def finished(self) -> bool:
        return self.time_remaining == 0

    def arrived(self, time: int) -> bool:
        return self.arrival_time <= time

    @property
    def active(self) -> bool:
        return self.state is not ProcessState.INACTIVE

    def fresh(self) -> Process:
        """Return an untouched copy with the same name, arrival and burst."""
        return Process(self.name, self.arrival_time, self.burst_time)


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    name: str
    start_time: int
    end_time: int


@dataclass
class TickRecord:
    time: int
    running: Optional[str]
    ready: List[str] = field(default_factory=list)


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    starvation_count: int = 0


@dataclass
class SimulationResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    ticks: List[TickRecord] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    start_time: int = 0
    end_time: int = 0
    system: Optional[SystemMetrics] = None
