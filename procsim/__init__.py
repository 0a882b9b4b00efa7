"""
procsim package.

Tick-driven simulation core for CPU scheduling algorithms: a Process entity
that accrues turnaround, wait and response time one tick at a time, the
simulation loop that drives it, and a command-line interface on top.
"""

from .models import Process, ProcessState
from .simulation import Simulation, SimulationError
from .workload_io import ProcessParseError, parse_process

__all__ = [
    "Process",
    "ProcessParseError",
    "ProcessState",
    "Simulation",
    "SimulationError",
    "parse_process",
    "cli",
]
