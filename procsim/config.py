from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from rich.logging import RichHandler

DEFAULT_QUANTUM = 2
DEFAULT_MAX_TICKS = 100_000
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_LOG_LEVEL = os.environ.get("PROCSIM_LOG_LEVEL", "WARNING")


@dataclass
class SimulationConfig:
    """
    Knobs for a simulation run.

    quantum is only read by round-robin. max_ticks bounds the loop so a
    process with a negative burst cannot spin forever.
    """

    quantum: Optional[int] = None
    max_ticks: int = DEFAULT_MAX_TICKS
    start_time: int = 0


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """
    Route the package's log records through Rich.
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
