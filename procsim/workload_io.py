from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import Iterable, List, Optional

from .models import Process

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Times are 32-bit signed integers.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

LINE_SUFFIXES = {".txt", ".proc"}


class ProcessParseError(ValueError):
    """A numeric field of a process record is not a 32-bit base-10 integer."""

    def __init__(self, field: str, token: str, line: Optional[int] = None):
        self.field = field
        self.token = token
        self.line = line
        where = f"line {line}: " if line is not None else ""
        super().__init__(f"{where}invalid {field} {token!r} (expected a 32-bit integer)")


def _parse_int(field: str, token: str) -> int:
    if not _INT_RE.fullmatch(token):
        raise ProcessParseError(field, token)
    value = int(token)
    if not INT_MIN <= value <= INT_MAX:
        raise ProcessParseError(field, token)
    return value


def parse_process(tokens: Iterable[str]) -> Process:
    """
    Build a process from a labelled record such as
    ``name P1 arrival 0 burst 5``.

    Labels are skipped, not checked. A missing name becomes ``""``; a missing
    or non-integer arrival/burst raises ProcessParseError.
    """
    it = iter(tokens)

    def value() -> str:
        next(it, None)
        return next(it, "")

    name = value()
    arrival_time = _parse_int("arrival time", value())
    burst_time = _parse_int("burst time", value())
    return Process(name, arrival_time, burst_time)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a line, JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in LINE_SUFFIXES:
        return _load_lines(path)
    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .txt, .json or .csv)")


def _load_lines(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                processes.append(parse_process(line.split()))
            except ProcessParseError as exc:
                raise ProcessParseError(exc.field, exc.token, line=lineno) from exc
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row, line=reader.line_num))
    return processes


def _process_from_mapping(mapping, line: Optional[int] = None) -> Process:
    """
    Numeric fields follow the same rules as labelled records: floats, booleans
    and padded strings are rejected.
    """
    try:
        name = str(mapping["name"])
        arrival = mapping["arrival_time"]
        burst = mapping["burst_time"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    try:
        return Process(name, _parse_int("arrival time", str(arrival)), _parse_int("burst time", str(burst)))
    except ProcessParseError as exc:
        if line is None:
            raise
        raise ProcessParseError(exc.field, exc.token, line=line) from exc
