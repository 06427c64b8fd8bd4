from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Sequence

from .errors import FileAccessError, MalformedInputError
from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload into a list of Process objects.

    ``.json`` files hold a list of objects; anything else is read as a
    header-less CSV with rows ``pid, burst, arrival[, priority]``.
    """
    path = Path(path)

    try:
        if path.suffix.lower() == ".json":
            processes = _load_json(path)
        else:
            processes = _load_csv(path)
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"{path}: not valid UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise FileAccessError(f"error reading scheduling file {path}: {exc}") from exc

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise MalformedInputError(f"{path}: invalid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise MalformedInputError("JSON workload must be a list of process objects")

    processes: List[Process] = []
    for entry in raw:
        processes.append(_process_from_mapping(entry))

    return processes


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        try:
            for row in reader:
                if not any(field.strip() for field in row):
                    continue
                processes.append(_process_from_row(row, reader.line_num))
        except csv.Error as exc:
            raise MalformedInputError(f"line {reader.line_num}: {exc}") from exc
    return processes


def _parse_int(value: str, name: str, line: int) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise MalformedInputError(f"line {line}: {name} must be an integer, got {value!r}") from exc


def _process_from_row(row: Sequence[str], line: int) -> Process:
    if len(row) not in (3, 4):
        raise MalformedInputError(f"line {line}: expected 3 or 4 columns, got {len(row)}")

    pid = _parse_int(row[0], "pid", line)
    burst_time = _parse_int(row[1], "burst", line)
    arrival_time = _parse_int(row[2], "arrival", line)
    priority = _parse_int(row[3], "priority", line) if len(row) == 4 else 0

    return _validated(Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority))


def _json_int(mapping, key: str) -> int:
    value = mapping[key]
    # bool is an int subclass; floats would be truncated by int().
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise MalformedInputError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError as exc:
        raise MalformedInputError(f"{key} must be an integer, got {value!r}") from exc


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _json_int(mapping, "pid")
        arrival_time = _json_int(mapping, "arrival_time")
        burst_time = _json_int(mapping, "burst_time")
        priority = _json_int(mapping, "priority") if mapping.get("priority") not in (None, "") else 0
    except (KeyError, TypeError, AttributeError) as exc:
        raise MalformedInputError(f"Invalid process entry: {mapping!r}") from exc

    return _validated(Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority))


def _validated(process: Process) -> Process:
    if process.arrival_time < 0:
        raise MalformedInputError(f"process {process.pid}: arrival time must be >= 0")
    if process.burst_time <= 0:
        raise MalformedInputError(f"process {process.pid}: burst must be > 0")
    return process

