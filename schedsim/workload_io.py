from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Sequence, Tuple

from .errors import MalformedInput
from .models import Process

logger = logging.getLogger(__name__)

# Column order of headerless CSV rows: id, burst, arrival[, priority]
POSITIONAL_FIELDS = ("pid", "burst_time", "arrival_time", "priority")
HEADER_MARKERS = {"pid", "id"}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Any suffix other than ``.json`` is read as CSV. Open errors propagate as
    ``OSError``; bad content raises ``MalformedInput``.
    """
    path = Path(path)

    if path.suffix.lower() == ".json":
        processes = _load_json(path)
    else:
        processes = _load_csv(path)

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except UnicodeDecodeError as exc:
            raise MalformedInput(f"{path}: not valid UTF-8 ({exc})") from exc
        except json.JSONDecodeError as exc:
            raise MalformedInput(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise MalformedInput("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, where=f"{path} entry {i}") for i, entry in enumerate(raw, start=1)]


def _load_csv(path: Path) -> List[Process]:
    # (physical line number, cells); blank lines are skipped but still counted
    rows: List[Tuple[int, List[str]]] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        try:
            for row in reader:
                if any(cell.strip() for cell in row):
                    rows.append((reader.line_num, row))
        except UnicodeDecodeError as exc:
            raise MalformedInput(f"{path}: not valid UTF-8 ({exc})") from exc
        except csv.Error as exc:
            raise MalformedInput(f"{path} line {reader.line_num}: {exc}") from exc

    if not rows:
        return []

    first = [cell.strip().lower() for cell in rows[0][1]]
    if first[0] in HEADER_MARKERS:
        return _parse_named_rows(first, rows[1:], path)
    return _parse_numbered_rows(rows, str(path))


def _parse_named_rows(header: Sequence[str], rows: Iterable[Tuple[int, Sequence[str]]], path: Path) -> List[Process]:
    processes: List[Process] = []
    for line_no, row in rows:
        mapping = dict(zip(header, (cell.strip() for cell in row)))
        processes.append(_process_from_mapping(mapping, where=f"{path} line {line_no}"))
    return processes


def parse_rows(rows: Iterable[Sequence[str]], source: str = "<input>") -> List[Process]:
    """
    Parse headerless records ``id, burst, arrival[, priority]``.
    """
    return _parse_numbered_rows(enumerate(rows, start=1), source)


def _parse_numbered_rows(rows: Iterable[Tuple[int, Sequence[str]]], source: str) -> List[Process]:
    processes: List[Process] = []
    for line_no, row in rows:
        cells = [cell.strip() for cell in row]
        if len(cells) < 3:
            raise MalformedInput(f"{source} line {line_no}: expected at least 3 fields, got {len(cells)}")
        mapping = dict(zip(POSITIONAL_FIELDS, cells))
        processes.append(_process_from_mapping(mapping, where=f"{source} line {line_no}"))
    return processes


def _to_int(value, field_name: str, where: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise MalformedInput(f"{where}: {field_name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"{where}: {field_name} must be an integer, got {value!r}") from exc


def _process_from_mapping(mapping: Mapping, where: str = "<input>") -> Process:
    if not isinstance(mapping, Mapping):
        raise MalformedInput(f"{where}: expected an object, got {mapping!r}")

    pid_val = mapping.get("pid", mapping.get("id"))
    required = {
        "pid": pid_val,
        "arrival_time": mapping.get("arrival_time"),
        "burst_time": mapping.get("burst_time"),
    }
    missing = [name for name, value in required.items() if value in (None, "")]
    if missing:
        raise MalformedInput(f"{where}: missing {', '.join(missing)}")

    priority_val = mapping.get("priority")
    priority = _to_int(priority_val, "priority", where) if priority_val not in (None, "") else 0

    pid = _to_int(pid_val, "pid", where)
    arrival_time = _to_int(mapping["arrival_time"], "arrival_time", where)
    burst_time = _to_int(mapping["burst_time"], "burst_time", where)

    try:
        return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)
    except MalformedInput as exc:
        raise MalformedInput(f"{where}: {exc}") from exc
