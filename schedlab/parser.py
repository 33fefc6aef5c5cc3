"""Parsers for the lab instance files.

The two lab block formats hold several datasets, each opened by a ``data.<id>:`` header:

Flow shop (``neh.data.txt``)::

    data.000:
    4 3            <- jobs machines
    1 3 6          <- one row of machine durations per job
    ...
    neh:
    32             <- reference Cmax
    1 4 3 2        <- reference sequence (optional)

Weighted tardiness (``data.txt``)::

    data.10:
    10             <- jobs
    54 5 220       <- processing_time weight due_time
    ...
    opt:
    766
    1 2 3 ...      <- optional

Single-machine release/delivery (``dataN.txt``, one instance per file)::

    4              <- jobs
    10 5 7         <- preparation (r) execution (p) delivery (q)
    ...

Malformed content raises InvalidInput (a ValueError).
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from schedlab.errors import InvalidConfiguration, InvalidInput
from schedlab.models import Dataset, Job, ReferenceResult

HEADER_PREFIX = "data."
FLOWSHOP = "flowshop"
TARDINESS = "witi"
RPQ = "rpq"


def _read_lines(file_path: str) -> List[str]:
    with open(file_path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def _is_header(line: str) -> bool:
    return line.startswith(HEADER_PREFIX)


def _ints(line: str, where: str) -> List[int]:
    try:
        return [int(token) for token in line.split()]
    except ValueError as e:
        raise InvalidInput(f"{where}: expected integers, got {line!r}") from e


def _take(lines: List[str], idx: int, where: str) -> str:
    if idx >= len(lines) or _is_header(lines[idx]):
        raise InvalidInput(f"{where}: unexpected end of dataset block")
    return lines[idx]


def _read_reference(
    lines: List[str], idx: int, marker: str, jobs: int, where: str
) -> Tuple[Optional[ReferenceResult], int]:
    """Skip to ``marker`` inside the current block and read value + optional sequence."""
    while idx < len(lines) and not _is_header(lines[idx]) and marker not in lines[idx]:
        idx += 1
    if idx >= len(lines) or _is_header(lines[idx]):
        return None, idx
    # value may share the marker line ("neh: 32") or follow it
    rest = lines[idx].split(marker, 1)[1].strip()
    idx += 1
    if not rest:
        rest = _take(lines, idx, where)
        idx += 1
    objective = _ints(rest, where)[0]
    sequence = None
    if idx < len(lines) and not _is_header(lines[idx]):
        tokens = lines[idx].split()
        if len(tokens) == jobs and all(t.lstrip("-").isdigit() for t in tokens):
            sequence = tuple(int(t) for t in tokens)
            idx += 1
    return ReferenceResult(objective=objective, sequence=sequence), idx


def parse_flowshop_file(file_path: str) -> List[Dataset]:
    """Parse all flow-shop datasets from a ``neh.data.txt``-style file."""
    lines = _read_lines(file_path)
    datasets: List[Dataset] = []
    idx = 0
    while idx < len(lines):
        line = lines[idx]
        idx += 1
        if not _is_header(line):
            continue
        name = line.rstrip(":")
        where = f"{file_path}:{name}"
        header = _ints(_take(lines, idx, where), where)
        idx += 1
        if len(header) != 2:
            raise InvalidInput(f"{where}: header must be 'jobs machines', got {header}")
        jobs_number, machines_number = header
        if jobs_number < 1 or machines_number < 1:
            raise InvalidInput(f"{where}: jobs and machines must be positive")
        jobs = []
        for job_id in range(1, jobs_number + 1):
            row = _ints(_take(lines, idx, where), where)
            idx += 1
            if len(row) != machines_number:
                raise InvalidInput(
                    f"{where}: job {job_id} has {len(row)} durations, expected {machines_number}"
                )
            jobs.append(Job(id=job_id, durations=tuple(row)))
        reference, idx = _read_reference(lines, idx, "neh:", jobs_number, where)
        datasets.append(
            Dataset(jobs=tuple(jobs), machines_number=machines_number, name=name, reference=reference)
        )
    if not datasets:
        raise InvalidInput(f"{file_path}: no '{HEADER_PREFIX}' blocks found")
    return datasets


def parse_tardiness_file(file_path: str) -> List[Dataset]:
    """Parse all weighted tardiness datasets from a ``data.txt``-style file."""
    lines = _read_lines(file_path)
    datasets: List[Dataset] = []
    idx = 0
    while idx < len(lines):
        line = lines[idx]
        idx += 1
        if not _is_header(line):
            continue
        name = line.rstrip(":")
        where = f"{file_path}:{name}"
        header = _ints(_take(lines, idx, where), where)
        idx += 1
        if len(header) != 1 or header[0] < 1:
            raise InvalidInput(f"{where}: header must be a positive job count, got {header}")
        jobs_number = header[0]
        jobs = []
        for job_id in range(1, jobs_number + 1):
            row = _ints(_take(lines, idx, where), where)
            idx += 1
            if len(row) != 3:
                raise InvalidInput(f"{where}: job {job_id} needs 'p w d', got {row}")
            processing_time, weight, due_time = row
            if weight < 0:
                raise InvalidInput(f"{where}: job {job_id} has negative weight {weight}")
            jobs.append(
                Job(id=job_id, durations=(processing_time,), weight=weight, due_time=due_time)
            )
        reference, idx = _read_reference(lines, idx, "opt:", jobs_number, where)
        datasets.append(Dataset(jobs=tuple(jobs), machines_number=1, name=name, reference=reference))
    if not datasets:
        raise InvalidInput(f"{file_path}: no '{HEADER_PREFIX}' blocks found")
    return datasets


def parse_rpq_file(file_path: str) -> List[Dataset]:
    """Parse a ``dataN.txt`` release/delivery instance (whitespace separated)."""
    with open(file_path, "r", encoding="utf-8") as f:
        text = f.read()
    name = Path(file_path).stem
    where = f"{file_path}:{name}"
    values = _ints(text, where)
    if not values or values[0] < 1:
        raise InvalidInput(f"{where}: file must start with a positive job count")
    jobs_number = values[0]
    rows = values[1:]
    if len(rows) != 3 * jobs_number:
        raise InvalidInput(
            f"{where}: expected {3 * jobs_number} values for {jobs_number} jobs, got {len(rows)}"
        )
    jobs = []
    for job_id in range(1, jobs_number + 1):
        preparation, execution, delivery = rows[3 * (job_id - 1) : 3 * job_id]
        if preparation < 0 or delivery < 0:
            raise InvalidInput(f"{where}: job {job_id} has negative preparation/delivery time")
        jobs.append(
            Job(
                id=job_id,
                durations=(execution,),
                preparation_time=preparation,
                delivery_time=delivery,
            )
        )
    return [Dataset(jobs=tuple(jobs), machines_number=1, name=name)]


def load_instances(file_path: str, kind: str = FLOWSHOP) -> List[Dataset]:
    """Dispatch to the parser for ``kind`` ('flowshop', 'witi' or 'rpq')."""
    if kind == FLOWSHOP:
        return parse_flowshop_file(file_path)
    if kind == TARDINESS:
        return parse_tardiness_file(file_path)
    if kind == RPQ:
        return parse_rpq_file(file_path)
    raise InvalidConfiguration(f"Unknown instance format: {kind}")
