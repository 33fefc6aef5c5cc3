"""Result reporting: sequence text format, console lines and CSV summaries.

Sequences are written the way the instance files store reference
solutions: 1-based job ids separated by single spaces.
"""

from __future__ import annotations

import csv
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

from schedlab.errors import InvalidInput
from schedlab.models import Dataset, ScheduleResult

SUMMARY_COLUMNS = [
    "dataset",
    "algorithm",
    "jobs",
    "machines",
    "objective",
    "reference",
    "gap_percent",
    "elapsed_ms",
    "sequence",
]


def format_sequence(sequence: Sequence[int]) -> str:
    return " ".join(str(job_id) for job_id in sequence)


def parse_sequence(text: str) -> tuple[int, ...]:
    try:
        return tuple(int(token) for token in text.replace(",", " ").split())
    except ValueError as e:
        raise InvalidInput(f"Invalid sequence text: {text!r}") from e


def relative_gap(objective: int, reference: int | None) -> float | None:
    """Percent gap of ``objective`` over ``reference`` (None when not comparable)."""
    if reference is None or reference == 0:
        return None
    return (objective - reference) / reference * 100.0


def format_result(dataset: Dataset, result: ScheduleResult, elapsed_ms: float | None = None) -> str:
    """One console line per result, e.g. ``data.001 qneh: objective=32 (ref 32, gap 0.00%)``."""
    line = f"{dataset.name} {result.algorithm}: objective={result.objective}"
    if dataset.reference is not None:
        gap = relative_gap(result.objective, dataset.reference.objective)
        line += f" (ref {dataset.reference.objective}"
        line += f", gap {gap:.2f}%)" if gap is not None else ")"
    if elapsed_ms is not None:
        line += f" | {elapsed_ms:.1f} ms"
    line += f" | sequence: {format_sequence(result.sequence)}"
    return line


@dataclass
class ResultRow:
    dataset: str
    algorithm: str
    jobs: int
    machines: int
    objective: int
    reference: int | None
    elapsed_ms: float
    sequence: str

    @classmethod
    def from_result(
        cls, dataset: Dataset, result: ScheduleResult, elapsed_ms: float
    ) -> "ResultRow":
        return cls(
            dataset=dataset.name,
            algorithm=result.algorithm,
            jobs=dataset.jobs_number,
            machines=dataset.machines_number,
            objective=result.objective,
            reference=dataset.reference.objective if dataset.reference else None,
            elapsed_ms=round(elapsed_ms, 3),
            sequence=format_sequence(result.sequence),
        )

    def gap_percent(self) -> float | None:
        return relative_gap(self.objective, self.reference)

    def to_dict(self) -> dict:
        d = asdict(self)
        gap = self.gap_percent()
        d["gap_percent"] = round(gap, 4) if gap is not None else None
        return d


def write_summary_csv(rows: Iterable[ResultRow], out_path: Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=SUMMARY_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row.to_dict())
    return out_path


def read_summary_csv(path: Path) -> List[dict]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))
