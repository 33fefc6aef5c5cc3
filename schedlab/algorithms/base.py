"""Common structures and helper functions for local search algorithms."""

from __future__ import annotations

import csv
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Tuple

TRACE_COLUMNS = ("iteration", "temperature", "current_cmax", "best_cmax")


@dataclass
class SearchState:
    """Mutable state of one annealing run."""

    current_sequence: List[int]
    current_cmax: int
    best_sequence: List[int]
    best_cmax: int
    temperature: float
    cooling_factor: float
    iteration: int = 0
    history: List[Tuple[int, int]] = field(default_factory=list)

    def accept(self, sequence: List[int], cmax: int) -> None:
        self.current_sequence = sequence
        self.current_cmax = cmax
        if cmax < self.best_cmax:
            self.best_cmax = cmax
            self.best_sequence = sequence.copy()

    def cool(self) -> None:
        self.temperature *= self.cooling_factor


def swap_positions(sequence: List[int], i: int, j: int) -> List[int]:
    """Return a new sequence with elements at positions i and j swapped."""
    neighbor = sequence.copy()
    neighbor[i], neighbor[j] = neighbor[j], neighbor[i]
    return neighbor


@contextmanager
def open_trace_file(path: str | None) -> Iterator[Any]:
    """Yield a csv writer for the trace file (or None when tracing is off)."""
    if not path:
        yield None
        return
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(TRACE_COLUMNS)
        yield writer


def log_iteration(writer: Any, state: SearchState) -> None:
    if writer is not None:
        writer.writerow(
            (state.iteration, f"{state.temperature:.6g}", state.current_cmax, state.best_cmax)
        )
