"""Makespan evaluation for permutation flow shop.

Contains:
- c_max: full recomputation of Cmax for a (partial) sequence, O(n·m)
- compute_head: forward completion matrix (Head)
- compute_tail: backward completion matrix (Tail)
- rpq_c_max: single machine makespan with release and delivery times
- MakespanEvaluator: owns Head/Tail of a partial sequence and prices the
  insertion of a new job at any position in O(m)

Matrices are indexed ``[machine][position]``.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from schedlab.errors import InvalidInput
from schedlab.models import Dataset

Durations = Dict[int, Sequence[int]]  # job_id -> per-machine durations


def c_max(sequence: Sequence[int], durations: Durations) -> int:
    """Return the makespan of ``sequence`` (0 for an empty sequence).

    Keeps only one completion value per machine while sweeping jobs.
    """
    if not sequence:
        return 0
    m = len(durations[sequence[0]])
    last_completion = [0] * m
    completion = 0
    for job_id in sequence:
        times = durations[job_id]
        completion = 0
        for i in range(m):
            # the job starts after itself on the previous machine
            # and after the previous job on the same machine
            completion = max(completion, last_completion[i]) + times[i]
            last_completion[i] = completion
    return completion


def rpq_c_max(dataset: Dataset, sequence: Sequence[int]) -> int:
    """Return Cmax of ``sequence`` on one machine with preparation (r) and delivery (q) times.

    A job starts once the machine is free and its preparation time has passed;
    Cmax is the latest completion plus delivery.
    """
    if dataset.machines_number != 1:
        raise InvalidInput(
            f"Dataset {dataset.name!r}: release/delivery makespan needs 1 machine, "
            f"got {dataset.machines_number}"
        )
    time = 0
    cmax = 0
    for job_id in sequence:
        job = dataset.job(job_id)
        time = max(time, job.preparation_time or 0) + job.durations[0]
        cmax = max(cmax, time + (job.delivery_time or 0))
    return cmax


def compute_head(sequence: Sequence[int], durations: Durations, m: int) -> List[List[int]]:
    """Compute Head matrix (forward completion times).

    Head[i][j] = completion time of the job at position j on machine i.

    Complexity: O(m·n)
    """
    n = len(sequence)
    head = [[0] * n for _ in range(m)]
    for j, job_id in enumerate(sequence):
        times = durations[job_id]
        for i in range(m):
            left = head[i][j - 1] if j > 0 else 0
            top = head[i - 1][j] if i > 0 else 0
            head[i][j] = max(left, top) + times[i]
    return head


def compute_tail(sequence: Sequence[int], durations: Durations, m: int) -> List[List[int]]:
    """Compute Tail matrix (backward remaining times).

    Tail[i][j] = time needed from the start of position j on machine i until
    all remaining work is done. Same recurrence as Head, traversed from the
    last machine and the last position.

    Complexity: O(m·n)
    """
    n = len(sequence)
    tail = [[0] * n for _ in range(m)]
    for j in range(n - 1, -1, -1):
        times = durations[sequence[j]]
        for i in range(m - 1, -1, -1):
            right = tail[i][j + 1] if j + 1 < n else 0
            bottom = tail[i + 1][j] if i + 1 < m else 0
            tail[i][j] = max(right, bottom) + times[i]
    return tail


def _freeze(matrix: List[List[int]]) -> Tuple[Tuple[int, ...], ...]:
    return tuple(tuple(row) for row in matrix)


class MakespanEvaluator:
    """Makespan oracle for one scheduling run.

    Full mode (``makespan``) recomputes the whole schedule. Incremental mode
    keeps Head and Tail of a partial sequence (``load`` / ``insert``) so that
    the makespan after inserting a job at position p is

        c[i] = max(c[i-1], Head[i][p-1]) + d[i]
        Cmax = max_i (c[i] + Tail[i][p])

    which costs O(m) per candidate position instead of O(n·m).
    """

    def __init__(self, dataset: Dataset) -> None:
        self.machines_number = dataset.machines_number
        self._durations: Durations = dataset.durations_by_id()
        self._sequence: List[int] = []
        self._head: List[List[int]] = [[] for _ in range(self.machines_number)]
        self._tail: List[List[int]] = [[] for _ in range(self.machines_number)]

    # ---------- full recomputation ----------
    def makespan(self, sequence: Sequence[int]) -> int:
        return c_max(sequence, self._durations)

    def completion_matrix(self, sequence: Sequence[int]) -> Tuple[Tuple[int, ...], ...]:
        return _freeze(compute_head(sequence, self._durations, self.machines_number))

    # ---------- incremental (Head + Tail) ----------
    def load(self, sequence: Sequence[int]) -> None:
        """Take ``sequence`` as the current partial sequence and rebuild Head/Tail."""
        self._sequence = list(sequence)
        self._rebuild()

    def _rebuild(self) -> None:
        m = self.machines_number
        self._head = compute_head(self._sequence, self._durations, m)
        self._tail = compute_tail(self._sequence, self._durations, m)

    @property
    def sequence(self) -> Tuple[int, ...]:
        return tuple(self._sequence)

    @property
    def head(self) -> Tuple[Tuple[int, ...], ...]:
        return _freeze(self._head)

    @property
    def tail(self) -> Tuple[Tuple[int, ...], ...]:
        return _freeze(self._tail)

    def current_makespan(self) -> int:
        if not self._sequence:
            return 0
        return self._head[self.machines_number - 1][-1]

    def insertion_makespan(self, job_id: int, position: int) -> int:
        """Cmax of the current partial sequence with ``job_id`` inserted at ``position``."""
        k = len(self._sequence)
        if not 0 <= position <= k:
            raise IndexError(f"insert position {position} out of range 0..{k}")
        times = self._durations[job_id]
        head = self._head
        tail = self._tail
        completion = 0
        cmax = 0
        for i in range(self.machines_number):
            left = head[i][position - 1] if position > 0 else 0
            completion = max(completion, left) + times[i]
            remaining = tail[i][position] if position < k else 0
            if completion + remaining > cmax:
                cmax = completion + remaining
        return cmax

    def insertion_makespans(self, job_id: int) -> List[int]:
        """Cmax for every insert position 0..len(partial sequence)."""
        return [
            self.insertion_makespan(job_id, position)
            for position in range(len(self._sequence) + 1)
        ]

    def best_insertion(self, job_id: int) -> Tuple[int, int]:
        """Return ``(position, cmax)`` of the best insertion; ties -> earliest position."""
        best_position = 0
        best_cmax = None
        for position in range(len(self._sequence) + 1):
            cmax = self.insertion_makespan(job_id, position)
            if best_cmax is None or cmax < best_cmax:
                best_cmax = cmax
                best_position = position
        return best_position, best_cmax

    def insert(self, job_id: int, position: int) -> None:
        """Confirm an insertion and update Head/Tail to the new partial sequence."""
        self._sequence.insert(position, job_id)
        self._rebuild()
