"""NEH construction heuristic for permutation flow shop (Fm|prmu|Cmax).

1. Seed order: jobs by descending total processing time (stable, file order
   breaks ties).
2. Insert jobs one by one into the partial sequence at the position giving
   the smallest Cmax (earliest position on ties).

``neh`` prices every candidate by recomputing the whole schedule,
O(n^3·m) overall. ``qneh`` keeps Head/Tail of the partial sequence in a
MakespanEvaluator and prices a candidate in O(m), O(n^2·m) overall. Both
return identical sequences.
"""

from __future__ import annotations

import logging
from typing import List

from schedlab.makespan import MakespanEvaluator
from schedlab.models import Dataset, ScheduleResult


def seed_order(dataset: Dataset) -> List[int]:
    """Job ids sorted by descending total duration; ``sorted`` is stable."""
    jobs = sorted(dataset.jobs, key=lambda job: job.total_duration, reverse=True)
    return [job.id for job in jobs]


def neh(dataset: Dataset) -> ScheduleResult:
    evaluator = MakespanEvaluator(dataset)
    sequence: List[int] = []
    cmax = 0
    for job_id in seed_order(dataset):
        best_position = 0
        best_cmax = None
        for position in range(len(sequence) + 1):
            candidate = sequence[:position] + [job_id] + sequence[position:]
            value = evaluator.makespan(candidate)
            if best_cmax is None or value < best_cmax:
                best_cmax = value
                best_position = position
        sequence.insert(best_position, job_id)
        cmax = best_cmax
    logging.getLogger("schedlab").debug("[neh] %s cmax=%d", dataset.name, cmax)
    return ScheduleResult(sequence=tuple(sequence), objective=cmax, algorithm="neh")


def qneh(dataset: Dataset) -> ScheduleResult:
    evaluator = MakespanEvaluator(dataset)
    evaluator.load([])
    cmax = 0
    for job_id in seed_order(dataset):
        position, cmax = evaluator.best_insertion(job_id)
        evaluator.insert(job_id, position)
    logging.getLogger("schedlab").debug("[qneh] %s cmax=%d", dataset.name, cmax)
    return ScheduleResult(sequence=evaluator.sequence, objective=cmax, algorithm="qneh")
