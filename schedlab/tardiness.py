"""Weighted tardiness on a single machine.

tardiness = max(0, finish - due_time)
penalty   = tardiness * weight

Finish times accumulate execution times in sequence order (no idle time,
no preparation delay).
"""

from __future__ import annotations

from typing import List, Sequence

from schedlab.errors import InvalidInput
from schedlab.models import Dataset, Job


def require_tardiness_data(dataset: Dataset) -> None:
    """Raise InvalidInput unless every job carries a due time and a weight on one machine."""
    if dataset.machines_number != 1:
        raise InvalidInput(
            f"Dataset {dataset.name!r}: weighted tardiness needs 1 machine, "
            f"got {dataset.machines_number}"
        )
    for job in dataset.jobs:
        if job.due_time is None or job.weight is None:
            raise InvalidInput(f"Dataset {dataset.name!r}: job {job.id} lacks due time or weight")
        if job.weight < 0:
            raise InvalidInput(f"Dataset {dataset.name!r}: job {job.id} has negative weight")


def job_penalty(job: Job, finish: int) -> int:
    tardiness = max(0, finish - job.due_time)
    return tardiness * job.weight


def job_penalties(dataset: Dataset, sequence: Sequence[int]) -> List[int]:
    """Per-job penalties in scheduled order."""
    require_tardiness_data(dataset)
    penalties = []
    finish = 0
    for job_id in sequence:
        job = dataset.job(job_id)
        finish += job.durations[0]
        penalties.append(job_penalty(job, finish))
    return penalties


def total_weighted_tardiness(dataset: Dataset, sequence: Sequence[int]) -> int:
    return sum(job_penalties(dataset, sequence))
