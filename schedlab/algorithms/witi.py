"""Exact single-machine weighted tardiness (1||ΣwT) by subset dynamic programming.

dp[mask] = minimum total penalty when exactly the jobs in ``mask`` are done
first. Since there is one machine and no setup, the finish time of the last
job in ``mask`` is simply the sum of its durations, so

    dp[mask | 1<<i] = min(dp[mask | 1<<i], dp[mask] + w_i * max(0, time(mask) + p_i - d_i))

Complexity: O(n·2^n) time, O(2^n) memory.
"""

from __future__ import annotations

import logging
from typing import List

from schedlab.errors import Intractable
from schedlab.models import Dataset, ScheduleResult
from schedlab.tardiness import require_tardiness_data

DEFAULT_MAX_JOBS = 20


def exact_weighted_tardiness(
    dataset: Dataset,
    max_jobs: int = DEFAULT_MAX_JOBS,
) -> ScheduleResult:
    """Return a minimum weighted tardiness sequence.

    Masks are visited in ascending order, jobs inside a mask in ascending
    index order, and a transition replaces the stored value only when it is
    strictly better, so the first optimal predecessor found is kept.

    Args:
        dataset: Single-machine dataset with due times and weights.
        max_jobs: Largest job count accepted; raise it explicitly to run
            bigger instances.

    Raises:
        InvalidInput: If the dataset is not a weighted tardiness instance.
        Intractable: If ``dataset.jobs_number > max_jobs``.
    """
    require_tardiness_data(dataset)
    n = dataset.jobs_number
    if n > max_jobs:
        raise Intractable(
            f"Dataset {dataset.name!r}: {n} jobs exceeds exact DP bound of {max_jobs}"
        )

    p = [job.durations[0] for job in dataset.jobs]
    w = [job.weight for job in dataset.jobs]
    d = [job.due_time for job in dataset.jobs]

    full = (1 << n) - 1
    size = 1 << n
    inf = float("inf")
    dp: List[float] = [inf] * size
    last_job = [-1] * size
    span = [0] * size
    dp[0] = 0

    for mask in range(size):
        if mask:
            low = mask & -mask
            span[mask] = span[mask ^ low] + p[low.bit_length() - 1]
        value = dp[mask]
        if value == inf:
            continue
        elapsed = span[mask]
        for i in range(n):
            bit = 1 << i
            if mask & bit:
                continue
            finish = elapsed + p[i]
            penalty = max(0, finish - d[i]) * w[i]
            nxt = mask | bit
            if value + penalty < dp[nxt]:
                dp[nxt] = value + penalty
                last_job[nxt] = i

    order: List[int] = []
    mask = full
    while mask:
        i = last_job[mask]
        order.append(i + 1)
        mask &= ~(1 << i)
    order.reverse()

    logging.getLogger("schedlab").debug(
        "[witi] %s n=%d states=%d penalty=%s", dataset.name, n, size, dp[full]
    )
    return ScheduleResult(sequence=tuple(order), objective=int(dp[full]), algorithm="witi")
