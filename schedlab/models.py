"""Core data structures for scheduling datasets and results.

This module defines:
    Job             -- one job with its per-machine durations and optional
                       single-machine attributes (due time, weight, ...).
    Dataset         -- immutable, validated container with all jobs of one
                       instance.
    ReferenceResult -- reference objective/sequence shipped with a dataset.
    ScheduleResult  -- sequence of job ids plus its objective value.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from schedlab.errors import InvalidInput

JobSequence = tuple[int, ...]  # ordered job ids (1-based)


@dataclass(frozen=True)
class Job:
    """Single job of a scheduling instance.

    Attributes:
        id: 1-based identifier, stable for the lifetime of the dataset.
        durations: Processing time on each machine, in machine order.
        due_time: Required completion time (weighted tardiness variant).
        weight: Penalty per unit of tardiness (weighted tardiness variant).
        preparation_time: Release time before the job may start.
        delivery_time: Time the job still needs after leaving the machine.
    """

    id: int
    durations: tuple[int, ...]
    due_time: int | None = None
    weight: int | None = None
    preparation_time: int | None = None
    delivery_time: int | None = None

    @property
    def total_duration(self) -> int:
        return sum(self.durations)


@dataclass(frozen=True)
class ReferenceResult:
    """Reference objective (and optionally sequence) used for comparison only."""

    objective: int
    sequence: JobSequence | None = None


@dataclass(frozen=True)
class Dataset:
    """Immutable representation of one scheduling instance.

    Attributes:
        jobs: Jobs in original file order; ``jobs[k].id == k + 1``.
        machines_number: Number of machines (M >= 1).
        name: Label of the instance (e.g. ``data.001``).
        reference: Optional reference result read from the instance file.

    Raises:
        InvalidInput: On an empty job list, a non-positive machine count,
            a duration vector whose length differs from ``machines_number``,
            negative or non-integer durations, or ids not equal to 1..n.
    """

    jobs: tuple[Job, ...]
    machines_number: int
    name: str = ""
    reference: ReferenceResult | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "jobs", tuple(self.jobs))
        if not self.jobs:
            raise InvalidInput(f"Dataset {self.name!r} has no jobs")
        if self.machines_number < 1:
            raise InvalidInput(f"Dataset {self.name!r}: machines_number must be >= 1")
        for position, job in enumerate(self.jobs, start=1):
            if job.id != position:
                raise InvalidInput(
                    f"Dataset {self.name!r}: job at position {position} has id {job.id}"
                )
            if len(job.durations) != self.machines_number:
                raise InvalidInput(
                    f"Dataset {self.name!r}: job {job.id} has {len(job.durations)} durations, "
                    f"expected {self.machines_number}"
                )
            for duration in job.durations:
                if not isinstance(duration, int) or duration < 0:
                    raise InvalidInput(
                        f"Dataset {self.name!r}: job {job.id} has invalid duration {duration!r}"
                    )

    @property
    def jobs_number(self) -> int:
        return len(self.jobs)

    @property
    def job_ids(self) -> JobSequence:
        return tuple(job.id for job in self.jobs)

    def job(self, job_id: int) -> Job:
        if not 1 <= job_id <= len(self.jobs):
            raise InvalidInput(f"Job id out of range: {job_id}")
        return self.jobs[job_id - 1]

    def durations_by_id(self) -> dict[int, tuple[int, ...]]:
        return {job.id: job.durations for job in self.jobs}

    @classmethod
    def from_durations(
        cls,
        durations: list[list[int]],
        name: str = "",
        reference: ReferenceResult | None = None,
    ) -> "Dataset":
        """Build a flow-shop dataset from a jobs x machines duration table."""
        if not durations:
            raise InvalidInput(f"Dataset {name!r} has no jobs")
        jobs = tuple(Job(id=k, durations=tuple(row)) for k, row in enumerate(durations, start=1))
        return cls(jobs=jobs, machines_number=len(durations[0]), name=name, reference=reference)


@dataclass(frozen=True)
class ScheduleResult:
    """Final sequence plus its objective (makespan or total weighted tardiness).

    Fields:
        sequence: Ordered job ids, each exactly once.
        objective: Objective value of ``sequence``.
        algorithm: Name of the algorithm that produced the result.
    """

    sequence: JobSequence
    objective: int
    algorithm: str = ""


def validate_sequence(dataset: Dataset, sequence: JobSequence | list[int]) -> bool:
    """Check that ``sequence`` is a permutation of the dataset job ids.

    Returns:
        True if valid, so the call can be used inside assertions.

    Raises:
        InvalidInput: If the length differs, an id is out of range or repeated.
    """
    if len(sequence) != dataset.jobs_number:
        raise InvalidInput(
            f"Sequence length {len(sequence)} != jobs_number {dataset.jobs_number}"
        )
    seen: set[int] = set()
    for job_id in sequence:
        if not 1 <= job_id <= dataset.jobs_number:
            raise InvalidInput(f"Job id out of range: {job_id}")
        if job_id in seen:
            raise InvalidInput(f"Job id repeated in sequence: {job_id}")
        seen.add(job_id)
    return True
