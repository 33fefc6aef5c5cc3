"""Scheduling lab algorithms: NEH/QNEH, simulated annealing and exact weighted tardiness.

Exports base data structures, evaluators and parsing utilities.
"""

from schedlab.errors import (  # noqa: F401
    Intractable,
    InvalidConfiguration,
    InvalidInput,
    SchedulingError,
)
from schedlab.makespan import MakespanEvaluator, c_max  # noqa: F401
from schedlab.models import Dataset, Job, ReferenceResult, ScheduleResult  # noqa: F401
from schedlab.parser import load_instances  # noqa: F401
from schedlab.tardiness import total_weighted_tardiness  # noqa: F401

__all__ = [
    "Dataset",
    "Intractable",
    "InvalidConfiguration",
    "InvalidInput",
    "Job",
    "MakespanEvaluator",
    "ReferenceResult",
    "ScheduleResult",
    "SchedulingError",
    "c_max",
    "load_instances",
    "total_weighted_tardiness",
]
