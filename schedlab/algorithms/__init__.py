"""Scheduling algorithms.

Contains:
- NEH / QNEH construction heuristic (flow shop, Cmax)
- Simulated Annealing (flow shop, Cmax)
- Exact subset DP (single machine, weighted tardiness)
"""

from schedlab.algorithms.neh import neh, qneh
from schedlab.algorithms.sa import AnnealingScheduler, simulated_annealing
from schedlab.algorithms.witi import exact_weighted_tardiness

__all__ = [
    "AnnealingScheduler",
    "exact_weighted_tardiness",
    "neh",
    "qneh",
    "simulated_annealing",
]
