"""Simulated Annealing for permutation flow shop (Fm|prmu|Cmax).

Start from the identity order, propose a swap of two random positions each
cycle, accept with the Metropolis rule and cool geometrically:

    accept if delta < 0 or rng.random() < exp(-delta / T)
    T <- T * cooling_factor

Temperatures can be calibrated from the instance: the largest observed
|delta| of random swaps should be accepted with probability 0.9 at the start,
the smallest one with probability 0.1 at the end.
"""

from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Tuple

from schedlab.algorithms.base import (
    SearchState,
    log_iteration,
    open_trace_file,
    swap_positions,
)
from schedlab.errors import InvalidConfiguration
from schedlab.makespan import MakespanEvaluator
from schedlab.models import Dataset, ScheduleResult

START_ACCEPTANCE = 0.9
END_ACCEPTANCE = 0.1
DEFAULT_SAMPLES = 1000
DEFAULT_TRACE_EVERY = 100


def random_swap(sequence: List[int], rng: random.Random) -> List[int]:
    """Swap two distinct uniformly drawn positions (resampled until distinct)."""
    n = len(sequence)
    first = rng.randrange(n)
    second = rng.randrange(n)
    while second == first:
        second = rng.randrange(n)
    return swap_positions(sequence, first, second)


def estimate_delta_extremes(
    dataset: Dataset,
    samples: int = DEFAULT_SAMPLES,
    rng: Optional[random.Random] = None,
) -> Tuple[int, int]:
    """Sample random swaps of the identity order and return ``(max_delta, min_delta)``.

    Every sample swaps two positions of the identity order; its |delta| is
    taken against the makespan of the previous sample. Zero values are
    floored to 1 so the derived temperatures stay positive.
    """
    if samples < 1:
        raise InvalidConfiguration(f"samples must be >= 1, got {samples}")
    if rng is None:
        rng = random.Random()
    identity = list(dataset.job_ids)
    if len(identity) < 2:
        return 1, 1
    evaluator = MakespanEvaluator(dataset)
    previous = evaluator.makespan(identity)
    max_delta = 0
    min_delta = None
    for _ in range(samples):
        cmax = evaluator.makespan(random_swap(identity, rng))
        delta = abs(cmax - previous)
        max_delta = max(max_delta, delta)
        min_delta = delta if min_delta is None else min(min_delta, delta)
        previous = cmax
    return max(max_delta, 1), max(min_delta, 1)


def initial_temperatures(max_delta: int, min_delta: int) -> Tuple[float, float]:
    """Return ``(initial_temp, final_temp)`` for the given delta extremes."""
    if max_delta <= 0 or min_delta <= 0:
        raise InvalidConfiguration("max_delta and min_delta must be greater than 0")
    initial_temp = -max_delta / math.log(START_ACCEPTANCE)
    final_temp = -min_delta / math.log(END_ACCEPTANCE)
    return initial_temp, final_temp


def cooling_factor_for(initial_temp: float, final_temp: float, cycles: int) -> float:
    """Factor that takes T from ``initial_temp`` to ``final_temp`` in ``cycles`` steps."""
    if initial_temp <= 0 or final_temp <= 0:
        raise InvalidConfiguration("initial_temp and final_temp must be greater than 0")
    if cycles <= 0:
        raise InvalidConfiguration(f"cycles must be > 0 to derive a cooling factor, got {cycles}")
    return (final_temp / initial_temp) ** (1.0 / cycles)


class AnnealingScheduler:
    """Simulated annealing with a fixed number of cycles and geometric cooling.

    Args:
        cycles: Number of iterations (0 returns the identity order).
        initial_temp: Starting temperature (> 0).
        cooling_factor: Multiplier applied every iteration, in (0, 1).
        rng: Random source owned by this scheduler.
        track_best: Return the best sequence seen instead of the final one.
        trace_every: Period (in iterations) of history/trace records.

    Raises:
        InvalidConfiguration: If any parameter is out of range.
    """

    def __init__(
        self,
        cycles: int,
        initial_temp: float,
        cooling_factor: float,
        rng: Optional[random.Random] = None,
        track_best: bool = False,
        trace_every: int = DEFAULT_TRACE_EVERY,
    ) -> None:
        if not isinstance(cycles, int) or cycles < 0:
            raise InvalidConfiguration(f"cycles must be a non-negative integer, got {cycles!r}")
        if not initial_temp > 0 or math.isinf(initial_temp):
            raise InvalidConfiguration(f"initial_temp must be positive, got {initial_temp!r}")
        if not 0 < cooling_factor < 1:
            raise InvalidConfiguration(f"cooling_factor must be in (0, 1), got {cooling_factor!r}")
        if trace_every < 1:
            raise InvalidConfiguration(f"trace_every must be >= 1, got {trace_every!r}")
        self.cycles = cycles
        self.initial_temp = initial_temp
        self.cooling_factor = cooling_factor
        self.rng = rng if rng is not None else random.Random()
        self.track_best = track_best
        self.trace_every = trace_every

    @classmethod
    def calibrated(
        cls,
        dataset: Dataset,
        cycles: int,
        samples: int = DEFAULT_SAMPLES,
        rng: Optional[random.Random] = None,
        track_best: bool = False,
        trace_every: int = DEFAULT_TRACE_EVERY,
    ) -> "AnnealingScheduler":
        """Derive temperatures and cooling factor from random swaps on ``dataset``."""
        if rng is None:
            rng = random.Random()
        max_delta, min_delta = estimate_delta_extremes(dataset, samples, rng)
        initial_temp, final_temp = initial_temperatures(max_delta, min_delta)
        if cycles == 0:
            # nothing cools; keep a valid factor (the one-step ratio)
            cooling = final_temp / initial_temp
        else:
            cooling = cooling_factor_for(initial_temp, final_temp, cycles)
        logging.getLogger("schedlab").info(
            "[sa] %s calibrated max_delta=%d min_delta=%d T0=%.3f Tf=%.3f cooling=%.8f",
            dataset.name,
            max_delta,
            min_delta,
            initial_temp,
            final_temp,
            cooling,
        )
        return cls(
            cycles,
            initial_temp,
            cooling,
            rng=rng,
            track_best=track_best,
            trace_every=trace_every,
        )

    def schedule(
        self,
        dataset: Dataset,
        trace_path: str | None = None,
        history: list[tuple[int, int]] | None = None,
    ) -> ScheduleResult:
        """Run the annealing loop on ``dataset``.

        Args:
            dataset: Flow-shop dataset.
            trace_path: Optional CSV file receiving
                ``iteration,temperature,current_cmax,best_cmax`` rows.
            history: Optional list extended in place with
                ``(iteration, current_cmax)`` records.
        """
        evaluator = MakespanEvaluator(dataset)
        identity = list(dataset.job_ids)
        cmax = evaluator.makespan(identity)
        state = SearchState(
            current_sequence=identity,
            current_cmax=cmax,
            best_sequence=identity.copy(),
            best_cmax=cmax,
            temperature=self.initial_temp,
            cooling_factor=self.cooling_factor,
        )
        state.history.append((0, cmax))
        rng = self.rng
        movable = len(identity) >= 2

        with open_trace_file(trace_path) as writer:
            log_iteration(writer, state)
            for iteration in range(1, self.cycles + 1):
                state.iteration = iteration
                if movable:
                    neighbor = random_swap(state.current_sequence, rng)
                    neighbor_cmax = evaluator.makespan(neighbor)
                    delta = neighbor_cmax - state.current_cmax
                    if delta < 0:
                        state.accept(neighbor, neighbor_cmax)
                    elif state.temperature > 0 and rng.random() < math.exp(
                        -delta / state.temperature
                    ):
                        state.accept(neighbor, neighbor_cmax)
                state.cool()
                if state.iteration % self.trace_every == 0:
                    state.history.append((state.iteration, state.current_cmax))
                    log_iteration(writer, state)

        if history is not None:
            history.extend(state.history)
        logging.getLogger("schedlab").info(
            "[sa] %s cycles=%d current=%d best=%d final_T=%.4g",
            dataset.name,
            self.cycles,
            state.current_cmax,
            state.best_cmax,
            state.temperature,
        )
        if self.track_best:
            return ScheduleResult(
                sequence=tuple(state.best_sequence), objective=state.best_cmax, algorithm="sa"
            )
        return ScheduleResult(
            sequence=tuple(state.current_sequence), objective=state.current_cmax, algorithm="sa"
        )


def simulated_annealing(
    dataset: Dataset,
    cycles: int = 100000,
    samples: int = DEFAULT_SAMPLES,
    rng: Optional[random.Random] = None,
    track_best: bool = False,
    trace_every: int = DEFAULT_TRACE_EVERY,
    trace_path: str | None = None,
    history: list[tuple[int, int]] | None = None,
) -> ScheduleResult:
    """Calibrate temperatures on ``dataset`` and run simulated annealing."""
    scheduler = AnnealingScheduler.calibrated(
        dataset,
        cycles,
        samples=samples,
        rng=rng,
        track_best=track_best,
        trace_every=trace_every,
    )
    return scheduler.schedule(dataset, trace_path=trace_path, history=history)
