import itertools
import random

import pytest

from schedlab.generator import generate_flowshop_instance
from schedlab.makespan import MakespanEvaluator, c_max, compute_head, compute_tail
from schedlab.models import Dataset


def scenario() -> Dataset:
    return Dataset.from_durations([[3, 2], [1, 4], [5, 1]], name="scenario")


def test_c_max_small_hand_computed() -> None:
    data = scenario()
    durations = data.durations_by_id()
    assert c_max([1, 2, 3], durations) == 10
    assert c_max([2, 1, 3], durations) == 10
    assert c_max([1, 3, 2], durations) == 13
    assert c_max([3, 1, 2], durations) == 14


def test_c_max_empty_sequence_is_zero() -> None:
    assert c_max([], scenario().durations_by_id()) == 0


def test_single_machine_is_prefix_sum() -> None:
    data = Dataset.from_durations([[4], [2], [7], [1]])
    evaluator = MakespanEvaluator(data)
    assert evaluator.makespan([3, 1, 4, 2]) == 14
    head = evaluator.completion_matrix([3, 1, 4, 2])
    assert head == ((7, 11, 12, 14),)


def test_head_tail_agree_on_cmax() -> None:
    data = generate_flowshop_instance(12, 4, seed=7)
    durations = data.durations_by_id()
    seq = list(data.job_ids)
    random.Random(1).shuffle(seq)
    head = compute_head(seq, durations, 4)
    tail = compute_tail(seq, durations, 4)
    assert head[3][-1] == c_max(seq, durations)
    assert tail[0][0] == c_max(seq, durations)


def test_empty_partial_sequence_insertion_costs_total_duration() -> None:
    data = scenario()
    evaluator = MakespanEvaluator(data)
    evaluator.load([])
    assert evaluator.current_makespan() == 0
    assert evaluator.insertion_makespans(3) == [6]


@pytest.mark.parametrize("m", [1, 2, 3, 5, 10])
@pytest.mark.parametrize("n", [1, 2, 7, 20, 50])
def test_incremental_insertion_matches_full_recompute(n: int, m: int) -> None:
    data = generate_flowshop_instance(n, m, seed=n * 31 + m)
    rng = random.Random(n + m)
    evaluator = MakespanEvaluator(data)
    ids = list(data.job_ids)
    rng.shuffle(ids)
    job_id, partial = ids[0], ids[1:]
    evaluator.load(partial)
    expected = [
        evaluator.makespan(partial[:p] + [job_id] + partial[p:]) for p in range(len(partial) + 1)
    ]
    assert evaluator.insertion_makespans(job_id) == expected


def test_insert_updates_matrices_and_views_are_read_only() -> None:
    data = scenario()
    evaluator = MakespanEvaluator(data)
    evaluator.load([1])
    evaluator.insert(3, 1)
    assert evaluator.sequence == (1, 3)
    assert evaluator.current_makespan() == c_max([1, 3], data.durations_by_id())
    head = evaluator.head
    assert isinstance(head, tuple) and isinstance(head[0], tuple)
    with pytest.raises(TypeError):
        head[0][0] = 99  # type: ignore[index]


def test_best_insertion_first_minimum_wins() -> None:
    # every position gives the same Cmax for a zero-duration job
    data = Dataset.from_durations([[2, 2], [3, 1], [0, 0]])
    evaluator = MakespanEvaluator(data)
    evaluator.load([1, 2])
    values = evaluator.insertion_makespans(3)
    assert len(set(values)) == 1
    assert evaluator.best_insertion(3) == (0, values[0])


def test_insertion_position_out_of_range() -> None:
    evaluator = MakespanEvaluator(scenario())
    evaluator.load([1])
    with pytest.raises(IndexError):
        evaluator.insertion_makespan(2, 5)


def test_all_permutations_consistent_with_head() -> None:
    data = scenario()
    evaluator = MakespanEvaluator(data)
    for perm in itertools.permutations(data.job_ids):
        head = evaluator.completion_matrix(perm)
        assert head[-1][-1] == evaluator.makespan(perm)
