import math
import random

import pytest

from divconq.metrics import Metrics
from divconq.sorting import quick_sort
from divconq.utils import InvalidArgumentError


def random_array(size, seed=0):
    rand = random.Random(seed)
    return [rand.randint(0, 999) for _ in range(size)]


def test_sort_random_array():
    arr = random_array(100)
    expected = sorted(arr)
    quick_sort(arr, Metrics(), rng=random.Random(1))
    assert arr == expected


@pytest.mark.parametrize("cutoff", [0, 16])
@pytest.mark.parametrize("size", [0, 1, 2, 3, 17, 100, 1000])
def test_sorted_permutation(size, cutoff):
    arr = random_array(size, seed=size)
    expected = sorted(arr)
    quick_sort(arr, Metrics(), rng=random.Random(size), cutoff=cutoff)
    assert arr == expected


def test_sort_sorted_and_reversed():
    arr = list(range(1, 11))
    quick_sort(arr, Metrics())
    assert arr == list(range(1, 11))

    arr = list(range(10, 0, -1))
    quick_sort(arr, Metrics())
    assert arr == list(range(1, 11))


def test_sort_with_duplicates():
    arr = [5, 3, 5, 1, 4, 4, 2]
    quick_sort(arr, Metrics(), cutoff=0)
    assert arr == [1, 2, 3, 4, 4, 5, 5]


def test_all_duplicates():
    arr = [5, 5, 5, 5]
    quick_sort(arr, Metrics(), cutoff=0)
    assert arr == [5, 5, 5, 5]


def test_tiny_array():
    arr = [3, 1, 2]
    quick_sort(arr, Metrics(), cutoff=0)
    assert arr == [1, 2, 3]


def test_empty_and_single_element():
    empty = []
    quick_sort(empty, Metrics())
    assert empty == []

    single = [42]
    quick_sort(single, Metrics())
    assert single == [42]


def test_none_rejected():
    with pytest.raises(InvalidArgumentError):
        quick_sort(None, Metrics())


def test_seeded_runs_are_reproducible():
    first, second = Metrics(), Metrics()
    quick_sort(random_array(500), first, rng=random.Random(42), cutoff=0)
    quick_sort(random_array(500), second, rng=random.Random(42), cutoff=0)
    assert first.comparisons == second.comparisons
    assert first.max_depth == second.max_depth


@pytest.mark.parametrize("cutoff", [0, 16])
def test_depth_bound(cutoff):
    metrics = Metrics()
    arr = random_array(1000, seed=11)
    quick_sort(arr, metrics, cutoff=cutoff)
    assert metrics.max_depth <= 2 * math.log2(len(arr)) + 10
    assert metrics.depth == 0


def test_depth_bound_on_sorted_input():
    metrics = Metrics()
    quick_sort(list(range(1000)), metrics, rng=random.Random(5), cutoff=0)
    assert metrics.max_depth <= 2 * math.log2(1000) + 10
