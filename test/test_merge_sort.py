import random

import pytest

from divconq.metrics import Metrics
from divconq.sorting import merge_sort
from divconq.utils import InvalidArgumentError


def random_array(size, seed=0):
    rand = random.Random(seed)
    return [rand.randint(0, 999) for _ in range(size)]


def test_sort_random_array():
    metrics = Metrics()
    arr = random_array(100)
    expected = sorted(arr)
    merge_sort(arr, metrics)
    assert arr == expected


@pytest.mark.parametrize("size", [0, 1, 2, 15, 16, 17, 33, 500, 2048])
def test_sorted_permutation(size):
    arr = random_array(size, seed=size)
    expected = sorted(arr)
    merge_sort(arr, Metrics())
    assert arr == expected


def test_sort_sorted_and_reversed():
    arr = list(range(1, 101))
    merge_sort(arr, Metrics())
    assert arr == list(range(1, 101))

    arr = list(range(100, 0, -1))
    merge_sort(arr, Metrics())
    assert arr == list(range(1, 101))


def test_sort_with_duplicates():
    arr = [5, 3, 5, 1, 4, 4, 2]
    merge_sort(arr, Metrics())
    assert arr == [1, 2, 3, 4, 4, 5, 5]


def test_empty_and_single_element():
    empty = []
    merge_sort(empty, Metrics())
    assert empty == []

    single = [42]
    merge_sort(single, Metrics())
    assert single == [42]


def test_none_rejected():
    with pytest.raises(InvalidArgumentError):
        merge_sort(None, Metrics())


def test_stability():
    rand = random.Random(7)
    records = [(rand.randint(0, 9), i) for i in range(300)]
    merge_sort(records, Metrics(), compare=lambda a, b: a[0] - b[0])
    assert records == sorted(records, key=lambda r: r[0])
    for a, b in zip(records, records[1:]):
        if a[0] == b[0]:
            assert a[1] < b[1]


def test_custom_comparator_descending():
    arr = random_array(200)
    merge_sort(arr, Metrics(), compare=lambda a, b: b - a)
    assert arr == sorted(arr, reverse=True)


def test_metrics_collection():
    metrics = Metrics()
    arr = random_array(100)
    merge_sort(arr, metrics)
    assert metrics.comparisons > 0
    assert metrics.max_depth > 0
    assert metrics.depth == 0
    assert metrics.elapsed_ns > 0
    assert metrics.allocations == 1


def test_sorted_input_skips_merges():
    presorted = Metrics()
    merge_sort(list(range(1024)), presorted)
    shuffled = Metrics()
    merge_sort(random_array(1024), shuffled)
    assert presorted.comparisons < shuffled.comparisons
