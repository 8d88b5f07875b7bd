import random
from typing import MutableSequence, Optional

from divconq.metrics import Metrics
from divconq.utils import (
    Comparator,
    InvalidArgumentError,
    comparator,
    insertion_sort,
    swap,
)

# Ranges of at most this many elements are insertion sorted.
CUTOFF = 16


def merge_sort(
    arr: MutableSequence,
    metrics: Metrics,
    compare: Optional[Comparator] = None,
) -> None:
    """
    Stable in-place merge sort.

    Small ranges fall back to insertion sort, and the merge is skipped
    when the two sorted halves are already in order.  A single scratch
    buffer the size of the input is allocated once and shared by every
    merge.

    Args:
        arr: the sequence to sort, mutated in place.
        metrics: sink for comparisons, allocations, depth and time.
        compare: optional three-way comparator, defaults to `<`/`>`.
    """
    if arr is None:
        raise InvalidArgumentError("Array cannot be None")
    compare = comparator(compare)
    metrics.start()
    if len(arr) > 1:
        metrics.record_allocation()
        buffer = list(arr)
        _merge_sort(arr, buffer, 0, len(arr) - 1, metrics, compare)
    metrics.stop()


def _merge_sort(arr, buffer, low, high, metrics, compare):
    with metrics.recursion():
        if high - low < CUTOFF:
            insertion_sort(arr, low, high, metrics, compare)
            return
        mid = low + (high - low) // 2
        _merge_sort(arr, buffer, low, mid, metrics, compare)
        _merge_sort(arr, buffer, mid + 1, high, metrics, compare)

        # halves already in order relative to each other
        metrics.record_comparison()
        if compare(arr[mid], arr[mid + 1]) <= 0:
            return
        _merge(arr, buffer, low, mid, high, metrics, compare)


def _merge(arr, buffer, low, mid, high, metrics, compare):
    buffer[low : high + 1] = arr[low : high + 1]
    i, j = low, mid + 1
    for k in range(low, high + 1):
        if i > mid:
            arr[k] = buffer[j]
            j += 1
        elif j > high:
            arr[k] = buffer[i]
            i += 1
        else:
            metrics.record_comparison()
            # ties go left to keep the sort stable
            if compare(buffer[i], buffer[j]) <= 0:
                arr[k] = buffer[i]
                i += 1
            else:
                arr[k] = buffer[j]
                j += 1


def quick_sort(
    arr: MutableSequence,
    metrics: Metrics,
    rng: Optional[random.Random] = None,
    compare: Optional[Comparator] = None,
    cutoff: int = CUTOFF,
) -> None:
    """
    In-place randomized quicksort.  Not stable.

    The pivot is drawn uniformly from the active range using `rng`, so a
    seeded generator makes runs reproducible.  After each partition the
    smaller side is sorted by a recursive call and the larger side by
    looping, which keeps the call stack O(log n) deep.  Ranges of at most
    `cutoff` elements are insertion sorted; pass 0 to partition all the
    way down.
    """
    if arr is None:
        raise InvalidArgumentError("Array cannot be None")
    compare = comparator(compare)
    rng = rng or random.Random()
    metrics.start()
    if len(arr) > 1:
        _quick_sort(arr, 0, len(arr) - 1, metrics, rng, compare, cutoff)
    metrics.stop()


def _quick_sort(arr, low, high, metrics, rng, compare, cutoff):
    with metrics.recursion():
        while high - low + 1 > max(cutoff, 1):
            p = _partition(arr, low, high, metrics, rng, compare)
            if p - low < high - p:
                _quick_sort(arr, low, p - 1, metrics, rng, compare, cutoff)
                low = p + 1
            else:
                _quick_sort(arr, p + 1, high, metrics, rng, compare, cutoff)
                high = p - 1
        if low < high:
            insertion_sort(arr, low, high, metrics, compare)


def _partition(arr, low, high, metrics, rng, compare) -> int:
    """
    Hoare-style partition of arr[low..high] around a random pivot.
    Returns the pivot's final index: everything left of it is <= pivot,
    everything right of it is > pivot.
    """
    swap(arr, low, rng.randint(low, high))
    pivot = arr[low]
    i, j = low, high + 1
    while True:
        while i < high:
            i += 1
            metrics.record_comparison()
            if compare(arr[i], pivot) > 0:
                break
        while j > low:
            j -= 1
            metrics.record_comparison()
            if compare(arr[j], pivot) <= 0:
                break
        if i >= j:
            break
        swap(arr, i, j)
    swap(arr, low, j)
    return j
