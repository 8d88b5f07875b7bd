"""
Worst-case linear order-statistic selection.

The pivot is the median of the medians of groups of five, which
guarantees that each partition throws away a constant fraction of the
range:

    T(n) <= T(n/5) + T(7n/10) + O(n)  =>  T(n) = O(n)

Duplicates of the pivot are gathered by a three-way partition, so arrays
with many equal keys terminate as soon as the rank lands in the equal run.
"""

from typing import Any, MutableSequence, Optional, Tuple

from divconq.metrics import Metrics
from divconq.utils import (
    Comparator,
    InvalidArgumentError,
    SelectorInvariantError,
    check_not_empty,
    comparator,
    insertion_sort,
    swap,
)

GROUP_SIZE = 5


def select(
    arr: MutableSequence,
    k: int,
    metrics: Metrics,
    compare: Optional[Comparator] = None,
) -> Any:
    """
    Returns the element that would sit at index `k` (0-based) if `arr`
    were sorted.  `arr` is partially reordered in place.

    Raises:
        InvalidArgumentError: if `arr` is None or empty, or `k` is not
            in [0, len(arr)).
        SelectorInvariantError: if the comparator is inconsistent.
    """
    check_not_empty(arr)
    if k < 0 or k >= len(arr):
        raise InvalidArgumentError(f"k out of bounds: {k} for length {len(arr)}")
    compare = comparator(compare)
    metrics.start()
    result = _select(arr, 0, len(arr) - 1, k, metrics, compare)
    metrics.stop()
    return result


def _select(arr, low, high, k, metrics, compare):
    # k is relative to low
    with metrics.recursion():
        while low < high:
            pivot = _median_of_medians(arr, low, high, metrics, compare)
            lt, gt = _three_way_partition(arr, low, high, pivot, metrics, compare)

            size = high - low + 1
            less = lt - low
            less_or_equal = gt - low + 1

            if k < less:
                if less <= size - less:
                    return _select(arr, low, lt - 1, k, metrics, compare)
                high = lt - 1
            elif k < less_or_equal:
                return pivot
            else:
                greater = high - gt
                k -= less_or_equal
                if greater <= size - greater:
                    return _select(arr, gt + 1, high, k, metrics, compare)
                low = gt + 1
        return arr[low]


def _median_of_medians(arr, low, high, metrics, compare):
    n = high - low + 1
    if n <= GROUP_SIZE:
        insertion_sort(arr, low, high, metrics, compare)
        return arr[low + n // 2]

    metrics.record_allocation()
    medians = []
    for group_low in range(low, high + 1, GROUP_SIZE):
        group_high = min(group_low + GROUP_SIZE - 1, high)
        insertion_sort(arr, group_low, group_high, metrics, compare)
        medians.append(arr[(group_low + group_high) // 2])

    return _select(medians, 0, len(medians) - 1, len(medians) // 2, metrics, compare)


def _three_way_partition(
    arr, low, high, pivot, metrics, compare
) -> Tuple[int, int]:
    """
    Rearranges arr[low..high] into < pivot | == pivot | > pivot and
    returns (lt, gt), the first and last index of the equal run.
    """
    for j in range(low, high + 1):
        metrics.record_comparison()
        if compare(arr[j], pivot) == 0:
            swap(arr, j, high)
            break
    else:
        raise SelectorInvariantError(f"Pivot {pivot!r} not found in [{low}, {high}]")

    anchor = arr[high]
    lt, i, gt = low, low, high
    while i <= gt:
        metrics.record_comparison()
        cmp = compare(arr[i], anchor)
        if cmp < 0:
            swap(arr, lt, i)
            lt += 1
            i += 1
        elif cmp > 0:
            swap(arr, i, gt)
            gt -= 1
        else:
            i += 1
    return lt, gt
