import random
from typing import Any, Callable, MutableSequence, Optional

from divconq.metrics import Metrics

Comparator = Callable[[Any, Any], int]


class InvalidArgumentError(ValueError):
    """
    Raised when an algorithm is handed input it cannot work on: a missing
    or empty array, a rank outside the array, or too few points.
    Always raised before the input is touched.
    """


class SelectorInvariantError(RuntimeError):
    """
    Raised when the selector cannot find the pivot it just computed inside
    the range it is partitioning.  Signals a broken comparator.
    """


def natural_compare(a: Any, b: Any) -> int:
    """Three-way comparison using the elements' own ordering."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def comparator(compare: Optional[Comparator]) -> Comparator:
    return compare if compare is not None else natural_compare


def check_not_empty(arr: Optional[MutableSequence]) -> None:
    if arr is None:
        raise InvalidArgumentError("Array cannot be None")
    if len(arr) == 0:
        raise InvalidArgumentError("Array cannot be empty")


def swap(arr: MutableSequence, i: int, j: int) -> None:
    if arr is None:
        raise InvalidArgumentError("Array cannot be None")
    n = len(arr)
    if i < 0 or j < 0 or i >= n or j >= n:
        raise InvalidArgumentError(f"Index out of bounds: ({i}, {j}) for length {n}")
    arr[i], arr[j] = arr[j], arr[i]


def shuffle(arr: MutableSequence, rng: Optional[random.Random] = None) -> None:
    """Fisher-Yates shuffle in place."""
    if arr is None:
        raise InvalidArgumentError("Array cannot be None")
    rng = rng or random.Random()
    for i in range(len(arr) - 1, 0, -1):
        swap(arr, i, rng.randint(0, i))


def insertion_sort(
    arr: MutableSequence,
    low: int,
    high: int,
    metrics: Metrics,
    compare: Comparator,
) -> None:
    """
    Stable insertion sort of arr[low..high] (inclusive), counting every
    element comparison.
    """
    for i in range(low + 1, high + 1):
        key = arr[i]
        j = i - 1
        while j >= low:
            metrics.record_comparison()
            if compare(arr[j], key) > 0:
                arr[j + 1] = arr[j]
                j -= 1
            else:
                break
        arr[j + 1] = key
