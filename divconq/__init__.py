from divconq.closest import Point, closest_pair
from divconq.metrics import Metrics, append_csv
from divconq.selection import select
from divconq.sorting import merge_sort, quick_sort
from divconq.utils import InvalidArgumentError, SelectorInvariantError

__all__ = [
    "Metrics",
    "append_csv",
    "merge_sort",
    "quick_sort",
    "select",
    "closest_pair",
    "Point",
    "InvalidArgumentError",
    "SelectorInvariantError",
]
