import random
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from divconq.closest import Point, closest_pair
from divconq.metrics import Metrics, append_csv
from divconq.output import error, log, timer
from divconq.selection import select
from divconq.sorting import merge_sort, quick_sort
from divconq.utils import InvalidArgumentError

system_name = "divconq"

DEFAULT_SIZES = (100, 1000, 5000, 10000)

# Upper bound (exclusive) on generated array values.
VALUE_RANGE = 10_000

# Where metrics rows are appended when no path is given.
_metrics_filename = f"{system_name}_metrics.csv"


def set_metrics_filename(fname: str) -> str:
    """Changes the default CSV file metrics are appended to.

    Returns the previous file name.
    """
    global _metrics_filename
    old_metrics_filename = _metrics_filename
    _metrics_filename = fname
    return old_metrics_filename


def get_metrics_filename() -> str:
    return _metrics_filename


def random_array(size: int, rng: np.random.Generator) -> List[int]:
    return rng.integers(0, VALUE_RANGE, size=size).tolist()


def random_points(values: Iterable[int], rng: np.random.Generator) -> List[Point]:
    return [Point(v / 100.0, float(rng.random()) * 100.0) for v in values]


def _emit(
    csv_path: str, metrics: Metrics, n: int, algorithm: str, rows: List[Dict[str, Any]]
) -> None:
    record = metrics.as_record(n, algorithm)
    try:
        append_csv(csv_path, metrics, n, algorithm)
    except OSError as e:
        error(f"Failed to write {algorithm} metrics to {csv_path}: {e}")
    log(
        f"{algorithm}: n={n} time={record['time_ns']}ns depth={record['depth']} "
        f"comparisons={record['comparisons']} allocations={record['allocations']}"
    )
    rows.append(record)


def run_algorithms(
    size: int, csv_path: Optional[str] = None, seed: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Runs all four algorithms on copies of one random array of `size`
    integers and appends one metrics row per algorithm to `csv_path`.

    Args:
        size (int): number of elements, must be positive.
        csv_path (str, optional): CSV file to append to.  Defaults to the
            configured metrics file.
        seed (int, optional): seeds both the input generator and the
            quicksort pivot generator.

    Returns:
        list: the rows written, one dict per algorithm.
    """
    if size <= 0:
        raise InvalidArgumentError("Size must be a positive integer")
    csv_path = csv_path or _metrics_filename

    rng = np.random.default_rng(seed)
    pivot_rng = random.Random(seed)
    values = random_array(size, rng)
    metrics = Metrics()
    rows: List[Dict[str, Any]] = []

    with timer(f"MergeSort n={size}"):
        metrics.reset()
        merge_sort(list(values), metrics)
    _emit(csv_path, metrics, size, "MergeSort", rows)

    with timer(f"QuickSort n={size}"):
        metrics.reset()
        quick_sort(list(values), metrics, rng=pivot_rng)
    _emit(csv_path, metrics, size, "QuickSort", rows)

    with timer(f"DeterministicSelect n={size}"):
        metrics.reset()
        select(list(values), size // 2, metrics)
    _emit(csv_path, metrics, size, "DeterministicSelect", rows)

    if size < 2:
        log(f"ClosestPair skipped: needs at least 2 points, got {size}")
        return rows

    points = random_points(values, rng)
    with timer(f"ClosestPair n={size}"):
        metrics.reset()
        closest_pair(points, metrics)
    _emit(csv_path, metrics, size, "ClosestPair", rows)

    return rows


def run_sizes(
    sizes: Iterable[int] = DEFAULT_SIZES,
    csv_path: Optional[str] = None,
    seed: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Runs `run_algorithms` once per size, all rows into the same file."""
    rows = []
    for i, size in enumerate(sizes):
        with timer(f"Running with size {size}"):
            rows += run_algorithms(
                size, csv_path, seed=None if seed is None else seed + i
            )
    return rows
