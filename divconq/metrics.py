import csv
import os
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

CSV_HEADER = ["n", "time_ns", "depth", "comparisons", "allocations", "algorithm"]


class Metrics:
    """
    Counters and timestamps an algorithm reports into while it runs.

    One instance is created by the caller and handed to every call.  The
    algorithms only ever write to it; the runner and the CSV writer read
    it afterwards.  `start`/`stop` bracket one top-level invocation and
    `reset` clears everything so the instance can be reused.

    Not thread safe: one instance per running algorithm.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.comparisons = 0
        self.allocations = 0
        self.depth = 0
        self.max_depth = 0
        self.start_ns = 0
        self.end_ns = 0

    def start(self) -> None:
        self.start_ns = time.perf_counter_ns()

    def stop(self) -> None:
        self.end_ns = time.perf_counter_ns()

    def record_comparison(self) -> None:
        self.comparisons += 1

    def record_allocation(self) -> None:
        self.allocations += 1

    def enter_recursion(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            self.max_depth = self.depth

    def exit_recursion(self) -> None:
        self.depth -= 1

    @contextmanager
    def recursion(self) -> Iterator[None]:
        self.enter_recursion()
        try:
            yield
        finally:
            self.exit_recursion()

    @property
    def elapsed_ns(self) -> int:
        return self.end_ns - self.start_ns

    def as_record(self, n: int, algorithm: str) -> Dict[str, Any]:
        return {
            "n": n,
            "time_ns": self.elapsed_ns,
            "depth": self.max_depth,
            "comparisons": self.comparisons,
            "allocations": self.allocations,
            "algorithm": algorithm,
        }

    def __repr__(self):
        return (
            f"Metrics(comparisons={self.comparisons}, allocations={self.allocations}, "
            f"max_depth={self.max_depth}, elapsed_ns={self.elapsed_ns})"
        )


def append_csv(path: str, metrics: Metrics, n: int, algorithm: str) -> Dict[str, Any]:
    """
    Appends one metrics row to the CSV file at `path`, writing the header
    first if the file does not exist yet.  Returns the row written.
    """
    record = metrics.as_record(n, algorithm)
    is_new_file = not os.path.exists(path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "a", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_HEADER, lineterminator="\n")
        if is_new_file:
            writer.writeheader()
        writer.writerow(record)
    return record
