import csv
import time

from divconq.metrics import CSV_HEADER, Metrics, append_csv


def test_timing():
    metrics = Metrics()
    metrics.start()
    time.sleep(0.01)
    metrics.stop()
    assert metrics.elapsed_ns > 0


def test_counters():
    metrics = Metrics()
    metrics.record_comparison()
    metrics.record_comparison()
    metrics.record_allocation()
    assert metrics.comparisons == 2
    assert metrics.allocations == 1


def test_recursion_depth():
    metrics = Metrics()
    metrics.enter_recursion()
    metrics.enter_recursion()
    assert metrics.max_depth == 2
    metrics.exit_recursion()
    metrics.enter_recursion()  # max stays 2
    assert metrics.max_depth == 2
    metrics.exit_recursion()
    metrics.exit_recursion()
    assert metrics.depth == 0


def test_recursion_context_exits_on_error():
    metrics = Metrics()
    try:
        with metrics.recursion():
            raise KeyError("boom")
    except KeyError:
        pass
    assert metrics.depth == 0
    assert metrics.max_depth == 1


def test_reset():
    metrics = Metrics()
    metrics.start()
    metrics.record_comparison()
    metrics.record_allocation()
    metrics.enter_recursion()
    metrics.stop()
    metrics.reset()
    assert metrics.comparisons == 0
    assert metrics.allocations == 0
    assert metrics.depth == 0
    assert metrics.max_depth == 0
    assert metrics.elapsed_ns == 0


def test_append_csv_writes_header_once(tmp_path):
    path = tmp_path / "out" / "metrics.csv"
    metrics = Metrics()
    metrics.start()
    metrics.record_comparison()
    metrics.enter_recursion()
    metrics.exit_recursion()
    metrics.stop()

    append_csv(str(path), metrics, 100, "MergeSort")
    append_csv(str(path), metrics, 200, "QuickSort")

    with open(path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == CSV_HEADER
    assert len(rows) == 3
    n, time_ns, depth, comparisons, allocations, algorithm = rows[1]
    assert n == "100"
    assert int(time_ns) > 0
    assert depth == "1"
    assert comparisons == "1"
    assert allocations == "0"
    assert algorithm == "MergeSort"
    assert rows[2][0] == "200"
    assert rows[2][5] == "QuickSort"
