import math
from dataclasses import dataclass
from operator import attrgetter
from typing import List, Sequence

from divconq.metrics import Metrics
from divconq.utils import InvalidArgumentError

# Successors examined per strip point.  Any two points closer than d in a
# d x 2d box are at most this many positions apart in y order.
STRIP_NEIGHBORS = 7


@dataclass(frozen=True)
class Point:
    """
    A point in the plane.  Sorts by x only; equality uses both coordinates.
    """

    x: float
    y: float

    def __lt__(self, other: "Point") -> bool:
        return self.x < other.x


def distance(p: Point, q: Point, metrics: Metrics) -> float:
    metrics.record_comparison()
    return math.hypot(p.x - q.x, p.y - q.y)


def closest_pair(points: Sequence[Point], metrics: Metrics) -> float:
    """
    Smallest Euclidean distance between two distinct points, in
    O(n log n).

    Coincident points are ignored, so duplicates never produce a zero
    distance unless every point lies at the same location, in which case
    the result is 0.0.

    Raises:
        InvalidArgumentError: if fewer than two points are given.
    """
    if points is None or len(points) < 2:
        raise InvalidArgumentError("At least 2 points required")
    metrics.start()
    metrics.record_allocation()
    by_x = sorted(points, key=attrgetter("x"))
    d = _closest_pair(by_x, 0, len(by_x) - 1, metrics)
    metrics.stop()
    return 0.0 if math.isinf(d) else d


def _closest_pair(pts: List[Point], left: int, right: int, metrics: Metrics) -> float:
    """
    Closest distinct pair within pts[left..right], or inf when all points
    in the range coincide.
    """
    with metrics.recursion():
        n = right - left + 1
        if n <= 3:
            return _brute_force(pts, left, right, metrics)

        mid = left + (right - left) // 2
        mid_x = pts[mid].x
        d = min(
            _closest_pair(pts, left, mid, metrics),
            _closest_pair(pts, mid + 1, right, metrics),
        )

        metrics.record_allocation()
        seen = set()
        strip = []
        for p in pts[left : right + 1]:
            if abs(p.x - mid_x) < d and p not in seen:
                seen.add(p)
                strip.append(p)

        metrics.record_allocation()
        strip.sort(key=attrgetter("y"))

        for i, p in enumerate(strip):
            for q in strip[i + 1 : i + 1 + STRIP_NEIGHBORS]:
                if q.y - p.y >= d:
                    break
                d = min(d, distance(p, q, metrics))
        return d


def _brute_force(pts: List[Point], low: int, high: int, metrics: Metrics) -> float:
    best = math.inf
    for i in range(low, high + 1):
        for j in range(i + 1, high + 1):
            if pts[i] == pts[j]:
                continue
            best = min(best, distance(pts[i], pts[j], metrics))
    return best
