"""
Score histograms over a fixed integer range.
"""
import math
from typing import Dict, Iterable, Iterator, List, Tuple

PASS_THRESHOLD = 5
PASSED_RANGE = (5, 10)
FULL_RANGE = (0, 10)


def bucket_of(score: float) -> int:
    return math.floor(score)


class Histogram:
    """
    Counts per integer bucket for every bucket in ``[lo, hi]``.

    All buckets exist from construction with a count of zero, so an empty
    input still yields the full range.
    """

    def __init__(self, lo: int, hi: int):
        if lo > hi:
            raise ValueError(f"Empty histogram range [{lo}, {hi}]")
        self.lo = lo
        self.hi = hi
        self._counts: List[int] = [0] * (hi - lo + 1)

    def add(self, score: float) -> bool:
        """Count a score. Returns False when it falls outside the range."""
        if not math.isfinite(score):
            return False
        bucket = bucket_of(score)
        if bucket < self.lo or bucket > self.hi:
            return False
        self._counts[bucket - self.lo] += 1
        return True

    def count(self, bucket: int) -> int:
        if bucket < self.lo or bucket > self.hi:
            raise KeyError(bucket)
        return self._counts[bucket - self.lo]

    def buckets(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(bucket, count)`` pairs in ascending bucket order."""
        for offset, count in enumerate(self._counts):
            yield self.lo + offset, count

    @property
    def total(self) -> int:
        return sum(self._counts)

    def to_dict(self) -> Dict[int, int]:
        return dict(self.buckets())

    def __repr__(self):
        return f"<Histogram([{self.lo}, {self.hi}], total={self.total})>"


def build_histogram(scores: Iterable[float], lo: int, hi: int) -> Histogram:
    """
    Bucket scores by ``floor(score)`` into ``[lo, hi]``.

    Scores outside the range are dropped silently; stored scores are not
    range-checked, so out-of-scale values are expected input.
    """
    histogram = Histogram(lo, hi)
    for score in scores:
        histogram.add(score)
    return histogram


def passed_histogram(best_scores: Iterable[float]) -> Histogram:
    """Distribution of passing best-attempt scores over 5-10."""
    return build_histogram(
        (s for s in best_scores if s >= PASS_THRESHOLD), *PASSED_RANGE
    )


def full_histogram(scores: Iterable[float]) -> Histogram:
    """Distribution of every raw attempt over 0-10."""
    return build_histogram(scores, *FULL_RANGE)
