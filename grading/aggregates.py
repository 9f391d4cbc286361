"""
Aggregate views over best attempts: average stats and semester rosters.
"""
import math
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from database import Course, Grade
from .histogram import PASS_THRESHOLD, Histogram, passed_histogram
from .ranking import select_best_attempts

# Labels for courses without a semester. The two views differ in case and
# clients depend on both spellings.
PASSED_UNSPECIFIED_LABEL = "Unspecified"
ALL_COURSES_UNSPECIFIED_LABEL = "unspecified"

# Enough digits to hold any finite double exactly, quantized to cents.
DECIMAL_PRECISION = 800


def _quantize(value: Decimal, places: int) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(value.quantize(quantum, rounding=ROUND_HALF_UP))


def round_half_away(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals, halves away from zero. NaN and inf pass through."""
    if not math.isfinite(value):
        return value
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return _quantize(Decimal(repr(float(value))), places)


def mean_half_away(values: Sequence[float], places: int = 2) -> float:
    """
    Arithmetic mean rounded like ``round_half_away``.

    The sum is taken in decimal so large finite scores cannot overflow
    to inf on the way to the mean.
    """
    if not all(math.isfinite(v) for v in values):
        return sum(values) / len(values)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        total = sum((Decimal(repr(float(v))) for v in values), Decimal(0))
        return _quantize(total / len(values), places)


@dataclass
class AverageStats:
    total_courses: int
    average_score: float
    distribution: Histogram

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCourses": self.total_courses,
            "averageScore": self.average_score,
            "gradeDistribution": self.distribution.to_dict(),
        }


def compute_average_stats(best_scores: Iterable[float]) -> AverageStats:
    """
    Count and average the passing best-attempt scores.

    Only the pass threshold filters here. A passing score outside the
    0-10 scale still counts toward the total and the average even though
    the histogram drops it.

    Args:
        best_scores: One best-attempt score per course

    Returns:
        AverageStats; an empty passed set gives zero courses and a 0 average
    """
    passed = [score for score in best_scores if score >= PASS_THRESHOLD]
    average = mean_half_away(passed) if passed else 0
    return AverageStats(
        total_courses=len(passed),
        average_score=average,
        distribution=passed_histogram(passed),
    )


@dataclass
class RosterGroup:
    """Courses sharing a semester label, in construction order."""
    label: str
    entries: List[Dict[str, Any]] = field(default_factory=list)


def _group(items: Iterable[Any], key: Callable[[Any], str], entry: Callable[[Any], Dict[str, Any]]) -> List[RosterGroup]:
    groups: List[RosterGroup] = []
    index: Dict[str, RosterGroup] = {}
    for item in items:
        label = key(item)
        group = index.get(label)
        if group is None:
            group = index[label] = RosterGroup(label)
            groups.append(group)
        group.entries.append(entry(item))
    return groups


def _semester_label(course: Course, fallback: str) -> str:
    return course.semester.name if course.semester is not None else fallback


def _semester_sort_key(grade: Grade) -> Tuple[bool, Optional[int], int]:
    semester_id = grade.course.semester_id if grade.course is not None else None
    return (semester_id is None, semester_id or 0, grade.course_id)


def build_passed_roster(grades: Iterable[Grade]) -> List[RosterGroup]:
    """
    Group a user's passed courses by semester name.

    Best attempts scoring at least the pass threshold are visited by
    (semester id, course id), with semesterless courses last, and grouped
    under their semester's name.

    Args:
        grades: All attempts of one user, each with its course loaded

    Returns:
        Ordered list of RosterGroup with ``courseId``/``courseName``/``highestGrade`` entries
    """
    winners = [
        grade for grade in select_best_attempts(grades).values()
        if grade.score >= PASS_THRESHOLD
    ]
    winners.sort(key=_semester_sort_key)
    return _group(
        winners,
        key=lambda g: _semester_label(g.course, PASSED_UNSPECIFIED_LABEL),
        entry=lambda g: {
            "courseId": g.course_id,
            "courseName": g.course.name,
            "highestGrade": g.score,
        },
    )


def build_course_roster(courses: Iterable[Course]) -> List[RosterGroup]:
    """Group every course by semester name, in the order given."""
    return _group(
        courses,
        key=lambda c: _semester_label(c, ALL_COURSES_UNSPECIFIED_LABEL),
        entry=lambda c: c.to_dict(),
    )


def roster_to_dict(groups: List[RosterGroup]) -> Dict[str, List[Dict[str, Any]]]:
    return {group.label: group.entries for group in groups}
