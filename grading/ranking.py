"""
Best-attempt selection.

A user's official result for a course is the highest score among all of
their attempts for it. When several attempts share that score the one with
the smallest grade id wins, so the chosen row (and the examination it points
to) is the same on every call regardless of the order rows arrive in.
"""
from typing import Dict, Iterable, List, Optional

from database import Grade


def _beats(candidate: Grade, current: Grade) -> bool:
    if candidate.score != current.score:
        return candidate.score > current.score
    return candidate.id < current.id


def select_best_attempts(grades: Iterable[Grade]) -> Dict[int, Grade]:
    """
    Reduce attempts to one winning row per course.

    Args:
        grades: Attempts of a single user, in any order

    Returns:
        Mapping of course id to the best attempt, in ascending course id order
    """
    best: Dict[int, Grade] = {}
    for grade in grades:
        current = best.get(grade.course_id)
        if current is None or _beats(grade, current):
            best[grade.course_id] = grade
    return {course_id: best[course_id] for course_id in sorted(best)}


def best_scores(grades: Iterable[Grade]) -> List[float]:
    """Scores of the best attempts, one per course."""
    return [grade.score for grade in select_best_attempts(grades).values()]


def best_attempt_for_course(grades: Iterable[Grade], course_id: int) -> Optional[Grade]:
    """Best attempt for a single course, or None when there are no attempts."""
    return select_best_attempts(g for g in grades if g.course_id == course_id).get(course_id)
