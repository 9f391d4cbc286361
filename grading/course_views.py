"""
Per-course views: the final-grade card, the attempt time series and the rows
of the per-course attempt table.
"""
from typing import Any, Dict, Iterable, Iterator, List

from database import Course, Grade
from .ranking import best_attempt_for_course


def _examination_name(grade: Grade):
    return grade.examination.name if grade.examination is not None else None


def build_course_summary(course: Course, grades: Iterable[Grade]) -> Dict[str, Any]:
    """
    Official grade of a course for one user.

    Args:
        course: The course
        grades: The user's attempts for the course

    Returns:
        ``courseName``, ``finalGrade`` and the ``examination`` that produced
        it; both null when the user has no attempts
    """
    best = best_attempt_for_course(grades, course.id)
    return {
        "courseName": course.name,
        "finalGrade": best.score if best is not None else None,
        "examination": _examination_name(best) if best is not None else None,
    }


class CourseTimeline:
    """
    Every attempt of a course as ``{examination, score}`` points.

    Points come out in ascending grade id order with no deduplication.
    Iterating again starts over from the first point.
    """

    def __init__(self, grades: Iterable[Grade]):
        self._grades: List[Grade] = sorted(grades, key=lambda g: g.id)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        for grade in self._grades:
            yield {"examination": _examination_name(grade), "score": grade.score}

    def __len__(self):
        return len(self._grades)

    def to_dict(self) -> Dict[str, Any]:
        return {"grades": list(self)}


def serialize_attempt_row(grade: Grade) -> Dict[str, Any]:
    """Row of the per-course attempt table."""
    row = grade.to_dict()
    row["examination"] = grade.examination.to_dict() if grade.examination is not None else None
    row["examinationName"] = _examination_name(grade)
    return row
