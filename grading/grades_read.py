"""
Grade reading tools for the Grades system.

Each function reads a fresh snapshot from the store and hands it to the
aggregation engine. Functions that combine more than one query (a page and
its count, a course and its grades) read independent snapshots; a write
landing between them can show up in one part of the response and not the
other.
"""
from typing import Any, Dict

from sqlalchemy.orm import Session

from .aggregates import build_course_roster, build_passed_roster, roster_to_dict
from .course_views import CourseTimeline, build_course_summary, serialize_attempt_row
from .histogram import PASS_THRESHOLD
from .pager import build_page, compute_window
from .store import GradeFilter, GradeOrder, GradeStore


def get_user_grades(db: Session, user_id: int, page: Any = None, limit: Any = None) -> Dict[str, Any]:
    """
    Get one page of a user's grades, most recent first.

    Args:
        db: Database session
        user_id: Owner of the grades
        page: Raw page number; invalid values fall back to 1
        limit: Raw page size; invalid values fall back to 10

    Returns:
        Dictionary with ``data``, ``page``, ``limit``, ``total`` and ``totalPages``
    """
    store = GradeStore(db)
    window = compute_window(page, limit)
    grade_filter = GradeFilter(user_id=user_id)

    grades = store.list_grades(grade_filter, GradeOrder.ID_DESC, skip=window.skip, limit=window.limit)
    total = store.count_grades(grade_filter)

    return build_page([g.to_dict(include_relations=True) for g in grades], window, total).to_dict()


def get_passed_courses(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Get a user's passed courses grouped by semester name.

    Returns:
        ``{semesterName: [{courseId, courseName, highestGrade}]}``
    """
    store = GradeStore(db)
    grades = store.list_grades(GradeFilter(user_id=user_id, min_score=PASS_THRESHOLD))
    return roster_to_dict(build_passed_roster(grades))


def get_all_courses(db: Session) -> Dict[str, Any]:
    """Get every course grouped by semester name."""
    store = GradeStore(db)
    return roster_to_dict(build_course_roster(store.list_courses()))


def get_course_summary(db: Session, user_id: int, course_id: int) -> Dict[str, Any]:
    """
    Get the final grade of a course for a user.

    Raises:
        NotFoundError: If the course does not exist
    """
    store = GradeStore(db)
    course = store.get_course(course_id)
    grades = store.list_grades(GradeFilter(user_id=user_id, course_id=course_id))
    return build_course_summary(course, grades)


def get_course_timeline(db: Session, user_id: int, course_id: int) -> CourseTimeline:
    """
    Get every attempt a user has for a course, oldest first.

    Raises:
        NotFoundError: If the course does not exist
    """
    store = GradeStore(db)
    store.get_course(course_id)
    grades = store.list_grades(GradeFilter(user_id=user_id, course_id=course_id), GradeOrder.ID_ASC)
    return CourseTimeline(grades)


def get_course_grades(
    db: Session,
    user_id: int,
    course_id: int,
    page: Any = None,
    limit: Any = None
) -> Dict[str, Any]:
    """
    Get one page of a user's attempts for a course, most recent first.

    Raises:
        NotFoundError: If the course does not exist
    """
    store = GradeStore(db)
    store.get_course(course_id)
    window = compute_window(page, limit)
    grade_filter = GradeFilter(user_id=user_id, course_id=course_id)

    grades = store.list_grades(grade_filter, GradeOrder.ID_DESC, skip=window.skip, limit=window.limit)
    total = store.count_grades(grade_filter)

    return build_page([serialize_attempt_row(g) for g in grades], window, total).to_dict()
