"""
Grade writing tools for the Grades system.
A grade can only be changed or removed by the user who created it.
"""
import logging
import math
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from database import Grade
from .authorization import AuthorizationService
from .exceptions import ValidationError
from .store import GradeStore

logger = logging.getLogger(__name__)


def _is_score(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def add_grade(
    db: Session,
    user_id: int,
    course_id: Optional[int],
    examination_id: Optional[int],
    score: Any
) -> Dict[str, Any]:
    """
    Record a new attempt for the requesting user.

    Args:
        db: Database session
        user_id: Owner of the new grade
        course_id: ID of the course
        examination_id: ID of the examination
        score: Numeric score; not range-checked

    Returns:
        Created grade data

    Raises:
        ValidationError: If a field is missing or the score is not numeric
        NotFoundError: If the course or examination does not exist
    """
    if not course_id or not examination_id or not _is_score(score):
        raise ValidationError("courseId, examinationId, and numeric score are required")

    store = GradeStore(db)
    store.get_course(course_id)
    store.get_examination(examination_id)

    grade = Grade(
        user_id=user_id,
        course_id=course_id,
        examination_id=examination_id,
        score=score,
    )
    db.add(grade)
    db.commit()
    db.refresh(grade)

    logger.info("User %s added grade %s for course %s", user_id, grade.id, course_id)
    return grade.to_dict()


def update_grade(
    db: Session,
    user_id: int,
    grade_id: int,
    score: Any = None,
    examination_id: Optional[int] = None
) -> Dict[str, Any]:
    """
    Change the score and/or examination of an existing grade.

    Args:
        db: Database session
        user_id: ID of the requesting user
        grade_id: ID of the grade to update
        score: New score (optional)
        examination_id: New examination (optional)

    Returns:
        Updated grade data

    Raises:
        ValidationError: If neither field is provided or the score is not numeric
        NotFoundError: If the grade or the new examination does not exist
        GradeAccessDenied: If the grade belongs to another user
    """
    if score is None and not examination_id:
        raise ValidationError("Must provide score or examinationId")
    if score is not None and not _is_score(score):
        raise ValidationError("Score must be numeric", "score")

    store = GradeStore(db)
    grade = store.get_grade(grade_id)
    AuthorizationService(db).enforce_grade_owner(user_id, grade, "update")

    if examination_id:
        store.get_examination(examination_id)
        grade.examination_id = examination_id
    if score is not None:
        grade.score = score

    db.commit()
    db.refresh(grade)

    logger.info("User %s updated grade %s", user_id, grade.id)
    return grade.to_dict()


def delete_grade(db: Session, user_id: int, grade_id: int) -> None:
    """
    Delete a grade owned by the requesting user.

    Raises:
        NotFoundError: If the grade does not exist
        GradeAccessDenied: If the grade belongs to another user
    """
    grade = GradeStore(db).get_grade(grade_id)
    AuthorizationService(db).enforce_grade_owner(user_id, grade, "delete")

    db.delete(grade)
    db.commit()
    logger.info("User %s deleted grade %s", user_id, grade_id)
