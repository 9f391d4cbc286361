"""
Catalog tools: semesters, courses and examinations.

These records are shared by all users. Names are unique per kind.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from database import Course, Examination, Semester
from .exceptions import NotFoundError, ValidationError
from .store import GradeStore

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


def _require_name(name: Optional[str], message: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError(message, "name")
    return name


def _name_taken(db: Session, model, name: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(model.id).where(model.name == name)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    return db.scalar(stmt) is not None


def _search(db: Session, model, query: Optional[str]) -> List[Dict[str, Any]]:
    query = (query or "").strip()
    if not query:
        raise ValidationError("Missing search query", "query")
    stmt = (
        select(model.id, model.name)
        .where(model.name.contains(query, autoescape=True))
        .order_by(model.name)
        .limit(SEARCH_LIMIT)
    )
    return [{"id": row.id, "name": row.name} for row in db.execute(stmt)]


# ============== Semesters ==============

def create_semester(db: Session, name: Optional[str]) -> Dict[str, Any]:
    name = _require_name(name, "Semester name is required")
    if _name_taken(db, Semester, name):
        raise ValidationError("Semester with this name already exists", "name")

    semester = Semester(name=name)
    db.add(semester)
    db.commit()
    db.refresh(semester)
    logger.info("Created semester %s (%s)", semester.id, semester.name)
    return semester.to_dict()


def list_semesters(db: Session) -> List[Dict[str, Any]]:
    return [s.to_dict() for s in db.scalars(select(Semester).order_by(Semester.id))]


def get_semester(db: Session, semester_id: int) -> Dict[str, Any]:
    return GradeStore(db).get_semester(semester_id).to_dict()


def update_semester(db: Session, semester_id: int, name: Optional[str]) -> Dict[str, Any]:
    name = _require_name(name, "Semester name is required")
    semester = GradeStore(db).get_semester(semester_id)
    if _name_taken(db, Semester, name, exclude_id=semester_id):
        raise ValidationError("Semester with this name already exists", "name")

    semester.name = name
    db.commit()
    db.refresh(semester)
    return semester.to_dict()


def delete_semester(db: Session, semester_id: int) -> None:
    """Delete a semester. Its courses stay, without a semester."""
    semester = GradeStore(db).get_semester(semester_id)
    db.delete(semester)
    db.commit()
    logger.info("Deleted semester %s", semester_id)


# ============== Courses ==============

def create_course(db: Session, name: Optional[str], semester_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Create a course, optionally inside a semester.

    Raises:
        ValidationError: If the name is missing or already used
        NotFoundError: If the semester does not exist
    """
    name = _require_name(name, "Course name is required")
    if semester_id is not None:
        GradeStore(db).get_semester(semester_id)
    if _name_taken(db, Course, name):
        raise ValidationError("Course with this name already exists", "name")

    course = Course(name=name, semester_id=semester_id)
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info("Created course %s (%s)", course.id, course.name)
    return course.to_dict()


def get_course(db: Session, course_id: int) -> Dict[str, Any]:
    return GradeStore(db).get_course(course_id).to_dict()


def search_courses(db: Session, query: Optional[str]) -> List[Dict[str, Any]]:
    """Courses whose name contains ``query``, first 10 by name."""
    return _search(db, Course, query)


def update_course(db: Session, course_id: int, name: Optional[str]) -> Dict[str, Any]:
    name = _require_name(name, "New name is required")
    course = GradeStore(db).get_course(course_id)
    if _name_taken(db, Course, name, exclude_id=course_id):
        raise ValidationError("Course with this name already exists", "name")

    course.name = name
    db.commit()
    db.refresh(course)
    return course.to_dict()


def delete_course(db: Session, course_id: int) -> None:
    """Delete a course together with every grade recorded for it."""
    course = GradeStore(db).get_course(course_id)
    db.delete(course)
    db.commit()
    logger.info("Deleted course %s", course_id)


# ============== Examinations ==============

def create_examination(db: Session, name: Optional[str]) -> Dict[str, Any]:
    name = _require_name(name, "Examination name is required")
    if _name_taken(db, Examination, name):
        raise ValidationError("Examination name already exists", "name")

    examination = Examination(name=name)
    db.add(examination)
    db.commit()
    db.refresh(examination)
    logger.info("Created examination %s (%s)", examination.id, examination.name)
    return examination.to_dict()


def list_examinations(db: Session) -> List[Dict[str, Any]]:
    return [e.to_dict() for e in db.scalars(select(Examination).order_by(Examination.id))]


def get_examination(db: Session, examination_id: int) -> Dict[str, Any]:
    return GradeStore(db).get_examination(examination_id).to_dict()


def get_examination_by_name(db: Session, name: str) -> Dict[str, Any]:
    examination = db.scalar(select(Examination).where(Examination.name == name))
    if examination is None:
        raise NotFoundError("Examination", name)
    return examination.to_dict()


def search_examinations(db: Session, query: Optional[str]) -> List[Dict[str, Any]]:
    return _search(db, Examination, query)


def update_examination(db: Session, examination_id: int, name: Optional[str]) -> Dict[str, Any]:
    name = _require_name(name, "Examination name is required")
    examination = GradeStore(db).get_examination(examination_id)
    if _name_taken(db, Examination, name, exclude_id=examination_id):
        raise ValidationError("Examination name already exists", "name")

    examination.name = name
    db.commit()
    db.refresh(examination)
    return examination.to_dict()
