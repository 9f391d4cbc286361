"""
Record store adapter for the Grades system.

Wraps a SQLAlchemy session with the query primitives the aggregation engine
consumes. The engine itself never issues SQL; everything it reads comes
through this class.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from database import Course, Examination, Grade, Semester, User
from .exceptions import NotFoundError


class GradeOrder(str, Enum):
    """Supported orderings for grade listings."""
    ID_ASC = "id_asc"
    ID_DESC = "id_desc"


@dataclass(frozen=True)
class GradeFilter:
    """Conjunctive filter over grade rows. Unset fields do not filter."""
    user_id: Optional[int] = None
    course_id: Optional[int] = None
    min_score: Optional[float] = None

    def apply(self, stmt):
        if self.user_id is not None:
            stmt = stmt.where(Grade.user_id == self.user_id)
        if self.course_id is not None:
            stmt = stmt.where(Grade.course_id == self.course_id)
        if self.min_score is not None:
            stmt = stmt.where(Grade.score >= self.min_score)
        return stmt


class GradeStore:
    """
    Query primitives over semesters, courses, examinations and grades.

    Every method is an independent read; two calls are two snapshots.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------- grades ----------

    def list_grades(
        self,
        grade_filter: GradeFilter,
        order: GradeOrder = GradeOrder.ID_ASC,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Grade]:
        """
        List grade rows with their course, semester and examination loaded.

        Args:
            grade_filter: Row filter
            order: Ordering by grade id
            skip: Number of rows to skip (optional)
            limit: Maximum number of rows (optional)

        Returns:
            List of Grade rows
        """
        stmt = grade_filter.apply(
            select(Grade).options(
                joinedload(Grade.course).joinedload(Course.semester),
                joinedload(Grade.examination),
            )
        )
        if order == GradeOrder.ID_DESC:
            stmt = stmt.order_by(Grade.id.desc())
        else:
            stmt = stmt.order_by(Grade.id.asc())
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt).unique())

    def count_grades(self, grade_filter: GradeFilter) -> int:
        """Count grade rows matching the filter."""
        stmt = grade_filter.apply(select(func.count(Grade.id)))
        return self.db.scalar(stmt) or 0

    def get_grade(self, grade_id: int) -> Grade:
        grade = self.db.get(Grade, grade_id)
        if grade is None:
            raise NotFoundError("Grade", grade_id)
        return grade

    # ---------- catalog ----------

    def list_courses(self, semester_id: Optional[int] = None) -> List[Course]:
        """List courses joined with their semester, ordered by id."""
        stmt = select(Course).options(joinedload(Course.semester)).order_by(Course.id)
        if semester_id is not None:
            stmt = stmt.where(Course.semester_id == semester_id)
        return list(self.db.scalars(stmt).unique())

    def get_course(self, course_id: int) -> Course:
        course = self.db.get(Course, course_id, options=[joinedload(Course.semester)])
        if course is None:
            raise NotFoundError("Course", course_id)
        return course

    def get_semester(self, semester_id: int) -> Semester:
        semester = self.db.get(Semester, semester_id)
        if semester is None:
            raise NotFoundError("Semester", semester_id)
        return semester

    def get_examination(self, examination_id: int) -> Examination:
        examination = self.db.get(Examination, examination_id)
        if examination is None:
            raise NotFoundError("Examination", examination_id)
        return examination

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user
