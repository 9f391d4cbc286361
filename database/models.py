"""
Database models for the Grades system.
Defines the SQLAlchemy models for semesters, courses, examinations and grades.
"""
from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


class User(Base):
    """
    Users table - owners of grade records.

    Attributes:
        id: Unique identifier
        name: User's display name
        email: Unique email address
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)

    # Relationships
    grades = relationship("Grade", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}', email='{self.email}')>"

    def to_dict(self):
        return {"id": self.id, "name": self.name, "email": self.email}


class Semester(Base):
    """
    Semesters table. Groups courses.

    Attributes:
        id: Unique identifier
        name: Semester name (e.g., "Fall 2025")
    """
    __tablename__ = "semesters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)

    # Deleting a semester detaches its courses instead of removing them
    courses = relationship("Course", back_populates="semester")

    def __repr__(self):
        return f"<Semester(id={self.id}, name='{self.name}')>"

    def to_dict(self):
        return {"id": self.id, "name": self.name}


class Course(Base):
    """
    Courses table.

    Attributes:
        id: Unique identifier
        name: Course name, unique across semesters
        semester_id: Owning semester, may be null
    """
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    semester_id = Column(Integer, ForeignKey("semesters.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    semester = relationship("Semester", back_populates="courses")
    grades = relationship("Grade", back_populates="course", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Course(id={self.id}, name='{self.name}', semester_id={self.semester_id})>"

    def to_dict(self, include_semester: bool = True):
        """Convert course to dictionary for API responses."""
        data = {
            "id": self.id,
            "name": self.name,
            "semesterId": self.semester_id,
        }
        if include_semester:
            data["semester"] = self.semester.to_dict() if self.semester else None
        return data


class Examination(Base):
    """
    Examinations table. An assessment occasion shared by all courses and users.

    Attributes:
        id: Unique identifier
        name: Examination name (e.g., "Midterm", "Resit June")
    """
    __tablename__ = "examinations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)

    # Relationships
    grades = relationship("Grade", back_populates="examination")

    def __repr__(self):
        return f"<Examination(id={self.id}, name='{self.name}')>"

    def to_dict(self):
        return {"id": self.id, "name": self.name}


class Grade(Base):
    """
    Grades table. One row per attempt.

    The score is unbounded at this layer; values outside the 0-10 teaching
    scale are stored as given.

    Attributes:
        id: Unique identifier, increasing with insertion order
        user_id: Owner of the grade
        course_id: Course the attempt belongs to
        examination_id: Examination occasion of the attempt
        score: Attempt score
    """
    __tablename__ = "grades"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    examination_id = Column(Integer, ForeignKey("examinations.id"), nullable=False)
    score = Column(Float, nullable=False)

    # Relationships
    user = relationship("User", back_populates="grades")
    course = relationship("Course", back_populates="grades")
    examination = relationship("Examination", back_populates="grades")

    def __repr__(self):
        return f"<Grade(id={self.id}, user_id={self.user_id}, course_id={self.course_id}, score={self.score})>"

    def to_dict(self, include_relations: bool = False):
        """Convert grade to dictionary for API responses."""
        data = {
            "id": self.id,
            "userId": self.user_id,
            "courseId": self.course_id,
            "examinationId": self.examination_id,
            "score": self.score,
        }
        if include_relations:
            data["course"] = self.course.to_dict() if self.course else None
            data["examination"] = self.examination.to_dict() if self.examination else None
        return data
