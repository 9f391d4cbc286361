"""Database module."""
from .models import Base, User, Semester, Course, Examination, Grade
from .connection import engine, SessionLocal, get_db, get_db_context, init_db

__all__ = [
    "Base",
    "User",
    "Semester",
    "Course",
    "Examination",
    "Grade",
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "init_db",
]
