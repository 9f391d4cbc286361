"""
Shared fixtures for the Grades system tests.

The database URL is pointed at a throwaway SQLite file before any project
module is imported, so the module-level engine binds to it.
"""
import os
import sys
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="grades-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient

from database import (
    init_db, SessionLocal, User, Semester, Course, Examination, Grade
)


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create the schema once for the whole run."""
    init_db()
    yield


@pytest.fixture
def db():
    """Session on an emptied database."""
    session = SessionLocal()
    for model in (Grade, Course, Examination, Semester, User):
        session.query(model).delete()
    session.commit()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(db):
    user = User(name="Stats Tester", email="stats@example.com")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def other_user(db):
    user = User(name="Other Tester", email="other@example.com")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def headers(user):
    return {"X-User-Id": str(user.id)}


@pytest.fixture
def catalog_rows(db):
    """Two semesters, three courses (one without semester) and two examinations."""
    fall = Semester(name="Fall 2025")
    spring = Semester(name="Spring 2026")
    db.add_all([fall, spring])
    db.flush()

    math = Course(name="Math", semester_id=fall.id)
    history = Course(name="History", semester_id=spring.id)
    writing = Course(name="Writing", semester_id=None)
    midterm = Examination(name="Midterm")
    final = Examination(name="Final")
    db.add_all([math, history, writing, midterm, final])
    db.commit()

    return {
        "fall": fall,
        "spring": spring,
        "math": math,
        "history": history,
        "writing": writing,
        "midterm": midterm,
        "final": final,
    }


@pytest.fixture
def add_grades(db):
    """Insert ``(course, examination, score)`` rows in order and return them."""
    def _add(user_id, rows):
        grades = [
            Grade(user_id=user_id, course_id=course.id, examination_id=examination.id, score=score)
            for course, examination, score in rows
        ]
        db.add_all(grades)
        db.commit()
        return grades
    return _add
