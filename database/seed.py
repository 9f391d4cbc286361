"""
Seed data script for the Grades system.
Creates sample data for testing and demonstration.
"""
import logging
import random

from database import (
    get_db_context, init_db,
    User, Semester, Course, Examination, Grade
)

logger = logging.getLogger(__name__)


def seed_database(rng: random.Random = None) -> dict:
    """
    Populate database with sample data.

    Returns:
        Number of rows created per table
    """
    rng = rng or random.Random()

    with get_db_context() as db:
        # Clear existing data
        db.query(Grade).delete()
        db.query(Course).delete()
        db.query(Examination).delete()
        db.query(Semester).delete()
        db.query(User).delete()

        users = [
            User(name="Eva Lindqvist", email="eva@example.com"),
            User(name="Jonas Berg", email="jonas@example.com"),
        ]
        db.add_all(users)

        semesters = [Semester(name="Fall 2024"), Semester(name="Spring 2025")]
        db.add_all(semesters)
        db.flush()

        courses = [
            Course(name="Linear Algebra", semester_id=semesters[0].id),
            Course(name="Programming I", semester_id=semesters[0].id),
            Course(name="Databases", semester_id=semesters[1].id),
            Course(name="Statistics", semester_id=semesters[1].id),
            Course(name="Academic Writing", semester_id=None),
        ]
        examinations = [
            Examination(name="Final exam"),
            Examination(name="Resit"),
            Examination(name="Second resit"),
        ]
        db.add_all(courses + examinations)
        db.flush()

        # Up to three attempts per course, stopping once passed
        grades = []
        for user in users:
            for course in courses:
                for examination in examinations:
                    score = rng.randint(2, 10)
                    grades.append(Grade(
                        user_id=user.id,
                        course_id=course.id,
                        examination_id=examination.id,
                        score=score,
                    ))
                    if score >= 5:
                        break

        db.add_all(grades)

        counts = {
            "users": len(users),
            "semesters": len(semesters),
            "courses": len(courses),
            "examinations": len(examinations),
            "grades": len(grades),
        }
        logger.info("Database seeded: %s", counts)
        return counts


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    seed_database()
