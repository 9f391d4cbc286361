"""API module for the Grades system."""
from .routes import (
    users_router,
    semesters_router,
    courses_router,
    examinations_router,
    grades_router,
    stats_router,
    get_current_user,
)

__all__ = [
    "users_router",
    "semesters_router",
    "courses_router",
    "examinations_router",
    "grades_router",
    "stats_router",
    "get_current_user",
]
