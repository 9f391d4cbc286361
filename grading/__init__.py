"""
Grading module for the Grades system.

Holds the aggregation engine (best attempts, histograms, averages, rosters,
pagination, per-course views) and the read/write tools the API calls.
"""
from .exceptions import (
    AuthorizationError,
    GradeAccessDenied,
    NotFoundError,
    ValidationError,
)

from .authorization import AuthorizationService

from .store import GradeStore, GradeFilter, GradeOrder

from .ranking import (
    select_best_attempts,
    best_scores,
    best_attempt_for_course,
)

from .histogram import (
    Histogram,
    build_histogram,
    passed_histogram,
    full_histogram,
)

from .aggregates import (
    AverageStats,
    RosterGroup,
    compute_average_stats,
    build_passed_roster,
    build_course_roster,
    roster_to_dict,
)

from .pager import (
    Page,
    Window,
    resolve_page_params,
    compute_window,
    total_pages,
    build_page,
)

from .course_views import (
    CourseTimeline,
    build_course_summary,
    serialize_attempt_row,
)

from .identity import get_user, create_user

from .grades_read import (
    get_user_grades,
    get_passed_courses,
    get_all_courses,
    get_course_summary,
    get_course_timeline,
    get_course_grades,
)

from .grades_write import add_grade, update_grade, delete_grade

from .stats import get_average_stats, get_full_distribution

from . import catalog

__all__ = [
    # Exceptions
    "AuthorizationError",
    "GradeAccessDenied",
    "NotFoundError",
    "ValidationError",
    # Authorization
    "AuthorizationService",
    # Store
    "GradeStore",
    "GradeFilter",
    "GradeOrder",
    # Engine
    "select_best_attempts",
    "best_scores",
    "best_attempt_for_course",
    "Histogram",
    "build_histogram",
    "passed_histogram",
    "full_histogram",
    "AverageStats",
    "RosterGroup",
    "compute_average_stats",
    "build_passed_roster",
    "build_course_roster",
    "roster_to_dict",
    "Page",
    "Window",
    "resolve_page_params",
    "compute_window",
    "total_pages",
    "build_page",
    "CourseTimeline",
    "build_course_summary",
    "serialize_attempt_row",
    # Identity
    "get_user",
    "create_user",
    # Grades Read
    "get_user_grades",
    "get_passed_courses",
    "get_all_courses",
    "get_course_summary",
    "get_course_timeline",
    "get_course_grades",
    # Grades Write
    "add_grade",
    "update_grade",
    "delete_grade",
    # Stats
    "get_average_stats",
    "get_full_distribution",
    # Catalog
    "catalog",
]
