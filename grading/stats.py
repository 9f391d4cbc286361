"""
Statistics tools: average of passed courses and score distributions.
"""
from typing import Any, Dict

from sqlalchemy.orm import Session

from .aggregates import compute_average_stats
from .histogram import full_histogram
from .ranking import best_scores
from .store import GradeFilter, GradeStore


def get_average_stats(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Get total passed courses, their average and the 5-10 distribution.

    Args:
        db: Database session
        user_id: Owner of the grades

    Returns:
        ``{totalCourses, averageScore, gradeDistribution}``
    """
    grades = GradeStore(db).list_grades(GradeFilter(user_id=user_id))
    return compute_average_stats(best_scores(grades)).to_dict()


def get_full_distribution(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Get the 0-10 distribution of every attempt, not only best ones.

    Returns:
        ``{fullGradeDistribution}``
    """
    grades = GradeStore(db).list_grades(GradeFilter(user_id=user_id))
    return {"fullGradeDistribution": full_histogram(g.score for g in grades).to_dict()}
