"""
Authorization module for the Grades system.

Grades belong to the user who created them. Reads are always scoped to the
requesting user; writes to an existing grade are checked against its owner.
"""
import logging

from sqlalchemy.orm import Session

from database import Grade, User
from .exceptions import GradeAccessDenied, NotFoundError

logger = logging.getLogger(__name__)


class AuthorizationService:
    """
    Service for handling ownership checks.
    The user is always looked up in the database, never trusted from the client.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User:
        """
        Get user from database.

        Args:
            user_id: The user ID to look up

        Returns:
            User object

        Raises:
            NotFoundError: If user not found
        """
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def enforce_grade_owner(self, user_id: int, grade: Grade, action: str) -> None:
        """
        Enforce that only the owner of a grade can change it.

        Args:
            user_id: The requesting user's ID
            grade: The grade being changed
            action: Description of the action being attempted

        Raises:
            GradeAccessDenied: If the grade belongs to another user
        """
        if grade.user_id != user_id:
            logger.warning("User %s denied %s on grade %s", user_id, action, grade.id)
            raise GradeAccessDenied(user_id, grade.id, action)
