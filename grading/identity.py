"""
Identity tools for the Grades system.
Handles creating and looking up grade owners.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from database import User
from .authorization import AuthorizationService
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Dict[str, Any]:
    """
    Get user information from database.

    Args:
        db: Database session
        user_id: The user ID to look up

    Returns:
        Dictionary with user id, name, and email

    Raises:
        NotFoundError: If user not found
    """
    return AuthorizationService(db).get_user(user_id).to_dict()


def create_user(db: Session, name: Optional[str], email: Optional[str]) -> Dict[str, Any]:
    """
    Create a new user.

    Raises:
        ValidationError: If a field is missing or the email is already registered
    """
    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name or not email:
        raise ValidationError("Name and email are required")
    if db.scalar(select(User.id).where(User.email == email)) is not None:
        raise ValidationError("Email already registered", "email")

    user = User(name=name, email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s", user.id)
    return user.to_dict()
