"""
Custom exceptions for the Grades system.
"""


class AuthorizationError(Exception):
    """Raised when a user attempts an unauthorized action."""

    def __init__(self, message: str, user_id: int = None, action: str = None):
        self.message = message
        self.user_id = user_id
        self.action = action
        super().__init__(self.message)


class GradeAccessDenied(AuthorizationError):
    """Raised when a user touches a grade owned by someone else."""

    def __init__(self, user_id: int, grade_id: int, action: str):
        message = f"Access denied: User {user_id} cannot {action} grade {grade_id}"
        self.grade_id = grade_id
        super().__init__(message, user_id=user_id, action=action)


class NotFoundError(Exception):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, identifier):
        self.entity = entity
        self.identifier = identifier
        self.message = f"{entity} not found"
        super().__init__(f"{entity} not found: {identifier}")


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None):
        self.message = message
        self.field = field
        super().__init__(self.message)
