"""Custom exception classes for the discussion forum backend.

This module defines application-specific exceptions following Google Python
Style Guide. Each exception carries the HTTP status code and error label it
is rendered with at the API boundary.
"""

from typing import List, Union


class ForumError(Exception):
    """Base exception for all forum errors surfaced to API callers."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: Union[str, List[str]]):
        """Initialize the exception.

        Args:
            message: Human-readable message, or a list of them.
        """
        self.message = message
        super().__init__(message if isinstance(message, str) else "; ".join(message))


class ValidationError(ForumError):
    """Raised when input shape or range validation fails."""

    status_code = 400
    error = "ValidationError"

    def __init__(self, issues: Union[str, List[str]]):
        """Initialize the exception.

        Args:
            issues: One issue string or a list of them.
        """
        if isinstance(issues, str):
            issues = [issues]
        super().__init__(list(issues))


class UnauthorizedError(ForumError):
    """Raised for missing, invalid or expired credentials and bad logins."""

    status_code = 401
    error = "Unauthorized"


class ForbiddenError(ForumError):
    """Raised when an authenticated principal lacks the privilege for an action."""

    status_code = 403
    error = "Forbidden"

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotFoundError(ForumError):
    """Raised when a requested resource id does not resolve."""

    status_code = 404
    error = "Not Found"


class ConflictError(ForumError):
    """Raised when a uniqueness constraint would be violated."""

    status_code = 409
    error = "Conflict"
