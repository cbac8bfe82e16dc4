"""Custom exception classes for the report tracker.

This module defines application-specific exceptions following Google Python
Style Guide. Every exception carries the HTTP status code it maps to, so the
application-level handler can translate it without leaking internals.
"""

from typing import Optional

from fastapi import status


class BugTrackerError(Exception):
    """Base exception for all report tracker errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(BugTrackerError):
    """Raised for malformed or missing fields, bad ids or invalid enum values."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class UnauthenticatedError(BugTrackerError):
    """Raised when a token is missing, malformed, expired or badly signed."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired credentials"


class ForbiddenError(BugTrackerError):
    """Raised when the caller is authenticated but lacks role or ownership."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access forbidden"


class NotFoundError(BugTrackerError):
    """Raised when a requested resource cannot be found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ReportNotFoundError(NotFoundError):
    """Raised when a requested report cannot be found."""

    def __init__(self, report_id: str):
        """Initialize the exception.

        Args:
            report_id: The ID of the report that was not found.
        """
        self.report_id = report_id
        super().__init__(f"Report '{report_id}' not found")


class UserNotFoundError(NotFoundError):
    """Raised when a requested user cannot be found."""

    def __init__(self, user_id: str):
        """Initialize the exception.

        Args:
            user_id: The ID of the user that was not found.
        """
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


class ConflictError(BugTrackerError):
    """Raised when a uniqueness constraint would be violated."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class UserAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    default_message = "Email is already registered"


class DuplicateReportTitleError(ConflictError):
    """Raised when a report title is already used by another report."""

    default_message = "A report with this title already exists"


class ConfigurationError(BugTrackerError):
    """Raised when there is a configuration error."""

    pass


class ExternalServiceError(BugTrackerError):
    """Raised when a collaborator service cannot be reached or answers badly."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Upstream service failed"
