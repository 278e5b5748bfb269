"""Custom HTTP exception classes module.

Provides pre-configured HTTPException subclasses for the error kinds of the
maintenance workflow. Services and the pure core raise these directly so
every failure reaches the caller synchronously with a fixed status code.

Usage:
    from app.utils.exceptions import NotFoundError, InvalidTransitionError
    raise NotFoundError("Work request not found")
    raise InvalidTransitionError("Only pending requests can be approved")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found exception.

    Raised when a request, schedule, asset, report or technician does not exist.

    Args:
        detail: Error message (default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict exception.

    Raised when attempting to create a resource that violates a uniqueness
    constraint (e.g. duplicate asset code or username).

    Args:
        detail: Error message (default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class NotAuthorizedError(HTTPException):
    """403 Forbidden exception.

    Raised when the actor's role may not perform the requested action, or
    when a confirmation comes from someone other than the submitter or a manager.

    Args:
        detail: Error message (default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized exception.

    Raised when authentication is missing, invalid, or expired.

    Args:
        detail: Error message (default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidInputError(HTTPException):
    """400 Bad Request exception.

    Raised when a required field is missing or malformed beyond what pydantic
    catches (e.g. blank denial reason, work end time not after start time).

    Args:
        detail: Error message (default: "Invalid input")
    """

    def __init__(self, detail: str = "Invalid input") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidTransitionError(HTTPException):
    """409 Conflict exception for status guards.

    Raised when the entity's current status does not satisfy the transition
    guard, including when a concurrent writer changed it first.

    Args:
        detail: Error message (default: "Invalid status transition")
    """

    def __init__(self, detail: str = "Invalid status transition") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class InvariantViolationError(HTTPException):
    """423 Locked exception.

    Raised when a call would mutate a record that is immutable, such as any
    change to a closed work request.

    Args:
        detail: Error message (default: "Record is locked")
    """

    def __init__(self, detail: str = "Record is locked") -> None:
        super().__init__(status_code=status.HTTP_423_LOCKED, detail=detail)
