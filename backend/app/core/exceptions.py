"""
Service layer custom exceptions.

Every domain rejection is raised as a subclass of ``ServiceException``. The
HTTP layer maps each subclass to a status code, so services never import
FastAPI.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class NotFoundError(ServiceException):
    """Referenced entity (match, venue, sport, challenge, presence row) does not exist."""

    status_code = 404
    error_code = "not_found"


class ForbiddenError(ServiceException):
    """Acting player is not allowed to touch the resource."""

    status_code = 403
    error_code = "forbidden"


class ValidationError(ServiceException):
    """Input is well-formed but violates a domain rule."""

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        validation_context = context or {}
        if field:
            validation_context["field"] = field
        if value is not None:
            validation_context["value"] = str(value)

        super().__init__(
            message=message,
            service=service,
            operation=operation,
            context=validation_context,
        )


class StateConflictError(ServiceException):
    """Operation is not valid for the resource's current state."""

    status_code = 409
    error_code = "invalid_state"


class DuplicateResourceError(ServiceException):
    """An equivalent resource already exists."""

    status_code = 409
    error_code = "duplicate"


class DatabaseError(ServiceException):
    """Exception raised for database-related errors in services."""

    status_code = 500
    error_code = "database_error"

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=f"Database error: {message}",
            service=service,
            operation=operation,
            context=context,
            original_error=original_error,
        )
