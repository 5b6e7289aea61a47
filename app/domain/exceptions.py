"""Domain exceptions for post tag search.

Defines domain-level exceptions independent of infrastructure concerns.
Presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class PostSearchException(Exception):
    """Base exception for all application errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PostSearchException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(PostSearchException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'post', 'tag').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(PostSearchException):
    """Raised when an operation requires the SQL database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class TagStoreUnavailableException(PostSearchException):
    """Raised when the tag association store cannot be reached.

    Kept distinct from an empty search result: "no matches" is a 200 with an
    empty list, a store failure is a 503.
    """

    def __init__(self, operation: str, reason: str | None = None) -> None:
        """Initialize with the store operation that failed.

        Args:
            operation: Store method name (e.g. 'find_posts_with_any_tag').
            reason: Optional short description of the underlying error.
        """
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            "Tag store is unavailable; try again later.",
            "STORE_UNAVAILABLE",
            details,
        )
