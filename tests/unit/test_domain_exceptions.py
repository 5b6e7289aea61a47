"""Tests for domain exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    PostSearchException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TagStoreUnavailableException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base PostSearchException uses class name as error_code when not provided."""
    exc = PostSearchException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "PostSearchException"
    assert exc.details == {}


def test_base_exception_to_dict() -> None:
    exc = PostSearchException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid condition", field="condition")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "condition"}
    assert ValidationException("Invalid").details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("post", "p1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.message == "post not found: p1"
    assert exc.details == {"resource_type": "post", "resource_id": "p1"}


def test_sql_not_configured_exception() -> None:
    exc = SqlNotConfiguredException()
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert "not configured" in exc.message


def test_tag_store_unavailable_exception() -> None:
    """Store outage carries the failing operation and optional reason."""
    exc = TagStoreUnavailableException("find_posts_with_all_tags", reason="OperationalError")
    assert exc.error_code == "STORE_UNAVAILABLE"
    assert exc.details == {
        "operation": "find_posts_with_all_tags",
        "reason": "OperationalError",
    }
    assert TagStoreUnavailableException("op").details == {"operation": "op"}
    assert isinstance(exc, PostSearchException)
