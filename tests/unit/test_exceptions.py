"""Tests for custom exceptions and error handling."""

from fastapi import status

from api.exceptions import (
    AcquisitionError,
    ExternalServiceError,
    ExtractionWarning,
    NotFoundError,
    PageLensError,
    ServiceNotConfiguredError,
    ValidationError,
)


def test_pagelens_error_base() -> None:
    """Test base PageLensError."""
    error = PageLensError(message="Test error", code="test_error")
    assert error.message == "Test error"
    assert error.code == "test_error"
    assert error.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert error.details == {}
    assert str(error) == "Test error"


def test_acquisition_error() -> None:
    """Test AcquisitionError carries the failure reason."""
    error = AcquisitionError("https://example.com/", "too_many_redirects")
    assert error.message == "Could not acquire https://example.com/: too many redirects"
    assert error.code == "acquisition_failed"
    assert error.status_code == status.HTTP_502_BAD_GATEWAY
    assert error.details == {"url": "https://example.com/", "reason": "too_many_redirects"}

    custom = AcquisitionError("https://example.com/", "network", "DNS lookup failed")
    assert custom.message == "DNS lookup failed"
    assert custom.reason == "network"


def test_extraction_warning() -> None:
    """Test ExtractionWarning records the field."""
    warning = ExtractionWarning("Unparsable date", field="date_published")
    assert warning.field == "date_published"
    assert warning.details == {"field": "date_published"}
    assert isinstance(warning, PageLensError)


def test_not_found_error() -> None:
    """Test NotFoundError."""
    error = NotFoundError("Result")
    assert error.message == "Result not found"
    assert error.code == "not_found"
    assert error.status_code == status.HTTP_404_NOT_FOUND

    error_with_id = NotFoundError("Result", "abc123")
    assert error_with_id.message == "Result with id 'abc123' not found"


def test_validation_error() -> None:
    """Test ValidationError."""
    error = ValidationError("Invalid URL", field="url")
    assert error.message == "Invalid URL"
    assert error.code == "validation_error"
    assert error.status_code == status.HTTP_400_BAD_REQUEST
    assert error.details == {"field": "url"}


def test_external_service_error() -> None:
    """Test ExternalServiceError."""
    error = ExternalServiceError("anthropic", "HTTP 500")
    assert error.message == "anthropic error: HTTP 500"
    assert error.code == "external_service_error"
    assert error.status_code == status.HTTP_502_BAD_GATEWAY
    assert error.details == {"service": "anthropic"}


def test_service_not_configured_error() -> None:
    """Test ServiceNotConfiguredError."""
    error = ServiceNotConfiguredError("llm", "Set ANTHROPIC_API_KEY")
    assert error.message == "llm is not configured"
    assert error.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert error.details == {"service": "llm", "hint": "Set ANTHROPIC_API_KEY"}

    assert ServiceNotConfiguredError("llm").details == {"service": "llm"}
