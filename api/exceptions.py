"""Error taxonomy shared by the analyzer core and the HTTP layer."""

from typing import Any

from fastapi import status


class PageLensError(Exception):
    """Base exception for PageLens."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class AcquisitionError(PageLensError):
    """The page could not be fetched; the analysis is aborted.

    ``reason`` is one of ``invalid_url``, ``timeout``, ``too_many_redirects``
    or ``network``.
    """

    def __init__(self, url: str, reason: str, message: str | None = None):
        self.url = url
        self.reason = reason
        super().__init__(
            message=message or f"Could not acquire {url}: {reason.replace('_', ' ')}",
            code="acquisition_failed",
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={"url": url, "reason": reason},
        )


class ExtractionWarning(PageLensError):
    """A recoverable extraction problem (malformed JSON-LD, unparsable date).

    Raised by extraction helpers and always caught: the offending field is
    omitted and the message is logged and kept on the page record.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(
            message=message,
            code="extraction_warning",
            status_code=status.HTTP_200_OK,
            details={"field": field} if field else {},
        )


class NotFoundError(PageLensError):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str | None = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id '{identifier}' not found"
        super().__init__(
            message=message,
            code="not_found",
            status_code=status.HTTP_404_NOT_FOUND,
        )


class ValidationError(PageLensError):
    """Invalid input."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="validation_error",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class ExternalServiceError(PageLensError):
    """External service (LLM provider) failed."""

    def __init__(self, service: str, message: str):
        super().__init__(
            message=f"{service} error: {message}",
            code="external_service_error",
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={"service": service},
        )


class ServiceNotConfiguredError(PageLensError):
    """An optional service was called without being configured."""

    def __init__(self, service: str, hint: str | None = None):
        super().__init__(
            message=f"{service} is not configured",
            code="service_not_configured",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"service": service, **({"hint": hint} if hint else {})},
        )
