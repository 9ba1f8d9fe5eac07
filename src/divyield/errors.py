"""Quote provider error types."""

from __future__ import annotations

from enum import Enum


class QuoteProviderErrorCode(Enum):
    """Error classification codes."""

    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    PROVIDER_ERROR = "provider_error"
    NO_DATA = "no_data"


class QuoteProviderError(Exception):
    """Upstream failure with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether a later attempt (or the next strategy) may succeed.
    """

    def __init__(
        self,
        message: str,
        code: QuoteProviderErrorCode = QuoteProviderErrorCode.PROVIDER_ERROR,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable


class DocumentFetchError(QuoteProviderError):
    """An HTML document could not be retrieved."""
