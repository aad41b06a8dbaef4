"""Errors raised while resolving a menu link and reading a tenant's data.

Nothing here knows about HTTP; menuhub.core.exception_handlers picks the
status from ``error_code``.
"""

from collections.abc import Sequence
from typing import Any


class MenuhubException(Exception):
    """Root of every error the API turns into a JSON body.

    ``message`` is shown to diners as-is, so it never contains store or
    network text; that goes in ``details``. ``error_code`` defaults to the
    class name.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable payload (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(MenuhubException):
    """An input value such as a language code or translation mark is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class MalformedSlug(MenuhubException):
    """Raised when a URL slug cannot be normalized into name candidates."""

    def __init__(self, slug: str, reason: str) -> None:
        """Initialize with the offending slug and the reason it was rejected.

        Args:
            slug: Raw path segment as received (repr-escaped in details).
            reason: Short diagnostic (e.g. 'invalid percent-encoding').
        """
        super().__init__(
            "This menu link is not valid.",
            "MALFORMED_SLUG",
            {"slug": repr(slug), "reason": reason},
        )


class TenantNotFound(MenuhubException):
    """Raised when no directory record matches any name candidate.

    Also raised when the partial-match fallback is ambiguous (more than one
    restaurant matches), so a request never resolves to an arbitrary tenant.
    """

    def __init__(
        self,
        candidates: Sequence[str],
        partial_matches: int = 0,
    ) -> None:
        """Initialize with every attempted candidate.

        Args:
            candidates: Name candidates tried, in order.
            partial_matches: Number of partial-match hits (0 or >1).
        """
        self.candidates = list(candidates)
        super().__init__(
            "Restaurant not found.",
            "TENANT_NOT_FOUND",
            {"candidates": self.candidates, "partial_matches": partial_matches},
        )


class ConnectionUnavailable(MenuhubException):
    """Raised when a tenant's data endpoint cannot be reached."""

    def __init__(self, endpoint: str, reason: str | None = None) -> None:
        """Initialize with the unreachable endpoint.

        Args:
            endpoint: Base URL of the hosted project.
            reason: Optional transport diagnostic (kept out of the message).
        """
        details: dict[str, Any] = {"endpoint": endpoint}
        if reason:
            details["reason"] = reason
        super().__init__(
            "Menu temporarily unavailable.",
            "CONNECTION_UNAVAILABLE",
            details,
        )


class DirectoryUnavailable(ConnectionUnavailable):
    """Raised when the central directory cannot be reached after retries."""


class FieldFetchFailed(MenuhubException):
    """Internal: one aggregated field could not be fetched.

    Never surfaced to callers; the aggregator converts it to the field's
    fallback value.
    """

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Fetch failed for field {field}",
            "FIELD_FETCH_FAILED",
            {"field": field, "reason": reason},
        )


class ExchangeRateMissing(MenuhubException):
    """Raised in strict pricing mode when a currency has no exchange rate."""

    def __init__(self, currency: str) -> None:
        super().__init__(
            f"No exchange rate configured for {currency}",
            "EXCHANGE_RATE_MISSING",
            {"currency": currency},
        )


class InvalidExchangeRate(MenuhubException):
    """Raised when an exchange rate is zero, negative, or not a number."""

    def __init__(self, currency: str, rate: Any) -> None:
        super().__init__(
            f"Invalid exchange rate for {currency}",
            "EXCHANGE_RATE_INVALID",
            {"currency": currency, "rate": repr(rate)},
        )


class TranslationFailed(MenuhubException):
    """Raised when every translation backend failed for a text."""

    def __init__(self, target_lang: str, reason: str) -> None:
        super().__init__(
            "Translation failed",
            "TRANSLATION_FAILED",
            {"target_lang": target_lang, "reason": reason},
        )
