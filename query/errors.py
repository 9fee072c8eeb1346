"""
Word query errors.

Every failure below the request model surfaces as one of these types. Each
carries a stable code for the structured error body and says whether the
caller may retry.
"""

from typing import Any, Optional


class WordQueryError(Exception):
    """Base class for word query failures."""

    code = "QUERY_ERROR"
    retryable = False
    http_status = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Structured error body returned by handlers and the HTTP API."""
        body = {
            "error": True,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
        }
        body.update(self.details)
        return body


class UnknownFieldError(WordQueryError):
    """A sort or filter identifier is not on the attribute allow-list."""

    code = "UNKNOWN_FIELD"
    http_status = 400

    def __init__(self, field: str, valid_fields: Optional[list[str]] = None, path: str = "field"):
        super().__init__(
            f"Unknown field '{field}'",
            path=path,
            validFields=valid_fields or [],
        )
        self.field = field


class StoreUnavailableError(WordQueryError):
    """The word store could not be reached or failed to run the query."""

    code = "STORE_UNAVAILABLE"
    retryable = True
    http_status = 503


class RowDecodeError(WordQueryError):
    """A row returned by the store does not match the word record layout."""

    code = "DATA_INTEGRITY_ERROR"
    http_status = 500


class FeatureUnavailableError(WordQueryError):
    """The request needs a store capability that is not available."""

    code = "FEATURE_UNAVAILABLE"
    http_status = 501


class InvalidValueError(WordQueryError):
    """A request value that is spliced into query text is not allowed."""

    code = "INVALID_VALUE"
    http_status = 400

    def __init__(self, message: str, path: str):
        super().__init__(message, path=path)
