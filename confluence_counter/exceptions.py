"""
Custom exceptions for the Confluence test counter.

Error philosophy:
  - ConfigurationError → FAIL HARD: raised before any network I/O, the run stops.
  - DocumentFetchError → PER DOCUMENT: the aggregator logs it and moves on,
    treating the document as empty (or skipping it in id mode).
  - EnumerationError   → LISTING: collapsed to "empty space" unless the
    aggregator runs with strict_listing=True.

Non-numeric count cells are not errors at all; the classifier skips them.
"""

from typing import Optional


class CounterError(Exception):
    """Base exception for all counter errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- FAIL HARD: stops the run before the aggregator is built ---

class ConfigurationError(CounterError):
    """
    Raised when required settings (URL, username, API token, or a target)
    are missing.
    """

    def __init__(
        self,
        message: str,
        missing: Optional[list[str]] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.missing = missing or []

    def to_response(self) -> dict:
        """Convert to a JSON-friendly error payload."""
        return {
            "error": "ConfigurationError",
            "message": self.message,
            "missing": self.missing,
            "details": self.details
        }


# --- RECOVERED: one document failed, the run continues ---

class DocumentFetchError(CounterError):
    """Raised by a document source when a page cannot be fetched."""

    def __init__(
        self,
        message: str,
        document_id: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.document_id = document_id
        self.status_code = status_code


# --- LISTING: lenient by default, strict on request ---

class EnumerationError(CounterError):
    """Raised when the pages of a space cannot be listed."""

    def __init__(
        self,
        message: str,
        collection_key: str,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.collection_key = collection_key
