from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    DOCUMENT_FETCH_TIMEOUT = "DOCUMENT_FETCH_TIMEOUT"
    DOCUMENT_FETCH_FAILED = "DOCUMENT_FETCH_FAILED"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    SUBSECTION_NOT_FOUND = "SUBSECTION_NOT_FOUND"
    API_NOT_FOUND = "API_NOT_FOUND"
    API_RATE_LIMITED = "API_RATE_LIMITED"
    API_TIMEOUT = "API_TIMEOUT"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


class SodaxError(Exception):
    """Raised for all expected failure conditions.

    Fetch failures surface from the fetcher and API client; not-found and
    invalid-input failures are raised by tool handlers. Caught by server.py
    and serialised into the MCP error response. Never catch this inside the
    ingestion pipeline — let it propagate through the cache so the caller
    that triggered the rebuild receives it.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }
