"""
Error types raised by the audit handler.

Each error knows the HTTP status it maps to and renders as an
ErrorResponse body via the exception handler registered in main.py.
"""

from typing import Optional


class AuditError(Exception):
    """Base class for errors returned to the client as JSON."""

    status_code: int = 500
    error: str = "Server error"

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(detail or self.error)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class InvalidMethod(AuditError):
    """Request used a method other than POST."""

    status_code = 405
    error = "Use POST { url }"


class MissingInput(AuditError):
    """POST body had no usable url."""

    status_code = 400
    error = "Missing url"


class UpstreamError(AuditError):
    """PageSpeed Insights answered with a non-success status."""

    error = "PSI error"

    def __init__(self, status_code: int, body: str):
        super().__init__(detail=body, status_code=status_code)


class InternalError(AuditError):
    """Catch-all for network, parse and programming failures."""

    status_code = 500
    error = "Server error"
