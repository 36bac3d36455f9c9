"""
Error taxonomy shared by every component.

Each error carries the HTTP status and machine-readable code the API
responds with. Upstream 401/403 responses from any Google API are always
reported as AuthExpired so callers have one signal to re-authenticate.
"""

from __future__ import annotations

from typing import Any, Optional


class SetlistError(Exception):
    """Base error for the application."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "", details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body: dict = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class AuthRequired(SetlistError):
    """No signed-in session."""

    status_code = 401
    code = "AUTH_REQUIRED"


class AuthExpired(SetlistError):
    """Refresh failed or an upstream API rejected the access token."""

    status_code = 401
    code = "TOKEN_EXPIRED"


class InvalidInput(SetlistError):
    status_code = 400
    code = "INVALID_INPUT"


class NotFound(SetlistError):
    status_code = 404
    code = "NOT_FOUND"


class UpstreamError(SetlistError):
    """Transport or API failure not classified above."""

    status_code = 502
    code = "UPSTREAM_ERROR"


class ConfigurationError(SetlistError):
    status_code = 500
    code = "CONFIGURATION_ERROR"


AUTH_STATUSES = (401, 403)


def http_status_of(exc: BaseException) -> Optional[int]:
    """Best-effort HTTP status of a googleapiclient HttpError (or lookalike)."""
    status = getattr(getattr(exc, "resp", None), "status", None)
    if status is None:
        status = getattr(exc, "status_code", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def translate_http_error(exc: BaseException, context: str) -> SetlistError:
    """
    Map a collaborator exception into the error taxonomy.

    Already-classified errors pass through unchanged.
    """
    if isinstance(exc, SetlistError):
        return exc

    status = http_status_of(exc)
    if status in AUTH_STATUSES:
        return AuthExpired(
            "Authorization expired. Please sign in again.",
            details=f"{context}: {exc}",
        )
    return UpstreamError(f"{context} failed: {exc}", details={"status": status})
