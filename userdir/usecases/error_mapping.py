"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from userdir.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiParseError,
    ApiServerError,
    ApiTimeoutError,
)
from userdir.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Exceptions that do not come from the adapter layer keep their own text so
    a fetcher failing with ``"Network Error"`` is shown exactly like that.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiParseError):
        return UseCaseError("PARSE_ERROR", f"Unexpected response: {exc}")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        if status in (401, 403):
            return UseCaseError("AUTH_FAILED", "Auth failed / API key invalid.")
        if status == 404:
            return UseCaseError("NOT_FOUND", "User directory endpoint not found (HTTP 404).")
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", f"{label}: {exc.detail}" if exc.detail else f"{label}.")
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Server error, try again.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    return UseCaseError(default_code, str(exc) or default_message or "Unexpected error.")


__all__ = ["map_api_error"]
