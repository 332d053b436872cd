"""Typed failures raised by the user directory adapters.

The remote API reports errors as ``{"message": "..."}``; anything else in
an error body is kept only as ``payload`` for logging.
"""

from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        detail: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the user directory API."""


class ApiServerError(ApiError):
    """HTTP 5xx from the user directory API."""


class ApiTimeoutError(ApiError):
    """Timeout or connection failure after all retries."""


class ApiParseError(ApiError):
    """Response body is not a ``users`` listing of valid records."""


def error_detail(payload: Any) -> Optional[str]:
    """Return the API's ``message`` text, or a short plain-text body."""
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
        return None
    if isinstance(payload, str) and payload.strip():
        return payload.strip()[:200]
    return None


def error_from_response(status: int, payload: Any, *, context: str) -> ApiError:
    """Pick the ``ApiError`` subclass for a non-2xx status."""
    detail = error_detail(payload)
    message = f"{context}: HTTP {status}" + (f" ({detail})" if detail else "")
    if 400 <= status < 500:
        cls = ApiClientError
    elif 500 <= status < 600:
        cls = ApiServerError
    else:
        cls = ApiError
    return cls(message, status=status, detail=detail, payload=payload, context=context)


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiParseError",
    "ApiServerError",
    "ApiTimeoutError",
    "error_detail",
    "error_from_response",
]
