from __future__ import annotations

from typing import List, Protocol

from userdir.domain.entities import UserRecord


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class UserSourcePort(Protocol):
    """Fetch-all access to the remote user directory.

    Implementations return the full collection in one call and raise on
    transport or parse failures. No filtering or paging is pushed to the source.
    """

    def fetch_users(self) -> List[UserRecord]: ...
