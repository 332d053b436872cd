from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

from userdir.domain.entities import UserRecord
from userdir.domain.ports import UserSourcePort

from .api_errors import ApiParseError, error_from_response
from .http_client import HttpConfig, RetryingSession

DEFAULT_BASE_URL = "https://dummyjson.com"

LOGGER = logging.getLogger(__name__)


class UsersRestAdapter(UserSourcePort):
    """REST adapter that loads the whole user directory with one ``GET /users``."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        base = str(base_url or "").strip().rstrip("/")
        if not base:
            raise ValueError("UsersRestAdapter requires a base URL")
        self.users_url = f"{base}/users"
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key or None, self.cfg)

    def fetch_users(self) -> List[UserRecord]:
        resp = self.session.get(self.users_url)
        if not 200 <= resp.status_code < 300:
            raise error_from_response(resp.status_code, self._body(resp), context="users")
        users = self._parse_users(self._json(resp))
        LOGGER.debug("Fetched %d users from %s", len(users), self.users_url)
        return users

    def close(self) -> None:
        self.session.close()

    @staticmethod
    def _body(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return getattr(resp, "text", "") or None

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            snippet = (getattr(resp, "text", "") or "")[:200]
            raise ApiParseError(f"users: invalid JSON response: {snippet}", context="users") from exc

    @staticmethod
    def _parse_users(data: Any) -> List[UserRecord]:
        raw_users = data.get("users") if isinstance(data, dict) else None
        if not isinstance(raw_users, list):
            raise ApiParseError("users: expected an object with a 'users' list", payload=data, context="users")
        users: List[UserRecord] = []
        for index, entry in enumerate(raw_users):
            try:
                users.append(UserRecord.from_payload(entry))
            except ValueError as exc:
                raise ApiParseError(
                    f"users: invalid user at index {index}: {exc}",
                    payload=entry,
                    context="users",
                ) from exc
        return users


__all__ = ["DEFAULT_BASE_URL", "UsersRestAdapter"]
