"""``requests`` transport shared by the REST adapters.

Owns one ``requests.Session`` with the ``Accept``/``X-API-Key`` headers set
once, and retries GETs that time out or cannot connect. Status handling is
left to the adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests
from requests import exceptions as req_exc

from userdir.adapters.api_errors import ApiError, ApiTimeoutError


@dataclass
class HttpConfig:
    request_timeout_s: int = 10
    retries: int = 2
    """Extra attempts after the first one; only transport failures are retried."""


class RetryingSession:
    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        self.cfg = cfg
        self.session = requests.Session()
        self.session.headers["Accept"] = "application/json"
        if api_key:
            self.session.headers["X-API-Key"] = api_key

    def get(self, url: str) -> requests.Response:
        """GET ``url``, retrying up to ``cfg.retries`` times on transport errors.

        Raises:
            ApiTimeoutError: Every attempt timed out or failed to connect.
            ApiError: ``requests`` rejected the request outright.
        """
        context = f"GET {url}"
        for attempt in range(1, self.cfg.retries + 2):
            try:
                return self.session.get(url, timeout=self.cfg.request_timeout_s)
            except (req_exc.Timeout, req_exc.ConnectionError):
                if attempt > self.cfg.retries:
                    raise ApiTimeoutError(f"Timeout contacting {url}", context=context) from None
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        raise ApiError("No request attempted", context=context)

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpConfig", "RetryingSession"]
