from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlparse

from userdir.adapters.users_rest import DEFAULT_BASE_URL
from userdir.domain.view_pipeline import DEFAULT_PAGE_SIZE

_ENV_KEYS: Dict[str, str] = {
    "api_base_url": "USERDIR_API_BASE_URL",
    "request_timeout_s": "USERDIR_REQUEST_TIMEOUT_S",
    "retries": "USERDIR_RETRIES",
    "page_size": "USERDIR_PAGE_SIZE",
    "api_key": "USERDIR_API_KEY",
    "debug_logging": "USERDIR_DEBUG",
}


@dataclass(frozen=True)
class SettingsConfig:
    """Typed runtime settings for the directory source, page layout and logging."""

    api_base_url: str = DEFAULT_BASE_URL
    request_timeout_s: int = 10
    retries: int = 2
    page_size: int = DEFAULT_PAGE_SIZE
    api_key: str = ""
    debug_logging: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SettingsConfig":
        """Build a config from ``USERDIR_*`` variables, validated like CLI input."""
        env = os.environ if environ is None else environ
        payload = {key: env[var] for key, var in _ENV_KEYS.items() if env.get(var)}
        vm = SettingsVM()
        vm.apply_dict(payload)
        return vm.config


def _url(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("api_base_url must be a string.")
    normalized = value.strip()
    parsed = urlparse(normalized)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("api_base_url must be an http(s) URL.")
    return normalized


def _int_at_least(minimum: int) -> Callable[[str, Any], int]:
    def coerce(name: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError(f"{name} must be an integer.")
        try:
            number = int(value.strip()) if isinstance(value, str) else value
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer.") from exc
        if number < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return number

    return coerce


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


_COERCERS: Dict[str, Callable[[str, Any], Any]] = {
    "api_base_url": lambda _name, value: _url(value),
    "request_timeout_s": _int_at_least(1),
    "retries": _int_at_least(0),
    "page_size": _int_at_least(1),
    "api_key": lambda _name, value: "" if value is None else str(value).strip(),
    "debug_logging": lambda _name, value: _flag(value),
}


class SettingsVM:
    """Collects settings from env and CLI overrides; no I/O here."""

    def __init__(self, *, config: Optional[SettingsConfig] = None) -> None:
        self.config = config or SettingsConfig()

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Validate a flat mapping and merge it into ``config``.

        Raises:
            ValueError: Unknown keys or a value that fails validation; the
                config is left untouched in that case.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")
        known = {f.name for f in fields(SettingsConfig)}
        unknown = set(payload) - known
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")
        updates = {key: _COERCERS[key](key, value) for key, value in payload.items()}
        if updates:
            self.config = replace(self.config, **updates)


__all__ = ["SettingsConfig", "SettingsVM"]
