"""Domain value objects shared across adapters, use-cases, and view models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple


def _as_int(value: Any, field_name: str) -> int:
    """Coerce payload numbers to ``int`` while rejecting bools and fractions."""
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer, got bool.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValueError(f"{field_name} must be an integer, got {value!r}.")


@dataclass(frozen=True)
class UserRecord:
    """One fetched user, immutable for the lifetime of a fetch cycle."""

    id: int
    """Stable identifier assigned by the remote directory."""
    first_name: str
    last_name: str
    age: int
    """Age in whole years; never negative."""

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError("UserRecord.id must be an integer.")
        if isinstance(self.age, bool) or not isinstance(self.age, int):
            raise ValueError("UserRecord.age must be an integer.")
        if self.age < 0:
            raise ValueError("UserRecord.age must be non-negative.")
        if not isinstance(self.first_name, str) or not isinstance(self.last_name, str):
            raise ValueError("UserRecord names must be strings.")

    @property
    def full_name(self) -> str:
        """Name used both for display and for search matching."""
        return f"{self.first_name} {self.last_name}"

    @property
    def initials(self) -> str:
        return "".join(part[:1] for part in (self.first_name, self.last_name)).upper()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UserRecord":
        """Build a record from the remote ``firstName``/``lastName`` wire shape.

        Raises:
            ValueError: If the payload is not a mapping, lacks ``id`` or
                ``age``, or carries values that are not valid integers.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("User payload must be a mapping.")
        if payload.get("id") is None:
            raise ValueError("User payload is missing 'id'.")
        if payload.get("age") is None:
            raise ValueError("User payload is missing 'age'.")
        first_name = payload.get("firstName")
        last_name = payload.get("lastName")
        return cls(
            id=_as_int(payload.get("id"), "id"),
            first_name=str(first_name) if first_name is not None else "",
            last_name=str(last_name) if last_name is not None else "",
            age=_as_int(payload.get("age"), "age"),
        )


@dataclass(frozen=True)
class UserStats:
    """Aggregate statistics over a (filtered) record set."""

    count: int = 0
    average_age: int = 0
    max_age: int = 0


@dataclass(frozen=True)
class UserPage:
    """One bounded slice of records plus page-count metadata."""

    page_records: Tuple[UserRecord, ...]
    total_pages: int


@dataclass(frozen=True)
class UserDirectoryView:
    """Derived view of (records, search term, page); never mutated, only rebuilt."""

    filtered_records: Tuple[UserRecord, ...]
    stats: UserStats
    page_records: Tuple[UserRecord, ...]
    total_pages: int
    current_page: int
    """Page index after clamping into ``[1, max(1, total_pages)]``."""


__all__ = ["UserDirectoryView", "UserPage", "UserRecord", "UserStats"]
