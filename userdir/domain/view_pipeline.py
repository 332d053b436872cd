"""Pure derivation pipeline for the user directory.

The coordinator in ``userdir.viewmodels.user_directory_vm`` calls these
functions after every input change. Filter runs first, statistics and
pagination are both computed from the filtered set, never from the raw one.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

from userdir.domain.entities import UserDirectoryView, UserPage, UserRecord, UserStats

DEFAULT_PAGE_SIZE = 10


def filter_users(records: Iterable[UserRecord], term: str) -> Tuple[UserRecord, ...]:
    """Return records whose ``"first last"`` name contains ``term``, ignoring case."""
    needle = (term or "").lower()
    if not needle:
        return tuple(records)
    return tuple(record for record in records if needle in record.full_name.lower())


def _round_half_up(value: float) -> int:
    # Halves go up (22.5 -> 23); builtin round() would give banker's rounding.
    return int(math.floor(value + 0.5))


def aggregate_users(records: Sequence[UserRecord]) -> UserStats:
    """Compute count, rounded mean age, and max age; all zero for no records."""
    count = len(records)
    if count == 0:
        return UserStats(count=0, average_age=0, max_age=0)
    ages = [record.age for record in records]
    return UserStats(
        count=count,
        average_age=_round_half_up(sum(ages) / count),
        max_age=max(ages),
    )


def total_pages_for(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return math.ceil(max(count, 0) / page_size)


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a 1-based page index into ``[1, max(1, total_pages)]``."""
    return min(max(int(page), 1), max(int(total_pages), 1))


def paginate_users(records: Sequence[UserRecord], page: int, page_size: int) -> UserPage:
    """Slice ``records`` for a 1-based ``page``.

    Out-of-range pages yield an empty slice rather than an error; clamping is
    the caller's job.

    Raises:
        ValueError: If ``page_size`` is smaller than one.
    """
    total_pages = total_pages_for(len(records), page_size)
    if page < 1 or page > total_pages:
        return UserPage(page_records=(), total_pages=total_pages)
    start = (page - 1) * page_size
    return UserPage(
        page_records=tuple(records[start : start + page_size]),
        total_pages=total_pages,
    )


def derive_view(
    records: Sequence[UserRecord],
    term: str,
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> UserDirectoryView:
    """Run filter -> aggregate -> clamp -> paginate for one set of inputs."""
    filtered = filter_users(records, term)
    stats = aggregate_users(filtered)
    current_page = clamp_page(page, total_pages_for(len(filtered), page_size))
    sliced = paginate_users(filtered, current_page, page_size)
    return UserDirectoryView(
        filtered_records=filtered,
        stats=stats,
        page_records=sliced.page_records,
        total_pages=sliced.total_pages,
        current_page=current_page,
    )


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "aggregate_users",
    "clamp_page",
    "derive_view",
    "filter_users",
    "paginate_users",
    "total_pages_for",
]
