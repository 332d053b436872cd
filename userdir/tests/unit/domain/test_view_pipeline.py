from __future__ import annotations

from typing import List

import pytest

from userdir.domain.entities import UserRecord, UserStats
from userdir.domain.view_pipeline import (
    aggregate_users,
    clamp_page,
    derive_view,
    filter_users,
    paginate_users,
)


def _user(user_id: int, first: str, last: str, age: int) -> UserRecord:
    return UserRecord(id=user_id, first_name=first, last_name=last, age=age)


def _directory(count: int) -> List[UserRecord]:
    return [_user(i, f"First{i}", f"Last{i}", 20 + (i % 21)) for i in range(1, count + 1)]


SAMPLE = [
    _user(1, "John", "Smith", 30),
    _user(2, "Jane", "Johnson", 25),
    _user(3, "Mary", "Brown", 41),
    _user(4, "Elijah", "Johns", 19),
]


# ---- filter ----
def test_filter_empty_term_returns_all_in_order() -> None:
    assert filter_users(SAMPLE, "") == tuple(SAMPLE)


def test_filter_is_case_insensitive() -> None:
    assert filter_users(SAMPLE, "JOHN") == filter_users(SAMPLE, "john")
    assert [u.id for u in filter_users(SAMPLE, "john")] == [1, 2, 4]


def test_filter_matches_across_first_and_last_name() -> None:
    assert [u.id for u in filter_users(SAMPLE, "n smi")] == [1]
    assert [u.id for u in filter_users(SAMPLE, "mary brown")] == [3]


def test_filter_ignores_age_and_id() -> None:
    assert filter_users(SAMPLE, "30") == ()
    assert filter_users(SAMPLE, "1") == ()


def test_filter_does_not_mutate_input() -> None:
    records = list(SAMPLE)
    result = filter_users(records, "ja")

    assert records == SAMPLE
    assert len(result) <= len(records)


# ---- aggregate ----
def test_aggregate_empty_is_all_zero() -> None:
    assert aggregate_users([]) == UserStats(count=0, average_age=0, max_age=0)


def test_aggregate_counts_rounds_mean_and_takes_max() -> None:
    stats = aggregate_users(SAMPLE)

    assert stats.count == 4
    assert stats.max_age == max(u.age for u in SAMPLE)
    # (30 + 25 + 41 + 19) / 4 = 28.75
    assert stats.average_age == 29


def test_aggregate_rounds_halves_up() -> None:
    stats = aggregate_users([_user(1, "A", "B", 22), _user(2, "C", "D", 23)])

    assert stats.average_age == 23


# ---- paginate ----
def test_paginate_twenty_five_records_into_three_pages() -> None:
    records = _directory(25)

    first = paginate_users(records, 1, 10)
    last = paginate_users(records, 3, 10)

    assert first.total_pages == 3
    assert len(first.page_records) == 10
    assert len(last.page_records) == 5
    assert [u.id for u in last.page_records] == [21, 22, 23, 24, 25]


def test_paginate_empty_has_zero_pages() -> None:
    page = paginate_users([], 1, 10)

    assert page.total_pages == 0
    assert page.page_records == ()


@pytest.mark.parametrize("page", [0, -1, 4, 99])
def test_paginate_out_of_range_page_yields_empty_slice(page: int) -> None:
    result = paginate_users(_directory(25), page, 10)

    assert result.page_records == ()
    assert result.total_pages == 3


def test_paginate_never_exceeds_page_size() -> None:
    records = _directory(23)
    for page in range(1, 5):
        assert len(paginate_users(records, page, 7).page_records) <= 7


def test_paginate_rejects_non_positive_page_size() -> None:
    with pytest.raises(ValueError):
        paginate_users(SAMPLE, 1, 0)


def test_clamp_page_bounds() -> None:
    assert clamp_page(3, 1) == 1
    assert clamp_page(0, 3) == 1
    assert clamp_page(5, 0) == 1
    assert clamp_page(2, 3) == 2


# ---- derive_view ----
def test_derive_view_paginates_filtered_set_not_raw_set() -> None:
    records = _directory(25) + [_user(100, "Zed", "Quinn", 50)]

    view = derive_view(records, "zed", 1, 10)

    assert [u.id for u in view.filtered_records] == [100]
    assert view.stats == UserStats(count=1, average_age=50, max_age=50)
    assert view.total_pages == 1
    assert view.page_records == (records[-1],)


def test_derive_view_clamps_page_into_range() -> None:
    view = derive_view(_directory(25), "First1", 3, 10)

    # First1, First10..First19
    assert view.total_pages == 2
    assert view.current_page == 2
    assert len(view.page_records) == 1


def test_derive_view_is_idempotent() -> None:
    records = _directory(25)

    assert derive_view(records, "last2", 1, 10) == derive_view(records, "last2", 1, 10)
