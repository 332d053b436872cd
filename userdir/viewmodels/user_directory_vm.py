"""Coordinator view-model for the user directory page.

Call context:
    ``userdir.web_ui.runtime.DirectoryRuntime`` owns one instance per page,
    calls ``load`` on startup, forwards search/page/retry events from the
    NiceGUI widgets, and renders ``snapshot()`` results.

State machine:
    ``LOADING -> READY | FAILED``; ``FAILED --retry--> LOADING``.
    Search term and page index are owned here and are only changed through
    ``set_search_term``, ``set_page``, ``next_page``, ``prev_page``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from userdir.domain.entities import UserDirectoryView, UserRecord, UserStats
from userdir.domain.ports import UseCaseError
from userdir.domain.view_pipeline import DEFAULT_PAGE_SIZE, clamp_page, derive_view

LOGGER = logging.getLogger(__name__)

Fetcher = Callable[[], Sequence[UserRecord]]


class LoadState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class DirectorySnapshot:
    """Read-only projection handed to the renderer after every change."""

    state: LoadState
    search_term: str
    current_page: int
    total_pages: int
    page_records: Tuple[UserRecord, ...]
    stats: UserStats
    error_message: Optional[str]
    filtered_count: int
    total_count: int

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def show_pagination(self) -> bool:
        """Controls are only worth rendering for more than one page."""
        return self.total_pages > 1


class UserDirectoryVM:
    """Owns search/page state and re-derives the directory view on each change.

    The fetcher is a zero-argument callable (normally a ``FetchUsers`` use
    case) that returns records. ``UseCaseError`` supplies the failure text;
    any other exception is shown through its own message.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_changed: Optional[Callable[[DirectorySnapshot], None]] = None,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._fetcher = fetcher
        self.page_size = page_size
        self.on_changed = on_changed

        self.state: LoadState = LoadState.LOADING
        self.error_message: Optional[str] = None
        self.search_term: str = ""
        self.current_page: int = 1

        self._records: Tuple[UserRecord, ...] = ()
        self._view: UserDirectoryView = derive_view((), "", 1, page_size)
        self._fetch_in_flight = False

    # ------------------------------------------------------------------
    # Fetch cycle
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Run one fetch cycle and settle in ``READY`` or ``FAILED``.

        A call made while another cycle is still running is ignored.
        """
        if self.begin_fetch():
            self.run_fetch()

    def retry(self) -> None:
        """Re-enter ``LOADING`` from ``FAILED``; a no-op in any other state."""
        if self.begin_fetch(retry=True):
            self.run_fetch()

    def begin_fetch(self, *, retry: bool = False) -> bool:
        """Enter ``LOADING`` and claim the single fetch slot.

        Split from ``run_fetch`` so an event loop can render the loading
        state before the blocking fetch runs on a worker thread.

        Returns:
            ``False`` when a fetch is already in flight, or when ``retry`` is
            set and the coordinator is not in ``FAILED``.
        """
        if self._fetch_in_flight:
            LOGGER.debug("Ignoring fetch request: a fetch is already in flight.")
            return False
        if retry and self.state is not LoadState.FAILED:
            LOGGER.debug("Ignoring retry in state %s.", self.state.value)
            return False
        self._fetch_in_flight = True
        self._set_state(LoadState.LOADING)
        self.error_message = None
        self._notify()
        return True

    def run_fetch(self) -> None:
        """Call the fetcher for the cycle opened by ``begin_fetch``."""
        if not self._fetch_in_flight:
            LOGGER.debug("run_fetch called without begin_fetch; ignoring.")
            return
        try:
            records = tuple(self._fetcher())
        except UseCaseError as exc:
            self._fail(exc.message)
            return
        except Exception as exc:
            LOGGER.warning("Fetcher raised %s: %s", type(exc).__name__, exc)
            self._fail(str(exc) or "Failed to load users.")
            return
        finally:
            self._fetch_in_flight = False
        self._records = records
        self._set_state(LoadState.READY)
        self._rederive()

    # ------------------------------------------------------------------
    # User inputs
    # ------------------------------------------------------------------
    def set_search_term(self, term: str) -> None:
        term = "" if term is None else str(term)
        if term == self.search_term:
            return
        self.search_term = term
        if self.state is LoadState.READY:
            narrowed = derive_view(self._records, term, 1, self.page_size)
            if self.current_page > narrowed.total_pages:
                LOGGER.debug("Page %d out of range after search; back to 1", self.current_page)
                self.current_page = 1
        self._rederive()

    def set_page(self, page: int) -> None:
        self.current_page = clamp_page(page, self._view.total_pages)
        self._rederive()

    def next_page(self) -> None:
        self.set_page(self.current_page + 1)

    def prev_page(self) -> None:
        self.set_page(self.current_page - 1)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def records(self) -> Tuple[UserRecord, ...]:
        return self._records

    @property
    def view(self) -> UserDirectoryView:
        return self._view

    def page_numbers(self) -> List[int]:
        return list(range(1, self._view.total_pages + 1))

    def snapshot(self) -> DirectorySnapshot:
        view = self._view
        return DirectorySnapshot(
            state=self.state,
            search_term=self.search_term,
            current_page=self.current_page,
            total_pages=view.total_pages,
            page_records=view.page_records,
            stats=view.stats,
            error_message=self.error_message,
            filtered_count=len(view.filtered_records),
            total_count=len(self._records),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _rederive(self) -> None:
        # Outside READY only the inputs are kept; the view is rebuilt on load.
        if self.state is LoadState.READY:
            self._view = derive_view(self._records, self.search_term, self.current_page, self.page_size)
            if self._view.current_page != self.current_page:
                LOGGER.debug("Clamped page %d -> %d", self.current_page, self._view.current_page)
            self.current_page = self._view.current_page
            LOGGER.debug(
                "Derived view: term=%r page=%d/%d matches=%d",
                self.search_term,
                self.current_page,
                self._view.total_pages,
                self._view.stats.count,
            )
        self._notify()

    def _fail(self, message: str) -> None:
        self._records = ()
        self._view = derive_view((), "", 1, self.page_size)
        self.current_page = 1
        self.error_message = message
        self._set_state(LoadState.FAILED)
        self._notify()

    def _set_state(self, state: LoadState) -> None:
        if state is not self.state:
            LOGGER.info("User directory: %s -> %s", self.state.value, state.value)
        self.state = state

    def _notify(self) -> None:
        if self.on_changed:
            self.on_changed(self.snapshot())


__all__ = ["DirectorySnapshot", "Fetcher", "LoadState", "UserDirectoryVM"]
