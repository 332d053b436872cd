"""NiceGUI runtime orchestration for the user directory.

This module composes settings, the shared user source, the fetch use case,
and one directory view-model per browser page.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from userdir.adapters.users_memory import InMemoryUserSource
from userdir.adapters.users_rest import UsersRestAdapter
from userdir.domain.entities import UserRecord
from userdir.domain.ports import UserSourcePort
from userdir.usecases.fetch_users import FetchUsers
from userdir.viewmodels.settings_vm import SettingsConfig, SettingsVM
from userdir.viewmodels.user_directory_vm import DirectorySnapshot, UserDirectoryVM

LOGGER = logging.getLogger(__name__)


def build_user_source(config: SettingsConfig, *, offline: bool = False) -> UserSourcePort:
    """Create the configured user source; ``offline`` serves the built-in sample."""
    if offline:
        return InMemoryUserSource()
    return UsersRestAdapter(
        config.api_base_url,
        api_key=config.api_key or None,
        request_timeout_s=config.request_timeout_s,
        retries=config.retries,
    )


def user_row(user: UserRecord) -> Dict[str, str]:
    """Display fields for one list entry."""
    return {
        "initials": user.initials,
        "name": user.full_name,
        "age": f"Age: {user.age} years old",
    }


def footer_text(snapshot: DirectorySnapshot) -> str:
    return (
        f"Showing {len(snapshot.page_records)} of {snapshot.filtered_count} users "
        f"(Total: {snapshot.total_count})"
    )


class DirectoryRuntime:
    """Orchestration state used by NiceGUI views.

    One user source is shared by every page view and released by ``close``.
    """

    def __init__(
        self,
        *,
        settings_vm: Optional[SettingsVM] = None,
        user_source: Optional[UserSourcePort] = None,
        offline: bool = False,
    ) -> None:
        self.settings_vm = settings_vm or SettingsVM(config=SettingsConfig.from_env())
        self.offline = offline
        self._user_source = user_source

    @property
    def user_source(self) -> UserSourcePort:
        if self._user_source is None:
            self._user_source = build_user_source(self.settings_vm.config, offline=self.offline)
            LOGGER.debug("Created user source %s", type(self._user_source).__name__)
        return self._user_source

    def new_directory_vm(self) -> UserDirectoryVM:
        """Return a fresh coordinator; each page view owns its own."""
        return UserDirectoryVM(FetchUsers(self.user_source), page_size=self.settings_vm.config.page_size)

    def close(self) -> None:
        """Release the user source's connection pool, if it holds one."""
        source, self._user_source = self._user_source, None
        close = getattr(source, "close", None)
        if callable(close):
            close()


__all__ = ["DirectoryRuntime", "build_user_source", "footer_text", "user_row"]
