from __future__ import annotations

import logging

from userdir.adapters.users_memory import InMemoryUserSource
from userdir.adapters.users_rest import UsersRestAdapter
from userdir.domain.entities import UserRecord
from userdir.utils.logging import configure_root, env_log_level
from userdir.viewmodels.settings_vm import SettingsConfig, SettingsVM
from userdir.viewmodels.user_directory_vm import LoadState
from userdir.web_ui.runtime import DirectoryRuntime, build_user_source, footer_text, user_row


class _ClosingSource(InMemoryUserSource):
    closed = 0

    def close(self) -> None:
        self.closed += 1


def test_runtime_offline_vm_loads_sample_users() -> None:
    runtime = DirectoryRuntime(settings_vm=SettingsVM(), offline=True)
    vm = runtime.new_directory_vm()

    vm.load()
    snapshot = vm.snapshot()

    assert snapshot.state is LoadState.READY
    assert snapshot.total_count == 20
    assert snapshot.total_pages == 2
    assert footer_text(snapshot) == "Showing 10 of 20 users (Total: 20)"


def test_runtime_uses_settings_page_size_and_injected_source() -> None:
    settings = SettingsVM(config=SettingsConfig(page_size=3))
    source = InMemoryUserSource(users=[UserRecord(id=i, first_name="A", last_name="B", age=30) for i in range(7)])
    runtime = DirectoryRuntime(settings_vm=settings, user_source=source)

    vm = runtime.new_directory_vm()
    vm.load()

    assert vm.snapshot().total_pages == 3
    assert len(vm.snapshot().page_records) == 3


def test_runtime_shares_one_source_across_page_views() -> None:
    runtime = DirectoryRuntime(settings_vm=SettingsVM(), offline=True)

    first = runtime.new_directory_vm()
    second = runtime.new_directory_vm()
    first.load()
    second.load()

    assert runtime.user_source.calls == 2


def test_runtime_close_releases_source_once() -> None:
    source = _ClosingSource()
    runtime = DirectoryRuntime(settings_vm=SettingsVM(), user_source=source)

    runtime.close()
    runtime.close()

    assert source.closed == 1


def test_runtime_close_shuts_rest_adapter_session() -> None:
    settings = SettingsVM(config=SettingsConfig(api_base_url="http://users.local"))
    runtime = DirectoryRuntime(settings_vm=settings)
    adapter = runtime.user_source
    closed = []
    adapter.session.session.close = lambda: closed.append(True)  # type: ignore[method-assign]

    runtime.close()

    assert closed == [True]


def test_build_user_source_uses_rest_adapter_settings() -> None:
    config = SettingsConfig(api_base_url="http://users.local", request_timeout_s=4, retries=1)

    source = build_user_source(config)

    assert isinstance(source, UsersRestAdapter)
    assert source.users_url == "http://users.local/users"
    assert source.cfg.request_timeout_s == 4
    assert source.cfg.retries == 1
    source.close()


def test_user_row_formats_display_fields() -> None:
    row = user_row(UserRecord(id=1, first_name="sophia", last_name="Brown", age=42))

    assert row == {"initials": "SB", "name": "sophia Brown", "age": "Age: 42 years old"}


def test_log_level_env_overrides_debug_flag(monkeypatch) -> None:
    monkeypatch.setenv("USERDIR_LOG_LEVEL", "warning")

    assert env_log_level() == logging.WARNING
    assert configure_root(debug=True) == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_debug_flag_picks_level_without_env(monkeypatch) -> None:
    monkeypatch.delenv("USERDIR_LOG_LEVEL", raising=False)

    assert env_log_level() is None
    assert configure_root(debug=True) == logging.DEBUG
    assert configure_root(debug=False) == logging.INFO


def test_unknown_log_level_name_falls_back_to_info(monkeypatch) -> None:
    monkeypatch.setenv("USERDIR_LOG_LEVEL", "chatty")

    assert env_log_level() == logging.INFO
