from __future__ import annotations

import pytest

from userdir.viewmodels.settings_vm import SettingsConfig, SettingsVM


def test_settings_vm_apply_dict_coerces_values() -> None:
    vm = SettingsVM()

    vm.apply_dict(
        {
            "api_base_url": " https://users.example ",
            "request_timeout_s": "15",
            "retries": 0,
            "page_size": "5",
            "api_key": " key ",
            "debug_logging": "yes",
        }
    )

    assert vm.config == SettingsConfig(
        api_base_url="https://users.example",
        request_timeout_s=15,
        retries=0,
        page_size=5,
        api_key="key",
        debug_logging=True,
    )


@pytest.mark.parametrize(
    "payload",
    [
        {"page_size": 0},
        {"page_size": True},
        {"request_timeout_s": "soon"},
        {"retries": -1},
        {"api_base_url": "ftp://users.example"},
        {"api_base_url": "not a url"},
        {"unknown_key": 1},
    ],
)
def test_settings_vm_apply_dict_rejects_invalid_values(payload) -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError):
        vm.apply_dict(payload)

    assert vm.config == SettingsConfig()


def test_settings_vm_apply_dict_keeps_unmentioned_fields() -> None:
    vm = SettingsVM(config=SettingsConfig(page_size=25, retries=4))

    vm.apply_dict({"page_size": "7"})

    assert vm.config.page_size == 7
    assert vm.config.retries == 4


def test_settings_config_from_env_reads_userdir_variables() -> None:
    config = SettingsConfig.from_env(
        {
            "USERDIR_API_BASE_URL": "http://localhost:9000",
            "USERDIR_PAGE_SIZE": "20",
            "USERDIR_RETRIES": "1",
            "USERDIR_DEBUG": "true",
            "UNRELATED": "x",
        }
    )

    assert config.api_base_url == "http://localhost:9000"
    assert config.page_size == 20
    assert config.retries == 1
    assert config.request_timeout_s == 10
    assert config.debug_logging is True


def test_settings_config_from_env_defaults() -> None:
    assert SettingsConfig.from_env({}) == SettingsConfig()
