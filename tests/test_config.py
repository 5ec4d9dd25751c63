"""
Tests for environment-driven configuration.
"""

import pytest

from core.config import AppConfig, ConfigError


def test_defaults_from_empty_env():
    cfg = AppConfig.from_env({})
    assert cfg == AppConfig()
    assert cfg.variant == "shuffle"
    assert cfg.browsable is False


def test_reads_overrides():
    cfg = AppConfig.from_env({
        "SHUFFLE_CATALOG_URL": "https://h/c.txt",
        "SHUFFLE_COUNT_URL": "https://h/n.txt",
        "SHUFFLE_ASSET_TEMPLATE": "https://h/a/{filename}",
        "SHUFFLE_VARIANT": "Library",
        "SHUFFLE_RECOVERY_DELAY_MS": "250",
        "SHUFFLE_REQUEST_TIMEOUT": "2.5",
        "SHUFFLE_LOG_LEVEL": "debug",
    })
    assert cfg.catalog_url == "https://h/c.txt"
    assert cfg.count_url == "https://h/n.txt"
    assert cfg.asset_template == "https://h/a/{filename}"
    assert cfg.browsable is True
    assert cfg.recovery_delay_ms == 250
    assert cfg.request_timeout_s == 2.5
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize("env", [
    {"SHUFFLE_VARIANT": "radio"},
    {"SHUFFLE_ASSET_TEMPLATE": "https://h/static.mp3"},
    {"SHUFFLE_RECOVERY_DELAY_MS": "soon"},
    {"SHUFFLE_RECOVERY_DELAY_MS": "-5"},
    {"SHUFFLE_REQUEST_TIMEOUT": "0"},
])
def test_invalid_values_raise(env):
    with pytest.raises(ConfigError):
        AppConfig.from_env(env)
