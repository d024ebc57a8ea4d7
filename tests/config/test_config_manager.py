"""
Tests for runtime settings and their environment overrides.
"""

import pytest
from zoomfixer.config import constants
from zoomfixer.config.manager import ConfigManager


def test_defaults_without_environment():
    manager = ConfigManager(environ={})

    assert manager.get("installer_url") == constants.ZOOM_INSTALLER_URL
    assert manager.get("daemon_poll_attempts") == 12
    assert manager.get("daemon_poll_interval") == 5
    assert manager.get("missing", "fallback") == "fallback"


def test_environment_overrides_are_coerced():
    manager = ConfigManager(environ={
        "ZOOMFIXER_INSTALLER_URL": "https://mirror.example/Zoom.pkg",
        "ZOOMFIXER_DAEMON_POLL_ATTEMPTS": "3",
        "ZOOMFIXER_DOWNLOAD_TIMEOUT": "60",
    })

    assert manager.get("installer_url") == "https://mirror.example/Zoom.pkg"
    assert manager.get("daemon_poll_attempts") == 3
    assert manager.get("download_timeout") == 60


def test_invalid_override_ignored():
    manager = ConfigManager(environ={"ZOOMFIXER_DAEMON_POLL_INTERVAL": "soon"})
    assert manager.get("daemon_poll_interval") == constants.DAEMON_POLL_INTERVAL


@pytest.mark.parametrize("key,value", [
    ("download_timeout", 0),
    ("download_chunk_size", -1),
    ("daemon_poll_attempts", 0),
    ("daemon_poll_interval", -5),
    ("download_timeout", "thirty"),
])
def test_validate_repairs_bad_values(key, value):
    manager = ConfigManager(environ={})
    manager.set(key, value)

    manager.validate_config()

    assert manager.get(key) == ConfigManager.DEFAULT_CONFIG[key]


def test_validate_restores_missing_keys():
    manager = ConfigManager(environ={})
    del manager.config["theme"]

    manager.validate_config()

    assert manager.get("theme") == "System"


def test_zero_interval_is_allowed():
    manager = ConfigManager(environ={"ZOOMFIXER_DAEMON_POLL_INTERVAL": "0"})
    manager.validate_config()
    assert manager.get("daemon_poll_interval") == 0
