"""Shared pytest fixtures for the test suite."""

import logging
from unittest.mock import MagicMock

import pytest

from ahcheck.lib.config import Settings, set_settings
from ahcheck.lib.weather import Coordinates


@pytest.fixture(autouse=True)
def configure_caplog(caplog):
    """Ensure caplog captures logs from the ahcheck namespace."""
    caplog.set_level(logging.DEBUG, logger="ahcheck")


@pytest.fixture(autouse=True)
def isolated_settings():
    """Use environment-independent settings for every test.

    The .env file is ignored so that a developer's local configuration
    cannot leak into the test run.
    """
    settings = Settings(_env_file=None, weather_initial_backoff_sec=0)
    set_settings(settings)
    yield settings
    set_settings(None)


@pytest.fixture
def tokyo():
    """Coordinates used as the device location in tests."""
    return Coordinates(latitude=35.68, longitude=139.76)


@pytest.fixture
def mock_notifier():
    """Create a mock notifier recording notices."""
    notifier = MagicMock()
    notifier.notify = MagicMock()
    return notifier

