"""Pytest configuration and fixtures."""

import sys
from unittest.mock import patch

import pytest

from fakes import FakeClock


def pytest_keyboard_interrupt(excinfo):
    """Handle Ctrl-C gracefully without verbose traceback."""
    print("\n\nTests interrupted by user (Ctrl-C)", file=sys.stderr)
    return None


@pytest.fixture
def clock():
    """A frozen clock starting at zero nanoseconds."""
    return FakeClock()


@pytest.fixture
def isolated_config(tmp_path):
    """Point the config file at a temporary directory."""
    config_file = tmp_path / "config.json"
    with patch("rtss.config.get_config_path", return_value=str(config_file)):
        yield config_file
