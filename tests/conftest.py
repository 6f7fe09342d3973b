"""Minimal test fixtures - just what we actually need."""

import io
from datetime import timezone

import pytest

from logcache_cli.core.constants import EnvVars
from logcache_cli.ui.tail import TailDisplay, TailFormatter


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the developer's endpoint settings and config file out of tests."""
    for name in (EnvVars.ADDR, EnvVars.API_ADDR, EnvVars.TOKEN, EnvVars.SKIP_AUTH):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    yield tmp_path


@pytest.fixture
def utc_formatter():
    """Formatter pinned to UTC so rendered lines are deterministic."""
    return TailFormatter(tz=timezone.utc)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def display(output, utc_formatter):
    """Plain-text display without headers writing to an in-memory stream."""
    return TailDisplay(output, formatter=utc_formatter, show_headers=False)
