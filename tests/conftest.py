"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from ccbell.config import get_settings
from ccbell.events import EventData, EventType

# Wednesday and Saturday at noon
WEDNESDAY_NOON = datetime(2026, 1, 28, 12, 0)
SATURDAY_NOON = datetime(2026, 1, 31, 12, 0)


@pytest.fixture
def now():
    """A fixed weekday decision time."""
    return WEDNESDAY_NOON


@pytest.fixture
def make_event(now):
    """Factory for EventData with sensible defaults."""

    def _make(event_type=EventType.STOP, **kwargs):
        kwargs.setdefault("timestamp", now)
        return EventData(event_type=event_type, **kwargs)

    return _make


@pytest.fixture
def settings_env(tmp_path, monkeypatch):
    """Point ccbell settings at temporary config and state files."""
    config_path = tmp_path / "ccbell.config.json"
    state_path = tmp_path / "ccbell.state.json"
    monkeypatch.setenv("CCBELL_CONFIG_PATH", str(config_path))
    monkeypatch.setenv("CCBELL_STATE_PATH", str(state_path))
    get_settings.cache_clear()
    yield config_path, state_path
    get_settings.cache_clear()
