"""Tests for the cooldown tracker."""

from datetime import timedelta

import pytest

from ccbell.cooldown import CooldownTracker
from ccbell.events import EventType
from ccbell.exceptions import ConfigError

INTERVAL = timedelta(seconds=30)


@pytest.fixture
def tracker():
    """Tracker with a 30s cooldown on stop only."""
    return CooldownTracker({EventType.STOP: INTERVAL})


class TestCooldownTracker:
    """Tests for CooldownTracker."""

    def test_no_history_not_in_cooldown(self, tracker, now):
        """Event types never allowed are not in cooldown."""
        assert tracker.remaining_cooldown(EventType.STOP, now) == timedelta(0)
        assert tracker.is_in_cooldown(EventType.STOP, now) is False

    def test_in_cooldown_just_before_interval(self, tracker, now):
        """Still cooling down one second before the interval ends."""
        tracker.record_allowed(EventType.STOP, now)
        later = now + INTERVAL - timedelta(seconds=1)
        assert tracker.is_in_cooldown(EventType.STOP, later) is True
        assert tracker.remaining_cooldown(EventType.STOP, later) == timedelta(seconds=1)

    def test_not_in_cooldown_after_interval(self, tracker, now):
        """Cooldown is over one second after the interval ends."""
        tracker.record_allowed(EventType.STOP, now)
        later = now + INTERVAL + timedelta(seconds=1)
        assert tracker.is_in_cooldown(EventType.STOP, later) is False

    def test_cooldown_ends_exactly_at_interval(self, tracker, now):
        """Remaining time reaches zero exactly at the interval."""
        tracker.record_allowed(EventType.STOP, now)
        assert tracker.is_in_cooldown(EventType.STOP, now + INTERVAL) is False

    def test_remaining_is_never_negative(self, tracker, now):
        """Remaining cooldown is clamped at zero."""
        tracker.record_allowed(EventType.STOP, now)
        assert tracker.remaining_cooldown(EventType.STOP, now + timedelta(hours=1)) == timedelta(0)

    def test_no_interval_never_in_cooldown(self, tracker, now):
        """Event types without an interval never cool down."""
        tracker.record_allowed(EventType.SUBAGENT, now)
        assert tracker.is_in_cooldown(EventType.SUBAGENT, now) is False

    def test_event_types_are_independent(self, now):
        """Cooldown for one event type does not affect another."""
        tracker = CooldownTracker(
            {EventType.STOP: INTERVAL, EventType.IDLE_PROMPT: INTERVAL}
        )
        tracker.record_allowed(EventType.STOP, now)
        assert tracker.is_in_cooldown(EventType.STOP, now) is True
        assert tracker.is_in_cooldown(EventType.IDLE_PROMPT, now) is False

    def test_seeded_last_allowed(self, now):
        """Persisted timestamps can seed the tracker."""
        tracker = CooldownTracker(
            {EventType.STOP: INTERVAL},
            last_allowed={EventType.STOP: now - timedelta(seconds=10)},
        )
        assert tracker.remaining_cooldown(EventType.STOP, now) == timedelta(seconds=20)

    def test_negative_interval_rejected(self):
        """Negative intervals are a configuration error naming the event."""
        with pytest.raises(ConfigError, match="events.stop.cooldown"):
            CooldownTracker({EventType.STOP: timedelta(seconds=-1)})

    def test_set_intervals_keeps_history(self, tracker, now):
        """Changing intervals keeps the last allowed times."""
        tracker.record_allowed(EventType.STOP, now)
        tracker.set_intervals({EventType.STOP: timedelta(minutes=5)})
        assert tracker.remaining_cooldown(EventType.STOP, now) == timedelta(minutes=5)

    def test_failed_set_intervals_keeps_old_intervals(self, tracker):
        """A rejected interval update changes nothing."""
        with pytest.raises(ConfigError):
            tracker.set_intervals(
                {EventType.STOP: timedelta(seconds=5), EventType.SUBAGENT: timedelta(seconds=-5)}
            )
        assert tracker.interval(EventType.STOP) == INTERVAL

    def test_snapshot_is_a_copy(self, tracker, now):
        """snapshot should not expose internal state."""
        tracker.record_allowed(EventType.STOP, now)
        snapshot = tracker.snapshot()
        snapshot.clear()
        assert tracker.snapshot() == {EventType.STOP: now}

    def test_lock_is_per_event_type(self, tracker):
        """Each event type gets its own, stable lock."""
        assert tracker.lock(EventType.STOP) is tracker.lock(EventType.STOP)
        assert tracker.lock(EventType.STOP) is not tracker.lock(EventType.SUBAGENT)

    def test_naive_history_compared_with_aware_now(self, now):
        """A naive stamp is read as local time against an aware now."""
        tracker = CooldownTracker(
            {EventType.STOP: INTERVAL},
            last_allowed={EventType.STOP: now - timedelta(seconds=10)},
        )
        remaining = tracker.remaining_cooldown(EventType.STOP, now.astimezone())
        assert remaining == timedelta(seconds=20)
