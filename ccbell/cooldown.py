"""Cooldown tracker - minimum interval between sounds of the same event type."""

import logging
import threading
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Mapping, Optional

from .events import EventType
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

NO_COOLDOWN = timedelta(0)


class CooldownTracker:
    """Per-event-type cooldown state.

    Holds the last allowed timestamp and the configured interval for each
    event type. Event types without an interval never enter cooldown.
    Timestamps can be seeded from a persisted state file at construction.
    """

    def __init__(
        self,
        intervals: Optional[Mapping[EventType, timedelta]] = None,
        last_allowed: Optional[Mapping[EventType, datetime]] = None,
    ):
        self._intervals: dict[EventType, timedelta] = {}
        self._last_allowed: dict[EventType, datetime] = dict(last_allowed or {})
        self._locks: defaultdict[EventType, threading.Lock] = defaultdict(
            threading.Lock
        )
        self._locks_guard = threading.Lock()
        self.set_intervals(intervals or {})

    def set_intervals(self, intervals: Mapping[EventType, timedelta]) -> None:
        """Replace the configured intervals, keeping last-allowed state.

        Raises:
            ConfigError: If any interval is negative
        """
        for event_type, interval in intervals.items():
            if interval < NO_COOLDOWN:
                raise ConfigError(
                    f"events.{event_type.value}.cooldown: must be >= 0, "
                    f"got {interval.total_seconds()}"
                )
        self._intervals = dict(intervals)

    def interval(self, event_type: EventType) -> timedelta:
        return self._intervals.get(event_type, NO_COOLDOWN)

    def lock(self, event_type: EventType) -> threading.Lock:
        """Get the lock serializing decisions for one event type."""
        with self._locks_guard:
            return self._locks[event_type]

    def remaining_cooldown(self, event_type: EventType, now: datetime) -> timedelta:
        """Time left before this event type may notify again.

        Returns:
            Zero if never allowed, no interval configured, or the interval
            has elapsed
        """
        last = self._last_allowed.get(event_type)
        if last is None:
            return NO_COOLDOWN
        if (last.tzinfo is None) != (now.tzinfo is None):
            # Naive stamps are local time
            last, now = last.astimezone(), now.astimezone()
        remaining = last + self.interval(event_type) - now
        return max(NO_COOLDOWN, remaining)

    def is_in_cooldown(self, event_type: EventType, now: datetime) -> bool:
        return self.remaining_cooldown(event_type, now) > NO_COOLDOWN

    def record_allowed(self, event_type: EventType, now: datetime) -> None:
        """Mark a notification for this event type as allowed at ``now``.

        Call only once the notification is committed to.
        """
        self._last_allowed[event_type] = now
        logger.debug(f"Recorded {event_type.value} allowed at {now.isoformat()}")

    def snapshot(self) -> dict[EventType, datetime]:
        """Copy of last-allowed timestamps, e.g. for persisting."""
        return dict(self._last_allowed)
