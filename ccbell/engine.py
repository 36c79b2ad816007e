"""Decision engine - decides whether an event should play a sound."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from .cooldown import CooldownTracker
from .events import EventData, EventType
from .filters import evaluate
from .models import Reason, Verdict
from .notification_config import EngineConfig
from .quiet_hours import is_quiet

logger = logging.getLogger(__name__)

# Called with (event_type, allowed_at) after each allow
StateListener = Callable[[EventType, datetime], None]


class DecisionEngine:
    """Applies enabled flags, quiet hours, cooldowns and filters to events.

    Checks run in order and stop at the first suppression:

    1. ccbell or the event type is disabled -> DISABLED
    2. Inside quiet hours -> QUIET_HOURS
    3. Event type still cooling down -> COOLDOWN
    4. Event fails its filters -> FILTERED_OUT

    Steps 3-4 and the cooldown update run under the event type's lock, so
    concurrent events of one type get at most one allow per interval.
    """

    def __init__(
        self,
        config: EngineConfig,
        tracker: Optional[CooldownTracker] = None,
        listeners: Iterable[StateListener] = (),
    ):
        self.tracker = tracker or CooldownTracker()
        self.tracker.set_intervals(config.cooldown_intervals())
        self._config = config
        self._config_lock = threading.Lock()
        self._listeners = list(listeners)

    @property
    def config(self) -> EngineConfig:
        return self._config

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback for cooldown state changes."""
        self._listeners.append(listener)

    def reconfigure(self, config: EngineConfig) -> None:
        """Swap in a new validated config.

        Cooldown history is kept; only intervals change.
        """
        with self._config_lock:
            self.tracker.set_intervals(config.cooldown_intervals())
            self._config = config
        logger.info(f"Reconfigured engine (profile: {config.active_profile})")

    def decide(
        self,
        event_type: EventType,
        data: EventData,
        now: Optional[datetime] = None,
    ) -> Verdict:
        """Decide whether to play a sound for this event.

        Args:
            event_type: The event type to decide for
            data: The event snapshot
            now: Decision time (defaults to the event timestamp)

        Returns:
            Verdict with allow flag and reason
        """
        if data.event_type != event_type:
            raise ValueError(
                f"Event data is for {data.event_type.value}, not {event_type.value}"
            )
        if now is None:
            now = data.timestamp

        config = self._config
        name = event_type.value
        event = config.event_config(event_type)

        if not config.enabled:
            logger.debug(f"Blocked {name}: ccbell is disabled")
            return Verdict(event_type, False, Reason.DISABLED)

        if event is None or not event.enabled:
            logger.debug(
                f"Blocked {name}: event disabled in profile {config.active_profile}"
            )
            return Verdict(event_type, False, Reason.DISABLED)

        if is_quiet(config.schedule_for(event_type), now):
            logger.debug(f"Blocked {name}: quiet hours")
            return Verdict(event_type, False, Reason.QUIET_HOURS)

        with self.tracker.lock(event_type):
            remaining = self.tracker.remaining_cooldown(event_type, now)
            if remaining > timedelta(0):
                logger.debug(
                    f"Blocked {name}: cooldown, {remaining.total_seconds():.1f}s left"
                )
                return Verdict(event_type, False, Reason.COOLDOWN)

            if not evaluate(event.filters, data):
                logger.debug(f"Blocked {name}: filtered out")
                return Verdict(event_type, False, Reason.FILTERED_OUT)

            self.tracker.record_allowed(event_type, now)

        logger.info(f"Allowing notification: {name}")
        self._notify_listeners(event_type, now)
        return Verdict(
            event_type, True, Reason.ALLOWED, sound=event.sound, volume=event.volume
        )

    def remaining_cooldowns(self, now: datetime) -> dict[EventType, timedelta]:
        """Remaining cooldown for every event type in the active profile."""
        return {
            event_type: self.tracker.remaining_cooldown(event_type, now)
            for event_type in self._config.profile_events()
        }

    def _notify_listeners(self, event_type: EventType, allowed_at: datetime) -> None:
        # Listener failures must not turn an allow into an error
        for listener in self._listeners:
            try:
                listener(event_type, allowed_at)
            except Exception as e:
                logger.error(
                    f"State listener failed for {event_type.value}: {e}", exc_info=True
                )
