"""Notification state persistence.

Keeps the last allowed time per event type in a small JSON file so cooldowns
survive between hook invocations::

    {"last_allowed": {"stop": "2026-01-29T14:03:11+01:00"}}
"""

import json
import logging
import os
import threading
from datetime import datetime
from pathlib import Path

from .events import EventType

logger = logging.getLogger(__name__)


class CooldownStateFile:
    """JSON file holding last-allowed timestamps."""

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()
        self._lock = threading.Lock()

    def load(self) -> dict[EventType, datetime]:
        """Read last-allowed timestamps.

        Returns:
            Mapping of event type to last allowed time. Empty if the file is
            missing or unreadable; unknown event types are skipped and
            timestamps without an offset are read as local time.
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path) as f:
                data = json.load(f)
            entries = data["last_allowed"]
            if not isinstance(entries, dict):
                raise ValueError("last_allowed is not a mapping")
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}

        state = {}
        for name, stamp in entries.items():
            try:
                when = datetime.fromisoformat(stamp)
                if when.tzinfo is None:
                    when = when.astimezone()
                state[EventType(name)] = when
            except (TypeError, ValueError):
                logger.warning(f"Skipping bad state entry {name}={stamp!r}")
        return state

    def save(self, state: dict[EventType, datetime]) -> None:
        """Write all timestamps, replacing the file atomically."""
        payload = {
            "last_allowed": {
                event_type.value: when.isoformat() for event_type, when in state.items()
            }
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(payload, f, indent=2)
        os.replace(tmp_path, self.path)

    def record(self, event_type: EventType, allowed_at: datetime) -> None:
        """Update one event type's timestamp.

        Matches the engine's state listener signature.
        """
        with self._lock:
            state = self.load()
            state[event_type] = allowed_at
            self.save(state)
        logger.debug(f"Saved {event_type.value} state to {self.path}")
