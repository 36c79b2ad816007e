"""ccbell - decides when assistant events should play a sound."""

from .cooldown import CooldownTracker
from .engine import DecisionEngine
from .events import EventData, EventType
from .exceptions import ConfigError
from .filters import FilterSpec, evaluate
from .models import Reason, Verdict
from .notification_config import EngineConfig, load_engine_config, parse_engine_config
from .quiet_hours import ScheduleSpec, TimeWindow, is_quiet

__all__ = [
    "ConfigError",
    "CooldownTracker",
    "DecisionEngine",
    "EngineConfig",
    "EventData",
    "EventType",
    "FilterSpec",
    "Reason",
    "ScheduleSpec",
    "TimeWindow",
    "Verdict",
    "evaluate",
    "is_quiet",
    "load_engine_config",
    "parse_engine_config",
]
