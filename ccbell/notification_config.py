"""Notification configuration loader.

Reads the ccbell config file (JSON, or YAML which is a superset of it)::

    {
      "enabled": true,
      "activeProfile": "default",
      "quietHours": {"start": "22:00", "end": "07:00"},
      "events": {
        "stop": {"sound": "bundled:stop", "volume": 0.5, "cooldown": 30,
                 "filters": {"tokenCount": {"min": 500}}}
      },
      "profiles": {"meeting": {"events": {"stop": {"enabled": false}}}}
    }

Invalid content raises ConfigError; nothing is partially applied.
"""

import logging
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ConfigDict, Field, ValidationError, model_validator

from .events import EventType
from .exceptions import ConfigError
from .filters import FilterSpec
from .models import SpecModel
from .quiet_hours import ScheduleSpec

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"

# Event settings written by a fresh ccbell install
DEFAULT_EVENTS = {
    "stop": {"sound": "bundled:stop", "volume": 0.5},
    "permission_prompt": {"sound": "bundled:permission_prompt", "volume": 0.7},
    "idle_prompt": {"sound": "bundled:idle_prompt", "volume": 0.5},
    "subagent": {"sound": "bundled:subagent", "volume": 0.5},
}


class EventConfig(SpecModel):
    """Settings for one event type."""

    enabled: bool = True
    sound: Optional[str] = None
    volume: float = Field(default=0.5, ge=0.0, le=1.0)
    cooldown: float = Field(default=0, ge=0)  # seconds, 0 = no cooldown
    filters: FilterSpec = Field(default_factory=FilterSpec)
    quiet_hours: Optional[ScheduleSpec] = None  # overrides the global schedule

    @property
    def cooldown_interval(self) -> timedelta:
        return timedelta(seconds=self.cooldown)


class Profile(SpecModel):
    """Named set of event overrides, e.g. a quieter "meeting" profile."""

    events: dict[EventType, EventConfig] = Field(default_factory=dict)


class EngineConfig(SpecModel):
    """Validated configuration for the decision engine."""

    # Keys such as "version" from newer config files are ignored
    model_config = ConfigDict(extra="ignore")

    enabled: bool = True
    debug: bool = False
    active_profile: str = DEFAULT_PROFILE
    quiet_hours: ScheduleSpec = Field(default_factory=ScheduleSpec)
    events: dict[EventType, EventConfig] = Field(
        default_factory=lambda: {
            EventType(name): EventConfig(**settings)
            for name, settings in DEFAULT_EVENTS.items()
        }
    )
    profiles: dict[str, Profile] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _null_quiet_hours(cls, data: Any) -> Any:
        # A fresh config file writes "quietHours": null when unset
        if isinstance(data, dict):
            for key in ("quietHours", "quiet_hours"):
                if key in data and data[key] is None:
                    data = {k: v for k, v in data.items() if k != key}
        return data

    @model_validator(mode="after")
    def _check_active_profile(self) -> "EngineConfig":
        if self.active_profile != DEFAULT_PROFILE and self.active_profile not in self.profiles:
            known = ", ".join([DEFAULT_PROFILE, *sorted(self.profiles)])
            raise ValueError(
                f"active profile '{self.active_profile}' is not defined (known: {known})"
            )
        return self

    def profile_events(self) -> dict[EventType, EventConfig]:
        """Event settings for the active profile, falling back to top-level events."""
        events = dict(self.events)
        if self.active_profile != DEFAULT_PROFILE:
            events.update(self.profiles[self.active_profile].events)
        return events

    def event_config(self, event_type: EventType) -> Optional[EventConfig]:
        return self.profile_events().get(event_type)

    def schedule_for(self, event_type: EventType) -> ScheduleSpec:
        """Quiet hours for an event type: its own override, else the global one."""
        event = self.event_config(event_type)
        if event is not None and event.quiet_hours is not None:
            return event.quiet_hours
        return self.quiet_hours

    def cooldown_intervals(self) -> dict[EventType, timedelta]:
        return {
            event_type: event.cooldown_interval
            for event_type, event in self.profile_events().items()
            if event.cooldown > 0
        }


def _format_validation_error(error: ValidationError) -> str:
    """Turn pydantic errors into ``field.path: message`` lines."""
    lines = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        lines.append(f"{location}: {err['msg']}")
    return "; ".join(lines)


def parse_engine_config(data: Optional[dict]) -> EngineConfig:
    """Validate raw config data.

    Args:
        data: Parsed config file contents (None for an empty file)

    Returns:
        EngineConfig

    Raises:
        ConfigError: If any field is invalid
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")

    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(_format_validation_error(e)) from e


def load_engine_config(config_path: Optional[Path] = None) -> EngineConfig:
    """Load engine config from a JSON or YAML file.

    Args:
        config_path: Path to config file. If None, uses the configured location.

    Returns:
        EngineConfig with values from file, or defaults if the file is missing

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    if config_path is None:
        from .config import get_settings

        config_path = get_settings().config_path

    config_path = Path(config_path).expanduser()

    if not config_path.exists():
        logger.info(f"Config file not found at {config_path}, using defaults")
        return EngineConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config from {config_path}: {e}") from e

    try:
        config = parse_engine_config(data)
    except ConfigError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e

    logger.info(
        f"Loaded config from {config_path} (profile: {config.active_profile})"
    )
    return config
