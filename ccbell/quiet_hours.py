"""Quiet hours - suppression windows by wall-clock time.

A window is half-open, ``[start, end)``, and wraps past midnight when
``start > end`` (e.g. 22:00 - 07:00). Weekend and weekday windows override
the default window on their days.
"""

from datetime import datetime, time
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator, model_validator

from .models import SpecModel

WEEKEND_DAYS = {5, 6}  # Saturday, Sunday


class TimeWindow(SpecModel):
    """Wall-clock interval, e.g. ``{start: "22:00", end: "07:00"}``."""

    start: time
    end: time

    @field_validator("start", "end", mode="before")
    @classmethod
    def _from_yaml_sexagesimal(cls, value: Any) -> Any:
        # PyYAML reads an unquoted 22:00 as the base-60 integer 1320
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 60:
                raise ValueError(
                    f"bare number {value} is not a time of day; write it as \"HH:MM\""
                )
            hours, minutes = divmod(value, 60)
            return time(hours, minutes)
        return value

    @model_validator(mode="after")
    def _check_not_empty(self) -> "TimeWindow":
        if self.start == self.end:
            raise ValueError(
                f"start and end are both {self.start.isoformat('minutes')}; "
                "window would be either empty or the whole day"
            )
        return self

    def contains(self, time_of_day: time) -> bool:
        return in_window(self.start, self.end, time_of_day)


class ScheduleSpec(SpecModel):
    """Quiet hours configuration.

    Also accepts the flat ``{start, end}`` form used by the ccbell config
    file, where null start or end means quiet hours are off.
    """

    enabled: bool = False
    default: Optional[TimeWindow] = None
    weekday: Optional[TimeWindow] = None
    weekend: Optional[TimeWindow] = None
    timezone: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _from_flat_window(cls, data: Any) -> Any:
        if not isinstance(data, dict) or ("start" not in data and "end" not in data):
            return data
        data = dict(data)
        start = data.pop("start", None)
        end = data.pop("end", None)
        if start is not None and end is not None:
            data.setdefault("default", {"start": start, "end": end})
            data.setdefault("enabled", True)
        return data

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError):
                raise ValueError(f"Unknown timezone '{value}'")
        return value

    @model_validator(mode="after")
    def _check_default(self) -> "ScheduleSpec":
        if self.enabled and self.default is None:
            raise ValueError("quiet hours are enabled but no default window is set")
        return self

    def active_window(self, now: datetime) -> Optional[TimeWindow]:
        """Pick the window that applies on ``now``'s day."""
        if now.weekday() in WEEKEND_DAYS:
            if self.weekend is not None:
                return self.weekend
        elif self.weekday is not None:
            return self.weekday
        return self.default


def in_window(start: time, end: time, time_of_day: time) -> bool:
    """Check if a time of day falls within ``[start, end)``.

    Handles overnight windows (start > end) such as 22:00 - 07:00.
    """
    if start <= end:
        return start <= time_of_day < end
    return time_of_day >= start or time_of_day < end


def is_quiet(schedule: ScheduleSpec, now: datetime) -> bool:
    """Check if ``now`` is within quiet hours.

    Args:
        schedule: Quiet hours configuration
        now: Current time; converted to the schedule's timezone when both
            are timezone-aware

    Returns:
        True if notifications should be suppressed
    """
    if not schedule.enabled:
        return False

    if schedule.timezone and now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(schedule.timezone))

    window = schedule.active_window(now)
    if window is None:
        return False

    return window.contains(now.time())
