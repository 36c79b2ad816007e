"""Filter evaluator - decides whether an event's attributes pass its filters.

Each sub-filter is optional; ``None`` means no constraint from that
dimension. Present sub-filters combine with AND:

- token_count: min/max bound on the turn's token count
- duration: min/max bound on the turn's duration in seconds
- pattern: regex searched anywhere in the message, optionally inverted
- tool_calls: required value of the tool-call flag
"""

import logging
import re
from typing import Optional

from pydantic import Field, model_validator

from .events import EventData
from .models import SpecModel

logger = logging.getLogger(__name__)


class Bound(SpecModel):
    """Inclusive numeric bound; either side may be omitted."""

    min: Optional[float] = Field(default=None, ge=0)
    max: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> "Bound":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) is greater than max ({self.max})")
        return self

    def contains(self, value: float) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class PatternRule(SpecModel):
    """Regex rule over the event message.

    With ``invert`` false the message must match; with ``invert`` true it
    must not.
    """

    regex: re.Pattern[str]
    invert: bool = False

    def passes(self, message: str) -> bool:
        matched = self.regex.search(message) is not None
        return matched == (not self.invert)


class FilterSpec(SpecModel):
    """Per-event-type filter configuration."""

    token_count: Optional[Bound] = None
    duration: Optional[Bound] = None
    pattern: Optional[PatternRule] = None
    tool_calls: Optional[bool] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.token_count is None
            and self.duration is None
            and self.pattern is None
            and self.tool_calls is None
        )


def failed_filters(spec: FilterSpec, data: EventData) -> list[str]:
    """Return the names of the sub-filters that reject this event.

    Args:
        spec: Filters configured for the event type
        data: The event to check

    Returns:
        Names of failing sub-filters (empty if the event passes)
    """
    failed = []

    if spec.token_count is not None and not spec.token_count.contains(data.token_count):
        failed.append("token_count")

    if spec.duration is not None and not spec.duration.contains(data.duration):
        failed.append("duration")

    if spec.pattern is not None and not spec.pattern.passes(data.message):
        failed.append("pattern")

    if spec.tool_calls is not None and data.has_tool_calls != spec.tool_calls:
        failed.append("tool_calls")

    return failed


def evaluate(spec: FilterSpec, data: EventData) -> bool:
    """Check if an event passes all configured filters.

    Returns:
        True if the event is eligible to notify
    """
    failed = failed_filters(spec, data)
    if failed:
        logger.debug(
            f"{data.event_type.value} failed filters: {', '.join(failed)}"
        )
        return False
    return True
