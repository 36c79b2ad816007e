"""Event data classes for the decision engine."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class EventType(Enum):
    """Assistant events that can trigger a sound."""

    STOP = "stop"
    PERMISSION_PROMPT = "permission_prompt"
    IDLE_PROMPT = "idle_prompt"
    SUBAGENT = "subagent"
    TOOL_USE = "tool_use"

    @classmethod
    def parse(cls, name: str) -> "EventType":
        """Look up an event type by its config/hook name."""
        try:
            return cls(name)
        except ValueError:
            valid = ", ".join(e.value for e in cls)
            raise ValueError(
                f"Unknown event type '{name}' (expected one of: {valid})"
            ) from None


@dataclass(frozen=True)
class EventData:
    """Snapshot of one notification-worthy occurrence.

    Attributes:
        event_type: The kind of event (from EventType enum)
        message: Text emitted with the event (last assistant message, prompt)
        token_count: Tokens used by the turn that produced the event
        duration: Seconds the turn took
        has_tool_calls: Whether the turn invoked any tools
        timestamp: When the event occurred
    """

    event_type: EventType
    message: str = ""
    token_count: int = 0
    duration: float = 0.0
    has_tool_calls: bool = False
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if self.token_count < 0:
            raise ValueError(f"token_count must be >= 0, got {self.token_count}")
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")
