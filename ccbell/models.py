"""Pydantic base model and verdict types shared by the engine modules."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .events import EventType


class SpecModel(BaseModel):
    """Read-only configuration model.

    Accepts both the camelCase keys written by the ccbell config file
    (``tokenCount``, ``quietHours``) and snake_case keys.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Reason(Enum):
    """Why a verdict was reached."""

    ALLOWED = "allowed"
    DISABLED = "disabled"
    QUIET_HOURS = "quiet_hours"
    COOLDOWN = "cooldown"
    FILTERED_OUT = "filtered_out"


@dataclass(frozen=True)
class Verdict:
    """Allow/suppress decision for one event.

    ``sound`` and ``volume`` are only set on allow, for the player.
    """

    event_type: EventType
    allow: bool
    reason: Reason
    sound: Optional[str] = None
    volume: Optional[float] = None
