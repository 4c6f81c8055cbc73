"""
Punch models for the Punch Ledger Service.

A punch is a single clock event recorded by a terminal for a badge. Rows in
the ``event`` table store the event type as an integer code; code 0 is the
closing event of a day window and may fall on the following calendar day.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from punchclock.models.reference import Badge

# Terminal id that may record punches for any department.
ADMIN_TERMINAL_ID = 0

# Returned by create() when no punch was recorded. Never a real punch id.
REJECTED_PUNCH_ID = 0

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class EventType(str, Enum):
    """Kind of clock event."""

    CLOCK_OUT = "CLOCK OUT"
    CLOCK_IN = "CLOCK IN"
    TIME_OUT = "TIME OUT"

    @property
    def code(self) -> int:
        return EVENT_TYPE_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "EventType":
        try:
            return _EVENT_TYPES_BY_CODE[code]
        except KeyError:
            raise ValueError(f"Unknown event type code: {code}") from None


# Stored codes. Append new members; never renumber.
EVENT_TYPE_CODES: dict[EventType, int] = {
    EventType.CLOCK_OUT: 0,
    EventType.CLOCK_IN: 1,
    EventType.TIME_OUT: 2,
}
_EVENT_TYPES_BY_CODE = {code: kind for kind, code in EVENT_TYPE_CODES.items()}

# Events with this code are not cut off at the day boundary.
DAY_CLOSING_CODE = EVENT_TYPE_CODES[EventType.CLOCK_OUT]


# Database Model


class EventRow(SQLModel, table=True):
    """ORM model for the event table."""

    __tablename__ = "event"

    id: Optional[int] = Field(default=None, primary_key=True)
    badgeid: str = Field(foreign_key="badge.id", index=True, nullable=False)
    timestamp: datetime = Field(
        sa_type=DateTime(timezone=False), index=True, nullable=False
    )
    terminalid: int = Field(nullable=False)
    eventtypeid: int = Field(nullable=False)


# Value Object


class Punch(BaseModel):
    """
    One recorded clock event.

    ``id`` is None until the punch has been stored.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    terminal_id: int
    badge: Badge
    original_timestamp: NaiveDatetime  # local wall-clock time of the terminal
    event_type: EventType


# Request Schemas


class PunchCreate(SQLModel):
    """Schema for recording a punch."""

    terminal_id: int = Field(ge=0)
    badge_id: str = Field(min_length=1, max_length=8)
    original_timestamp: NaiveDatetime
    event_type: EventType


# Response Schemas


class PunchPublic(SQLModel):
    """Schema for punch responses."""

    id: int
    terminal_id: int
    badge_id: str
    original_timestamp: datetime
    event_type: EventType

    @classmethod
    def from_punch(cls, punch: Punch) -> "PunchPublic":
        return cls(
            id=punch.id,
            terminal_id=punch.terminal_id,
            badge_id=punch.badge.id,
            original_timestamp=punch.original_timestamp,
            event_type=punch.event_type,
        )
