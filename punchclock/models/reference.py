"""
Reference data models: badges, departments and shifts.

Row classes mirror the storage tables column for column. The snapshot
classes are what lookups hand back to callers; they are frozen and carry
no behavior.
"""

from datetime import time
from typing import Optional

from pydantic import BaseModel, ConfigDict
from sqlmodel import Field, SQLModel

# Database Models


class BadgeRow(SQLModel, table=True):
    """ORM model for the badge table."""

    __tablename__ = "badge"

    id: str = Field(primary_key=True, max_length=8)
    description: str = Field(default="", max_length=255)


class DepartmentRow(SQLModel, table=True):
    """ORM model for the department table."""

    __tablename__ = "department"

    id: Optional[int] = Field(default=None, primary_key=True)
    description: str = Field(default="", max_length=255)
    terminalid: int = Field(nullable=False)  # clock terminal owned by the department


class ShiftRow(SQLModel, table=True):
    """ORM model for the shift table."""

    __tablename__ = "shift"

    id: Optional[int] = Field(default=None, primary_key=True)
    description: str = Field(default="", max_length=255)
    shiftstart: time
    shiftstop: time
    roundinterval: int = Field(default=15)  # minutes
    graceperiod: int = Field(default=5)
    dockpenalty: int = Field(default=15)
    lunchstart: time
    lunchstop: time
    lunchthreshold: int = Field(default=360)


# Snapshots


class Badge(BaseModel):
    """A physical credential identifying an employee to a terminal."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str = ""

    @classmethod
    def from_row(cls, row: BadgeRow) -> "Badge":
        return cls(id=row.id, description=row.description)


class Department(BaseModel):
    """A department and the terminal it owns."""

    model_config = ConfigDict(frozen=True)

    id: int
    terminal_id: int
    description: str = ""

    @classmethod
    def from_row(cls, row: DepartmentRow) -> "Department":
        return cls(id=row.id, terminal_id=row.terminalid, description=row.description)


class Shift(BaseModel):
    """Schedule attributes of a shift. Times are wall-clock, intervals in minutes."""

    model_config = ConfigDict(frozen=True)

    id: int
    description: str = ""
    shift_start: time
    shift_stop: time
    round_interval: int
    grace_period: int
    dock_penalty: int
    lunch_start: time
    lunch_stop: time
    lunch_threshold: int

    @classmethod
    def from_row(cls, row: ShiftRow) -> "Shift":
        return cls(
            id=row.id,
            description=row.description,
            shift_start=row.shiftstart,
            shift_stop=row.shiftstop,
            round_interval=row.roundinterval,
            grace_period=row.graceperiod,
            dock_penalty=row.dockpenalty,
            lunch_start=row.lunchstart,
            lunch_stop=row.lunchstop,
            lunch_threshold=row.lunchthreshold,
        )
