"""
Employee models for the Punch Ledger Service.

An employee owns exactly one badge and belongs to one department and one
shift. The employee type is stored as an integer code.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from punchclock.models.reference import Badge, Department, Shift


class EmployeeType(str, Enum):
    """Kind of employment."""

    PART_TIME = "Temporary / Part-Time Employee"
    FULL_TIME = "Full-Time Employee"

    @property
    def code(self) -> int:
        return EMPLOYEE_TYPE_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "EmployeeType":
        try:
            return _EMPLOYEE_TYPES_BY_CODE[code]
        except KeyError:
            raise ValueError(f"Unknown employee type code: {code}") from None


# Stored codes. Append new members; never renumber.
EMPLOYEE_TYPE_CODES: dict[EmployeeType, int] = {
    EmployeeType.PART_TIME: 0,
    EmployeeType.FULL_TIME: 1,
}
_EMPLOYEE_TYPES_BY_CODE = {code: kind for kind, code in EMPLOYEE_TYPE_CODES.items()}


# Database Model


class EmployeeRow(SQLModel, table=True):
    """ORM model for the employee table."""

    __tablename__ = "employee"

    id: Optional[int] = Field(default=None, primary_key=True)
    firstname: str = Field(max_length=255)
    middlename: str = Field(default="", max_length=255)
    lastname: str = Field(max_length=255)
    active: datetime = Field(sa_type=DateTime(timezone=False), nullable=False)

    badgeid: str = Field(foreign_key="badge.id", unique=True, index=True)
    departmentid: int = Field(foreign_key="department.id")
    shiftid: int = Field(foreign_key="shift.id")
    employeetypeid: int = Field(default=0)


# Snapshot


class Employee(BaseModel):
    """An employee with badge, department and shift fully populated."""

    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str
    middle_name: str = ""
    last_name: str
    active: datetime
    badge: Badge
    department: Department
    shift: Shift
    employee_type: EmployeeType
