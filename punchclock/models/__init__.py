"""
Database models and schemas module.
Contains all SQLModel table definitions, snapshots and Pydantic schemas.
"""

from punchclock.models.employee import (
    Employee,
    EmployeeRow,
    EmployeeType,
)
from punchclock.models.punch import (
    ADMIN_TERMINAL_ID,
    REJECTED_PUNCH_ID,
    EventRow,
    EventType,
    Punch,
    PunchCreate,
    PunchPublic,
)
from punchclock.models.reference import (
    Badge,
    BadgeRow,
    Department,
    DepartmentRow,
    Shift,
    ShiftRow,
)

__all__ = [
    "ADMIN_TERMINAL_ID",
    "REJECTED_PUNCH_ID",
    "Badge",
    "BadgeRow",
    "Department",
    "DepartmentRow",
    "Shift",
    "ShiftRow",
    "Employee",
    "EmployeeRow",
    "EmployeeType",
    "EventRow",
    "EventType",
    "Punch",
    "PunchCreate",
    "PunchPublic",
]
