"""
Reference lookups for the Punch Ledger Service.

Resolves badges, departments, shifts and employees by key. Each lookup is a
single read (a join where the entity is composed from other tables) and
returns a frozen snapshot, or None when no row matches.
"""

from typing import Optional

from sqlmodel import Session, select

from punchclock.core.database import Database
from punchclock.core.exceptions import DataAccessError
from punchclock.core.logging import get_logger
from punchclock.models.employee import Employee, EmployeeRow, EmployeeType
from punchclock.models.reference import (
    Badge,
    BadgeRow,
    Department,
    DepartmentRow,
    Shift,
    ShiftRow,
)

logger = get_logger(__name__)


class ReferenceLookups:
    """
    Read-only access to reference entities.

    Every method takes an optional ``session``. Callers already inside a unit
    of work pass theirs so the lookup runs on the same connection.
    """

    def __init__(self, database: Database):
        self.database = database

    def find_badge(
        self, badge_id: str, session: Optional[Session] = None
    ) -> Optional[Badge]:
        """Find a badge by its external identifier."""
        with self.database.session(reuse=session) as s:
            row = s.get(BadgeRow, badge_id)
            if row is None:
                logger.debug(f"Badge {badge_id} not found")
                return None
            return Badge.from_row(row)

    def find_department(
        self, department_id: int, session: Optional[Session] = None
    ) -> Optional[Department]:
        """Find a department by id."""
        with self.database.session(reuse=session) as s:
            row = s.get(DepartmentRow, department_id)
            if row is None:
                logger.debug(f"Department {department_id} not found")
                return None
            return Department.from_row(row)

    def find_shift(
        self, shift_id: int, session: Optional[Session] = None
    ) -> Optional[Shift]:
        """Find a shift by id."""
        with self.database.session(reuse=session) as s:
            row = s.get(ShiftRow, shift_id)
            if row is None:
                logger.debug(f"Shift {shift_id} not found")
                return None
            return Shift.from_row(row)

    def find_employee(
        self, employee_id: int, session: Optional[Session] = None
    ) -> Optional[Employee]:
        """
        Find an employee by id.

        The employee row is joined with its department, badge and shift in a
        single statement.

        Args:
            employee_id: Employee ID to resolve
            session: Optional session to run the read on

        Returns:
            Fully populated Employee, or None if no employee has this id

        Raises:
            DataAccessError: on any storage fault or an undecodable row
        """
        statement = (
            select(EmployeeRow, DepartmentRow, BadgeRow, ShiftRow)
            .join(DepartmentRow, EmployeeRow.departmentid == DepartmentRow.id)
            .join(BadgeRow, EmployeeRow.badgeid == BadgeRow.id)
            .join(ShiftRow, EmployeeRow.shiftid == ShiftRow.id)
            .where(EmployeeRow.id == employee_id)
        )

        with self.database.session(reuse=session) as s:
            result = s.exec(statement).first()
            if result is None:
                logger.debug(f"Employee {employee_id} not found")
                return None

            employee_row, department_row, badge_row, shift_row = result
            try:
                employee_type = EmployeeType.from_code(employee_row.employeetypeid)
            except ValueError as e:
                raise DataAccessError(str(e)) from e

            return Employee(
                id=employee_row.id,
                first_name=employee_row.firstname,
                middle_name=employee_row.middlename,
                last_name=employee_row.lastname,
                active=employee_row.active,
                badge=Badge.from_row(badge_row),
                department=Department.from_row(department_row),
                shift=Shift.from_row(shift_row),
                employee_type=employee_type,
            )

    def find_employee_by_badge(
        self, badge: Badge, session: Optional[Session] = None
    ) -> Optional[Employee]:
        """
        Find the employee who owns a badge.

        Resolves the owning employee id, then delegates to find_employee().
        """
        statement = select(EmployeeRow.id).where(EmployeeRow.badgeid == badge.id)

        with self.database.session(reuse=session) as s:
            employee_id = s.exec(statement).first()
            if employee_id is None:
                logger.debug(f"No employee owns badge {badge.id}")
                return None
            return self.find_employee(employee_id, session=s)
