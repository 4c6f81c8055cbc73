"""
Punch ledger for the Punch Ledger Service.

Records punches after checking the recording terminal against the
employee's department, and retrieves punches by id or by calendar day.

Authorization rule: a punch is accepted when its terminal id equals the
terminal id of the department of the employee owning the badge, or when it
was recorded on the administrative terminal (id 0). The check runs once, at
creation. A refused punch is reported by returning REJECTED_PUNCH_ID, not by
raising.
"""

from datetime import date, datetime, time
from typing import Optional

from sqlmodel import Session, select

from punchclock.core.database import Database
from punchclock.core.exceptions import DataAccessError
from punchclock.core.logging import get_logger
from punchclock.core.lookups import ReferenceLookups
from punchclock.models.punch import (
    ADMIN_TERMINAL_ID,
    DAY_CLOSING_CODE,
    REJECTED_PUNCH_ID,
    TIMESTAMP_FORMAT,
    EventRow,
    EventType,
    Punch,
)
from punchclock.models.reference import Badge, BadgeRow

logger = get_logger(__name__)

# Event rows fetched per round trip while scanning a day window.
SCAN_BATCH_SIZE = 50


class PunchLedger:
    """
    Creates and queries punches.

    Stateless between calls: every public method runs in its own session,
    and lookups made along the way reuse that session.
    """

    def __init__(self, database: Database, lookups: ReferenceLookups):
        self.database = database
        self.lookups = lookups

    def find_by_id(self, punch_id: int) -> Optional[Punch]:
        """
        Find a punch by id.

        Returns:
            The stored Punch, or None if no event row has this id

        Raises:
            DataAccessError: on any storage fault or an undecodable row
        """
        with self.database.session() as session:
            return self._find(session, punch_id)

    def create(self, punch: Punch) -> int:
        """
        Record a new punch if its terminal is allowed to record it.

        Args:
            punch: Punch to record; its id is ignored

        Returns:
            The generated punch id, or REJECTED_PUNCH_ID (0) if the terminal
            is not authorized for the badge's employee or nothing was inserted

        Raises:
            DataAccessError: on any storage fault
        """
        with self.database.session() as session:
            employee = self.lookups.find_employee_by_badge(punch.badge, session=session)
            if employee is None:
                logger.warning(
                    f"Punch refused: badge {punch.badge.id} is not assigned to any employee"
                )
                return REJECTED_PUNCH_ID

            department_terminal_id = employee.department.terminal_id
            authorized = (
                punch.terminal_id == department_terminal_id
                or punch.terminal_id == ADMIN_TERMINAL_ID
            )
            if not authorized:
                logger.warning(
                    f"Punch refused: terminal {punch.terminal_id} does not belong to "
                    f"department {employee.department.id} (terminal {department_terminal_id}) "
                    f"of badge {punch.badge.id}"
                )
                return REJECTED_PUNCH_ID

            timestamp = punch.original_timestamp.replace(microsecond=0)
            row = EventRow(
                badgeid=punch.badge.id,
                timestamp=timestamp,
                terminalid=punch.terminal_id,
                eventtypeid=punch.event_type.code,
            )
            session.add(row)
            session.commit()
            session.refresh(row)

            if row.id is None:
                logger.warning(f"Punch for badge {punch.badge.id} was not inserted")
                return REJECTED_PUNCH_ID

            logger.info(
                f"Recorded punch {row.id}: badge {punch.badge.id} {punch.event_type.value} "
                f"at {timestamp.strftime(TIMESTAMP_FORMAT)} on terminal {punch.terminal_id}"
            )
            return row.id

    def list_for_day(self, badge: Badge, day: date) -> list[Punch]:
        """
        List the punches of a badge belonging to one calendar day.

        Rows are read from the start of ``day`` in timestamp order. The scan
        stops at the first row dated after ``day`` whose event type is not
        the day-closing type (code 0); closing events past midnight are kept
        so an overnight shift's clock-out stays with the day it closes.

        Returns:
            Punches in non-decreasing timestamp order
        """
        statement = (
            select(EventRow.id, EventRow.timestamp, EventRow.eventtypeid)
            .where(EventRow.badgeid == badge.id)
            .where(EventRow.timestamp >= datetime.combine(day, time.min))
            .order_by(EventRow.timestamp, EventRow.id)
            .execution_options(yield_per=SCAN_BATCH_SIZE)
        )

        punches: list[Punch] = []
        with self.database.session() as session:
            # Scan in batches and close the cursor at the cutoff, before re-hydrating
            window_ids: list[int] = []
            result = session.exec(statement)
            try:
                for punch_id, timestamp, event_type_code in result:
                    if timestamp.date() != day and event_type_code != DAY_CLOSING_CODE:
                        break
                    window_ids.append(punch_id)
            finally:
                result.close()

            for punch_id in window_ids:
                punch = self._find(session, punch_id)
                if punch is not None:
                    punches.append(punch)

        logger.debug(f"Found {len(punches)} punches for badge {badge.id} on {day}")
        return punches

    def list_for_range(self, badge: Badge, begin: date, end: date) -> list[Punch]:
        """
        List the punches of a badge over a date range.

        Not implemented yet: always returns an empty list.
        """
        # TODO: decide between concatenating list_for_day() results and a store-level range filter
        return []

    def _find(self, session: Session, punch_id: int) -> Optional[Punch]:
        statement = (
            select(EventRow, BadgeRow)
            .join(BadgeRow, EventRow.badgeid == BadgeRow.id)
            .where(EventRow.id == punch_id)
        )
        result = session.exec(statement).first()
        if result is None:
            logger.debug(f"Punch {punch_id} not found")
            return None

        event_row, badge_row = result
        try:
            event_type = EventType.from_code(event_row.eventtypeid)
        except ValueError as e:
            raise DataAccessError(str(e)) from e

        return Punch(
            id=event_row.id,
            terminal_id=event_row.terminalid,
            badge=Badge.from_row(badge_row),
            original_timestamp=event_row.timestamp,
            event_type=event_type,
        )
