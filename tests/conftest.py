"""Shared fixtures: an in-memory database seeded with reference data."""

from datetime import datetime, time

import pytest
from sqlalchemy.pool import QueuePool, StaticPool
from sqlmodel import Session, create_engine

from punchclock.core.database import Database
from punchclock.core.lookups import ReferenceLookups
from punchclock.core.punch_ledger import PunchLedger
from punchclock.models import (
    Badge,
    BadgeRow,
    DepartmentRow,
    EmployeeRow,
    ShiftRow,
)

ASSEMBLY_TERMINAL = 5
SHIPPING_TERMINAL = 9

ASSEMBLY_BADGE = "08D01475"
SHIPPING_BADGE = "D2C39273"
UNASSIGNED_BADGE = "FFFF0000"


def _seed(session: Session) -> None:
    session.add(DepartmentRow(id=1, description="Assembly", terminalid=ASSEMBLY_TERMINAL))
    session.add(DepartmentRow(id=2, description="Shipping", terminalid=SHIPPING_TERMINAL))
    session.add(
        ShiftRow(
            id=1,
            description="Shift 1",
            shiftstart=time(7, 0),
            shiftstop=time(15, 30),
            roundinterval=15,
            graceperiod=5,
            dockpenalty=15,
            lunchstart=time(12, 0),
            lunchstop=time(12, 30),
            lunchthreshold=360,
        )
    )
    session.add(
        ShiftRow(
            id=2,
            description="Shift 2",
            shiftstart=time(12, 0),
            shiftstop=time(20, 30),
            roundinterval=15,
            graceperiod=5,
            dockpenalty=15,
            lunchstart=time(16, 30),
            lunchstop=time(17, 0),
            lunchthreshold=360,
        )
    )
    session.add(BadgeRow(id=ASSEMBLY_BADGE, description="Littell, Amie D"))
    session.add(BadgeRow(id=SHIPPING_BADGE, description="Miller, Robert K"))
    session.add(BadgeRow(id=UNASSIGNED_BADGE, description="Spare badge"))
    session.commit()

    session.add(
        EmployeeRow(
            id=1,
            firstname="Amie",
            middlename="D",
            lastname="Littell",
            active=datetime(2017, 2, 4, 0, 0),
            badgeid=ASSEMBLY_BADGE,
            departmentid=1,
            shiftid=1,
            employeetypeid=1,
        )
    )
    session.add(
        EmployeeRow(
            id=2,
            firstname="Robert",
            middlename="K",
            lastname="Miller",
            active=datetime(2016, 8, 20, 0, 0),
            badgeid=SHIPPING_BADGE,
            departmentid=2,
            shiftid=2,
            employeetypeid=0,
        )
    )
    session.commit()


@pytest.fixture
def database():
    """Create an isolated in-memory database with seeded reference data."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database(engine)
    db.create_db_and_tables()
    with Session(engine) as session:
        _seed(session)

    yield db

    engine.dispose()


@pytest.fixture
def pooled_database(tmp_path):
    """Seeded file database behind a connection pool that tracks checkouts."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'punchclock.db'}",
        connect_args={"check_same_thread": False},
        poolclass=QueuePool,
    )
    db = Database(engine)
    db.create_db_and_tables()
    with Session(engine) as session:
        _seed(session)

    yield db

    engine.dispose()


@pytest.fixture
def lookups(database):
    return ReferenceLookups(database)


@pytest.fixture
def ledger(database, lookups):
    return PunchLedger(database, lookups)


@pytest.fixture
def assembly_badge():
    return Badge(id=ASSEMBLY_BADGE, description="Littell, Amie D")


@pytest.fixture
def shipping_badge():
    return Badge(id=SHIPPING_BADGE, description="Miller, Robert K")


@pytest.fixture
def unassigned_badge():
    return Badge(id=UNASSIGNED_BADGE, description="Spare badge")
