"""
Shared API dependencies.
Contains reusable dependency functions for FastAPI endpoints.
Centralizes construction of the database handle, lookups and punch ledger.
"""

from typing import Annotated

from fastapi import Depends

from punchclock.core.database import Database, get_database
from punchclock.core.lookups import ReferenceLookups
from punchclock.core.punch_ledger import PunchLedger

# Database handle dependency
# Override get_database in tests to point the whole stack at another store
DatabaseDep = Annotated[Database, Depends(get_database)]


def get_lookups(database: DatabaseDep) -> ReferenceLookups:
    return ReferenceLookups(database)


LookupsDep = Annotated[ReferenceLookups, Depends(get_lookups)]


def get_punch_ledger(database: DatabaseDep, lookups: LookupsDep) -> PunchLedger:
    return PunchLedger(database, lookups)


PunchLedgerDep = Annotated[PunchLedger, Depends(get_punch_ledger)]
