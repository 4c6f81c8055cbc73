"""
Database access for the Punch Ledger Service.

``Database`` wraps a SQLAlchemy engine and hands out one scoped SQLModel
session per unit of work. Driver faults raised inside a scope surface as
``DataAccessError`` after the session has been rolled back and closed.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from punchclock.core.config import settings
from punchclock.core.exceptions import DataAccessError
from punchclock.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """Store-access handle shared by the lookups and the punch ledger."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> "Database":
        """
        Build a handle for a database URL.

        ``pool_pre_ping`` validates every connection on checkout.
        """
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        engine = create_engine(
            url, echo=echo, pool_pre_ping=True, connect_args=connect_args
        )
        return cls(engine)

    @contextmanager
    def session(self, reuse: Optional[Session] = None) -> Iterator[Session]:
        """
        Scoped unit of work.

        When ``reuse`` is given the caller already owns a session and it is
        yielded unchanged; otherwise a new session is opened and released on
        every exit path.
        """
        if reuse is not None:
            yield reuse
            return

        try:
            with Session(self.engine) as session:
                try:
                    yield session
                except SQLAlchemyError:
                    session.rollback()
                    raise
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise DataAccessError(str(e)) from e

    def ping(self) -> bool:
        """Return True if a connection can be acquired and used."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def create_db_and_tables(self) -> None:
        """Create every table registered on the SQLModel metadata."""
        import punchclock.models  # noqa: F401  registers the table models

        SQLModel.metadata.create_all(self.engine)


database = Database.from_url(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


def create_db_and_tables() -> None:
    database.create_db_and_tables()


def get_database() -> Database:
    """Dependency provider for the shared ``Database`` handle."""
    return database
