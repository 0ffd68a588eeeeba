"""
Database connection management for an ospl library.

Each library owns one SQLite file. Sessions open a fresh connection and
commit when the ``with`` block exits, so every step of an operation is
committed on its own.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool

from ..exceptions import OsplError, StoreError
from .models import Base, Setting, SCHEMA_VERSION

logger = logging.getLogger(__name__)


class Database:
    """Relational store of a single library."""

    def __init__(self, db_path: Union[str, Path], echo: bool = False):
        self.db_path = Path(db_path)
        self.engine = create_engine(f"sqlite:///{self.db_path}", poolclass=NullPool, echo=echo)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

        @event.listens_for(self.engine, "connect")
        def set_sqlite_pragmas(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(self.engine, "commit")
        def log_commit(conn):
            logger.debug(f"Committed transaction on {self.db_path.name}")

        @event.listens_for(self.engine, "rollback")
        def log_rollback(conn):
            logger.debug(f"Rolled back transaction on {self.db_path.name}")

    @classmethod
    def create(cls, db_path: Union[str, Path]) -> 'Database':
        """Create the database file with the full schema."""
        database = cls(db_path)
        try:
            Base.metadata.create_all(database.engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize database schema: {e}")
            raise StoreError(f"Failed to initialize {db_path}: {e}") from e

        with database.session() as session:
            session.add(Setting(name='version', value=SCHEMA_VERSION))

        logger.info(f"Database schema initialized at {db_path}")
        return database

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Context manager for database sessions.

        Yields:
            Session: SQLAlchemy session, committed on exit

        Raises:
            StoreError: For any SQLAlchemy failure, after rolling back
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database session error: {e}")
            raise StoreError(str(e)) from e
        except OsplError:
            session.rollback()
            raise
        except Exception as e:
            session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            session.close()

    def get_setting(self, name: str) -> Optional[str]:
        with self.session() as session:
            setting = session.get(Setting, name)
            return setting.value if setting else None

    def dispose(self) -> None:
        self.engine.dispose()
