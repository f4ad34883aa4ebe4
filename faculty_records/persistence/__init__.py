"""Snapshot cache for assembled academic-year tables (SQLite by default).

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Repository
    - SnapshotRepository: read, replace and delete cached years

    # Exceptions
    - PersistenceError: Base exception for all persistence errors
    - DatabaseConnectionError: Database connection/initialization failures
    - DataIntegrityError: Constraint violations

Example usage:
    >>> from faculty_records.persistence import init_database, get_session, SnapshotRepository
    >>>
    >>> init_database("sqlite:///./data/faculty_records.db")
    >>>
    >>> with get_session() as session:
    ...     repo = SnapshotRepository(session)
    ...     rows = repo.get_rows("2015-16")
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import DatabaseConnectionError, DataIntegrityError, PersistenceError
from .repositories import SnapshotRepository

__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    # Repository
    "SnapshotRepository",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
]
