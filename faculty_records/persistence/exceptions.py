"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError, so the pipeline can
treat any cache problem as one failure type.
"""


class PersistenceError(Exception):
    """Base exception for all snapshot cache errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when the cache database cannot be opened or initialized.

    Examples:
    - Invalid database URL
    - Database file not accessible
    - get_session() called before init_database()
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised when rows would violate a cache constraint.

    Examples:
    - Duplicate (academic_year, position) key
    - A row saved under a different academic year than its own label
    """

    pass
