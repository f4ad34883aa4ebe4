"""People-directory lookups for faculty missing an academic record.

Use the factory function to instantiate a client:
    from faculty_records.directory import get_directory
    directory = get_directory(app_config.directory, app_config.extraction)
    records, diagnostics = directory.lookup_missing(linked, names, "2015-16")

Exception handling:
    from faculty_records.directory.exceptions import DirectoryError, DirectoryHTTPError, DirectoryTimeoutError
"""

from .base import BaseDirectory
from .campus import CampusDirectory, parse_education, parse_identifiers
from .exceptions import (
    DirectoryConfigurationError,
    DirectoryError,
    DirectoryHTTPError,
    DirectoryResponseError,
    DirectoryTimeoutError,
)
from .factory import get_directory
from .models import IdentifierResult, IdentifierStatus, LookupResult, LookupStatus

__all__ = [
    # Base and factory
    "BaseDirectory",
    "get_directory",
    # Clients
    "CampusDirectory",
    "parse_identifiers",
    "parse_education",
    # Results
    "IdentifierResult",
    "IdentifierStatus",
    "LookupResult",
    "LookupStatus",
    # Exceptions
    "DirectoryError",
    "DirectoryHTTPError",
    "DirectoryTimeoutError",
    "DirectoryResponseError",
    "DirectoryConfigurationError",
]
