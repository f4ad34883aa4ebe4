"""Factory function for instantiating directory clients."""

import logging

from faculty_records.config.models import DirectoryConfig, ExtractionConfig

from .base import BaseDirectory
from .campus import CampusDirectory
from .exceptions import DirectoryConfigurationError

logger = logging.getLogger(__name__)


def get_directory(directory_config: DirectoryConfig, extraction_config: ExtractionConfig) -> BaseDirectory:
    """Create the directory client described by configuration.

    Args:
        directory_config: Directory endpoints, selectors, timeout and user agent
        extraction_config: Supplies the record pattern applied to profile text

    Returns:
        Directory client instance

    Raises:
        DirectoryConfigurationError: If the configuration cannot produce a client

    Example:
        >>> directory = get_directory(DirectoryConfig(), ExtractionConfig())
        >>> directory.lookup(FacultyName(first="Colin C.", last="Adams")).status
    """
    logger.debug(
        "Creating directory client",
        extra={
            "search_url": directory_config.search_url,
            "timeout": directory_config.http_request_timeout,
        },
    )

    try:
        return CampusDirectory(directory_config, record_pattern=extraction_config.record_pattern)
    except DirectoryConfigurationError:
        raise
    except Exception as e:
        raise DirectoryConfigurationError(f"Failed to create directory client: {e}") from e
