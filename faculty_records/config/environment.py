"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///./data/faculty_records.db"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        database_url: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.log_level = log_level
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - DATABASE_URL: Snapshot cache URL (default: sqlite:///./data/faculty_records.db)
    - ENVIRONMENT: Environment label added to every log record (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    database_url = os.getenv("DATABASE_URL")
    environment = os.getenv("ENVIRONMENT")

    if log_level:
        log_level = log_level.strip().upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: {log_level}. "
                f"Must be one of {', '.join(sorted(VALID_LOG_LEVELS))}"
            )

    if database_url is not None and not database_url.strip():
        errors.append("DATABASE_URL is set but empty")

    if errors:
        raise ConfigurationError(
            "Environment configuration validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and review the values",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level or None,
        database_url=database_url.strip() if database_url else None,
        environment=environment.strip() if environment else None,
    )
