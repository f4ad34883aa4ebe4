"""Configuration schema models using Pydantic."""

import re
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# Year, degree abbreviation, institution: "1978, B.S., M.I.T."
DEFAULT_RECORD_PATTERN = r"\d{4},\s*[A-Z][A-Za-z.]*,\s*[^,;]+"

YEAR_LABEL_RE = re.compile(r"^(\d{4})")


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class YearConfig(BaseModel):
    """One academic year: its catalog document and how to clean it."""

    label: str = Field(..., min_length=1, description="Academic year label, e.g. 2015-16")
    document: Path = Field(..., description="Plain-text catalog for this year")
    anchor_keyword: str = Field(
        ..., min_length=1, description="Token marking the start of the faculty section"
    )
    short_line_threshold: int = Field(
        4, ge=0, description="Lines with trimmed length at or below this are dropped"
    )
    rejoin_count: int = Field(
        0, ge=0, description="N for the best-effort split-line rejoin pass (0 = off)"
    )
    reorder_names: bool = Field(True, description="Render names as 'first last'")
    secondary_document: Optional[Path] = Field(
        None, description="Another catalog carrying degree/year text for these names"
    )
    secondary_anchor_keyword: Optional[str] = Field(
        None, description="Anchor for the secondary document (defaults to anchor_keyword)"
    )
    secondary_short_line_threshold: int = Field(4, ge=0)
    reference_year: Optional[int] = Field(
        None, ge=1800, le=2200, description="Year ages are computed for (defaults from label)"
    )
    enabled: bool = Field(True, description="Whether to process this year")

    @field_validator("label", "anchor_keyword")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @model_validator(mode="after")
    def derive_reference_year(self):
        if self.reference_year is None:
            match = YEAR_LABEL_RE.match(self.label)
            if not match:
                raise ValueError(
                    f"reference_year is required when label '{self.label}' "
                    "does not start with a 4-digit year"
                )
            self.reference_year = int(match.group(1))
        if self.secondary_anchor_keyword is None:
            self.secondary_anchor_keyword = self.anchor_keyword
        return self


class DirectoryConfig(BaseModel):
    """People-directory web service used when catalogs lack a record."""

    enabled: bool = Field(True, description="Fall back to the directory for missing records")
    search_url: str = Field(
        "https://www.williams.edu/people/", description="People-search endpoint"
    )
    search_param: str = Field("s_directory", description="Query parameter carrying the name")
    profile_url_template: str = Field(
        "https://faculty.williams.edu/{identifier}/",
        description="Profile endpoint; {identifier} is replaced with the unix identifier",
    )
    identifier_selector: str = Field(
        ".phone + .email a",
        description="CSS selector for the email node next to the phone field",
    )
    education_selector: str = Field(
        ".education", description="CSS selector for the profile's education subsection"
    )
    http_request_timeout: int = Field(
        30, ge=1, le=300, description="Per-request timeout (seconds)"
    )
    user_agent: str = Field(
        "FacultyRecords/1.0", min_length=1, description="User-Agent string for HTTP requests"
    )

    @field_validator("profile_url_template")
    @classmethod
    def require_identifier_placeholder(cls, v: str) -> str:
        if "{identifier}" not in v:
            raise ValueError("profile_url_template must contain '{identifier}'")
        return v

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class ExtractionConfig(BaseModel):
    """Patterns and modeling constants shared by every year."""

    record_pattern: str = Field(
        DEFAULT_RECORD_PATTERN,
        description="Regex locating a degree/year fragment in a catalog line or profile",
    )
    assumed_graduation_age: int = Field(
        22, ge=15, le=40, description="Typical age at undergraduate completion (modeling assumption)"
    )

    @field_validator("record_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"record_pattern is not a valid regular expression: {e}") from e
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the faculty records pipeline."""

    years: List[YearConfig] = Field(
        ..., min_length=1, description="Academic years to process"
    )
    directory: DirectoryConfig = Field(
        default_factory=DirectoryConfig, description="Directory lookup settings"
    )
    extraction: ExtractionConfig = Field(
        default_factory=ExtractionConfig, description="Extraction patterns and constants"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @model_validator(mode="after")
    def validate_years(self):
        if not any(year.enabled for year in self.years):
            raise ValueError(
                "At least one year must be enabled. All years have enabled=false."
            )

        seen = set()
        for year in self.years:
            if year.label in seen:
                raise ValueError(f"Duplicate year: {year.label} appears multiple times")
            seen.add(year.label)

        return self

    def get_enabled_years(self) -> List[YearConfig]:
        """Get list of enabled years."""
        return [year for year in self.years if year.enabled]

    def get_year(self, label: str) -> Optional[YearConfig]:
        """Get a year by its label."""
        for year in self.years:
            if year.label == label:
                return year
        return None
