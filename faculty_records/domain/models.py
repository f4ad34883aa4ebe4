"""Core domain models for faculty names, academic records, and table rows.

This module defines the data structures passed between pipeline stages:
- FacultyName: (first, last) pair extracted from one flat-file line
- LinkedRecord: a name paired with its academic record (or an explicit miss)
- FacultyTableRow: one output row per faculty member per academic year
- Diagnostic: an audit note for a recoverable problem (miss, ambiguity, failure)
- YearSnapshot: metadata for one cached academic-year table
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RecordSource(str, Enum):
    """Where an academic record came from."""

    SECONDARY = "secondary"
    DIRECTORY = "directory"
    NONE = "none"


class DiagnosticKind(str, Enum):
    """Recoverable error taxonomy. Nothing here aborts a batch."""

    CONFIGURATION_MISMATCH = "configuration_mismatch"
    NO_MATCH = "no_match"
    AMBIGUOUS = "ambiguous"
    LOOKUP_FAILURE = "lookup_failure"


class FacultyName(BaseModel):
    """A faculty member's name as printed in a catalog line.

    Catalog lines list names last-name first ("Adams,Colin C., ..."), so the
    document order is (last, first). Identity is positional; two instances with
    the same text are not assumed to be the same person.
    """

    model_config = ConfigDict(frozen=True)

    first: str = Field(..., description="First name or initials")
    last: str = Field(..., description="Family name")

    @field_validator("first", "last")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name parts cannot be empty or whitespace-only")
        return v.strip()

    def display(self, reorder: bool = True) -> str:
        """Render as "first last" when reorder is set, else "last, first"."""
        if reorder:
            return f"{self.first} {self.last}"
        return f"{self.last}, {self.first}"

    @property
    def given_name(self) -> str:
        """First token of the first name, without middle initials."""
        return self.first.split()[0]


class LinkedRecord(BaseModel):
    """A positional (name, academic record) pair produced by linkage or lookup.

    ``record`` is the raw text fragment describing the undergraduate degree,
    or None when nothing was found. Instances are immutable once created.
    """

    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=0, description="Index of the name in the flat file")
    name: Optional[str] = Field(None, description="Display name, None when extraction failed")
    record: Optional[str] = Field(None, description="Raw academic record text")
    source: RecordSource = Field(RecordSource.NONE, description="Where the record came from")
    department: Optional[str] = Field(None, description="Department text from the catalog line")

    @model_validator(mode="after")
    def check_source(self):
        if self.record is None and self.source != RecordSource.NONE:
            raise ValueError("A missing record cannot have a source")
        if self.record is not None and self.source == RecordSource.NONE:
            raise ValueError("A present record must name its source")
        return self

    @property
    def is_missing(self) -> bool:
        return self.record is None


class FacultyTableRow(BaseModel):
    """One faculty member in one academic year.

    Age is an estimate: reference year + assumed graduation age - graduation
    year. It is present exactly when graduation_year is present.
    """

    name: Optional[str] = Field(None, description="Display name")
    graduation_year: Optional[int] = Field(None, description="Undergraduate graduation year")
    degree: Optional[str] = Field(None, description="Normalized undergraduate degree")
    age: Optional[int] = Field(None, description="Estimated age in the reference year")
    academic_year: str = Field(..., min_length=1, description="Academic year label, e.g. 2015-16")
    department: Optional[str] = Field(None, description="Department name")

    @model_validator(mode="after")
    def check_age_invariant(self):
        if (self.age is None) != (self.graduation_year is None):
            raise ValueError("age must be present exactly when graduation_year is present")
        return self

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"example": {
            "name": "Colin C. Adams",
            "graduation_year": 1978,
            "degree": "B.S.",
            "age": 59,
            "academic_year": "2015-16",
            "department": "Mathematics and Statistics",
        }},
    )


class Diagnostic(BaseModel):
    """Audit note for a recoverable problem encountered during a run."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    message: str
    name: Optional[str] = None
    academic_year: Optional[str] = None

    def __str__(self) -> str:
        subject = f" [{self.name}]" if self.name else ""
        year = f" ({self.academic_year})" if self.academic_year else ""
        return f"{self.kind.value}{year}{subject}: {self.message}"


class YearSnapshot(BaseModel):
    """Metadata for a cached academic-year table."""

    academic_year: str = Field(..., min_length=1)
    created_at: datetime
    row_count: int = Field(0, ge=0)
    diagnostic_count: int = Field(0, ge=0)
