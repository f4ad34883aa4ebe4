"""Domain models for the faculty records pipeline."""

from .models import (
    Diagnostic,
    DiagnosticKind,
    FacultyName,
    FacultyTableRow,
    LinkedRecord,
    RecordSource,
    YearSnapshot,
)

__all__ = [
    "FacultyName",
    "LinkedRecord",
    "FacultyTableRow",
    "Diagnostic",
    "DiagnosticKind",
    "RecordSource",
    "YearSnapshot",
]
