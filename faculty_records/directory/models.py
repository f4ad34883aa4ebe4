"""Result types for directory lookups.

Every lookup returns a LookupResult instead of raising: absence, ambiguity
and transport failure are ordinary outcomes that the pipeline aggregates.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from faculty_records.domain.models import Diagnostic, DiagnosticKind


class IdentifierStatus(str, Enum):
    """How many directory entries a name search produced."""

    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class IdentifierResult:
    """Identifiers found for one name, in directory listing order.

    Attributes:
        identifiers: Unique identifiers in the order the directory lists them
    """

    identifiers: List[str] = field(default_factory=list)

    @property
    def status(self) -> IdentifierStatus:
        if not self.identifiers:
            return IdentifierStatus.NONE
        if len(self.identifiers) == 1:
            return IdentifierStatus.SINGLE
        return IdentifierStatus.MULTIPLE

    @property
    def selected(self) -> Optional[str]:
        """The identifier to use.

        The directory lists faculty ahead of students and staff, so on a name
        collision the first entry is taken.
        """
        return self.identifiers[0] if self.identifiers else None

    @property
    def is_ambiguous(self) -> bool:
        return self.status == IdentifierStatus.MULTIPLE


class LookupStatus(str, Enum):
    """Outcome of a full name -> record lookup."""

    FOUND = "found"
    NOT_LISTED = "not_listed"
    NO_EDUCATION = "no_education"
    NO_MATCH = "no_match"
    FAILED = "failed"


@dataclass(frozen=True)
class LookupResult:
    """Outcome of looking one name up in the directory.

    Attributes:
        name: Display name that was looked up
        status: Final outcome
        record: Academic record text when status is FOUND
        identifier: Identifier whose profile was fetched, if any
        candidates: Every identifier the search returned
        note: Human-readable explanation for audit logs
    """

    name: str
    status: LookupStatus
    record: Optional[str] = None
    identifier: Optional[str] = None
    candidates: List[str] = field(default_factory=list)
    note: Optional[str] = None

    @property
    def is_missing(self) -> bool:
        return self.record is None

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1

    def diagnostics(self, academic_year: Optional[str] = None) -> List[Diagnostic]:
        """Audit notes for this lookup (empty for a clean single match)."""
        notes: List[Diagnostic] = []

        if self.is_ambiguous:
            notes.append(
                Diagnostic(
                    kind=DiagnosticKind.AMBIGUOUS,
                    name=self.name,
                    academic_year=academic_year,
                    message=(
                        f"{len(self.candidates)} directory entries "
                        f"({', '.join(self.candidates)}); selected {self.candidates[0]}"
                    ),
                )
            )

        if self.status == LookupStatus.FAILED:
            notes.append(
                Diagnostic(
                    kind=DiagnosticKind.LOOKUP_FAILURE,
                    name=self.name,
                    academic_year=academic_year,
                    message=self.note or "directory lookup failed",
                )
            )
        elif self.status != LookupStatus.FOUND:
            notes.append(
                Diagnostic(
                    kind=DiagnosticKind.NO_MATCH,
                    name=self.name,
                    academic_year=academic_year,
                    message=self.note or self.status.value,
                )
            )

        return notes
