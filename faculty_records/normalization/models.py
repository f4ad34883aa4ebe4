"""Data models for the normalization layer."""

from dataclasses import dataclass, field
from typing import List, Optional

from faculty_records.domain.models import Diagnostic


@dataclass
class NormalizationResult:
    """Result of normalizing one catalog document.

    Attributes:
        flat_file: One faculty record per element, in document order
        raw_line_count: Number of lines in the raw document
        diagnostic: Configuration mismatch note when the flat file is empty
            because the anchor or separator was never found
    """

    flat_file: List[str] = field(default_factory=list)
    raw_line_count: int = 0
    diagnostic: Optional[Diagnostic] = None

    @property
    def is_mismatch(self) -> bool:
        """Whether the document did not match its configured layout."""
        return self.diagnostic is not None
