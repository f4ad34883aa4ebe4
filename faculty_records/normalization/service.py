"""Catalog normalization: raw extracted text to one-record-per-line flat files.

The cleaning pipeline is a chain of small named rules:
1. trim_to_anchor: drop everything before the faculty-section anchor
2. trim_to_separator: drop residual preamble before the first comma line
3. drop_short_lines: drop blanks and bare page numbers
4. rejoin_split_lines: best-effort repair of hard line breaks (optional)

Each rule is a pure function over a list of strings so it can be tested on
its own. DocumentNormalizer strings them together for one catalog and turns a
missing anchor or separator into a diagnostic instead of an exception.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from faculty_records.domain.models import Diagnostic, DiagnosticKind
from faculty_records.logging import get_logger

from .models import NormalizationResult

logger = get_logger(__name__, component="normalization")

FIELD_SEPARATOR = ","
DEFAULT_SHORT_LINE_THRESHOLD = 4


def read_document(path: Path) -> List[str]:
    """Read a UTF-8 text document as a list of lines without line endings."""
    return Path(path).read_text(encoding="utf-8").splitlines()


def trim_to_anchor(lines: Sequence[str], anchor_keyword: str) -> List[str]:
    """Keep lines from the first one containing anchor_keyword onwards.

    Returns an empty list when the anchor never occurs.
    """
    for index, line in enumerate(lines):
        if anchor_keyword in line:
            return list(lines[index:])
    return []


def trim_to_separator(lines: Sequence[str], separator: str = FIELD_SEPARATOR) -> List[str]:
    """Keep lines from the first one containing the field separator onwards."""
    for index, line in enumerate(lines):
        if separator in line:
            return list(lines[index:])
    return []


def drop_short_lines(
    lines: Sequence[str], threshold: int = DEFAULT_SHORT_LINE_THRESHOLD
) -> List[str]:
    """Drop lines whose trimmed length is at or below threshold.

    Removes blank lines and bare page numbers. Survivors are stripped.
    """
    return [line.strip() for line in lines if len(line.strip()) > threshold]


def rejoin_split_lines(lines: Sequence[str], count: int) -> List[str]:
    """Best-effort repair of records broken across two lines.

    A line among the ``count`` shortest whose immediate predecessor is among
    the ``count`` longest is treated as the tail of that predecessor: the two
    are joined with a single space and the tail is removed.

    This is a length heuristic, not a parser. It can merge two genuine
    records (a long record followed by a terse one) and it misses breaks where
    either half has ordinary length.
    """
    if count <= 0 or len(lines) < 2:
        return list(lines)

    # Ties broken by position so the selection is deterministic
    by_length = sorted(range(len(lines)), key=lambda i: (len(lines[i]), i))
    shortest = set(by_length[:count])
    longest = set(sorted(range(len(lines)), key=lambda i: (-len(lines[i]), i))[:count])

    result: List[str] = []
    index = 0
    while index < len(lines):
        successor = index + 1
        if successor < len(lines) and index in longest and successor in shortest:
            result.append(f"{lines[index].rstrip()} {lines[successor].strip()}")
            index += 2
        else:
            result.append(lines[index])
            index += 1

    return result


def normalize(
    raw_lines: Sequence[str],
    anchor_keyword: str,
    short_line_threshold: int = DEFAULT_SHORT_LINE_THRESHOLD,
    rejoin_count: int = 0,
) -> List[str]:
    """Turn raw document lines into a flat file (one faculty record per line).

    An empty result means the anchor or separator was not found, which points
    at a configuration that does not match the document.
    """
    lines = trim_to_anchor(raw_lines, anchor_keyword)
    lines = trim_to_separator(lines)
    lines = drop_short_lines(lines, short_line_threshold)
    return rejoin_split_lines(lines, rejoin_count)


class DocumentNormalizer:
    """Normalizes catalogs for one configured layout and reports mismatches."""

    def __init__(
        self,
        anchor_keyword: str,
        short_line_threshold: int = DEFAULT_SHORT_LINE_THRESHOLD,
        rejoin_count: int = 0,
        academic_year: Optional[str] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.anchor_keyword = anchor_keyword
        self.short_line_threshold = short_line_threshold
        self.rejoin_count = rejoin_count
        self.academic_year = academic_year
        self.logger = logger_instance or logger

    def normalize(self, raw_lines: Sequence[str]) -> NormalizationResult:
        """Normalize raw lines, attaching a diagnostic when nothing survives.

        Args:
            raw_lines: Lines as produced by PDF-to-text extraction

        Returns:
            NormalizationResult with the flat file and any diagnostic
        """
        anchored = trim_to_anchor(raw_lines, self.anchor_keyword)
        if not anchored:
            return self._mismatch(
                raw_lines, f"anchor keyword '{self.anchor_keyword}' not found"
            )

        separated = trim_to_separator(anchored)
        if not separated:
            return self._mismatch(
                raw_lines,
                f"no line containing '{FIELD_SEPARATOR}' after anchor '{self.anchor_keyword}'",
            )

        kept = drop_short_lines(separated, self.short_line_threshold)
        flat_file = rejoin_split_lines(kept, self.rejoin_count)

        self.logger.info(
            f"Normalized document: {len(raw_lines)} raw lines -> {len(flat_file)} records",
            extra={
                "event": "normalization.document.normalized",
                "raw_line_count": len(raw_lines),
                "record_count": len(flat_file),
                "rejoined_count": len(kept) - len(flat_file),
            },
        )

        return NormalizationResult(flat_file=flat_file, raw_line_count=len(raw_lines))

    def normalize_file(self, path: Path) -> NormalizationResult:
        """Read and normalize a document from disk.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not UTF-8
        """
        return self.normalize(read_document(path))

    def _mismatch(self, raw_lines: Sequence[str], message: str) -> NormalizationResult:
        self.logger.warning(
            f"Configuration mismatch: {message}",
            extra={
                "event": "normalization.document.configuration_mismatch",
                "anchor_keyword": self.anchor_keyword,
                "raw_line_count": len(raw_lines),
            },
        )
        return NormalizationResult(
            flat_file=[],
            raw_line_count=len(raw_lines),
            diagnostic=Diagnostic(
                kind=DiagnosticKind.CONFIGURATION_MISMATCH,
                message=message,
                academic_year=self.academic_year,
            ),
        )
