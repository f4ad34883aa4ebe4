"""Name and department extraction from flat-file lines.

Lines have the shape ``Last,First Middle., Department``. A line with fewer
than two commas has no recoverable first name; it yields None rather than
raising, and downstream stages treat None as "no match".
"""

from typing import List, Optional, Sequence

from faculty_records.domain.models import FacultyName
from faculty_records.logging import get_logger

from .patterns import DEPARTMENT_PATTERN, FIRST_NAME_PATTERN, LAST_NAME_PATTERN, first_match

logger = get_logger(__name__, component="extraction")

SEPARATOR_CHARS = ", "


def extract_first_name(line: str) -> Optional[str]:
    """First name or initials: the text between the first two commas."""
    value = first_match(FIRST_NAME_PATTERN, line, group=1)
    if value is None:
        return None
    value = value.strip(SEPARATOR_CHARS)
    return value or None


def extract_last_name(line: str) -> Optional[str]:
    """Family name: from the first capital letter to the first comma."""
    value = first_match(LAST_NAME_PATTERN, line, group=1)
    if value is None:
        return None
    value = value.strip()
    return value or None


def extract_name(line: str) -> Optional[FacultyName]:
    """Extract a FacultyName from one flat-file line, or None."""
    first = extract_first_name(line)
    last = extract_last_name(line)
    if first is None or last is None:
        return None
    return FacultyName(first=first, last=last)


def extract_department(line: str) -> Optional[str]:
    """Department: everything after the second comma, or None."""
    value = first_match(DEPARTMENT_PATTERN, line, group=1)
    return value or None


def collect_faculty_names(flat_file: Sequence[str]) -> List[Optional[FacultyName]]:
    """Extract structured names positionally; unparseable lines give None."""
    names = [extract_name(line) for line in flat_file]

    missing = sum(1 for name in names if name is None)
    if missing:
        logger.warning(
            f"{missing} of {len(names)} lines had no extractable name",
            extra={
                "event": "extraction.names.missing",
                "missing_count": missing,
                "line_count": len(names),
            },
        )

    return names


def collect_names(flat_file: Sequence[str], reorder: bool = True) -> List[Optional[str]]:
    """Display names for every line of a flat file.

    Args:
        flat_file: Normalized catalog lines
        reorder: "first last" when True, document order "last, first" otherwise

    Returns:
        One entry per line; None where no name could be extracted
    """
    return [
        name.display(reorder) if name is not None else None
        for name in collect_faculty_names(flat_file)
    ]


def collect_departments(flat_file: Sequence[str]) -> List[Optional[str]]:
    """Department text for every line of a flat file (None where absent)."""
    return [extract_department(line) for line in flat_file]
