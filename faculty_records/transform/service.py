"""Academic record -> table row transformation.

This module provides:
- Field extractors for graduation year and degree
- Age estimation from a graduation year
- transform(): one FacultyTableRow per linked record, order preserved
"""

from typing import List, Optional, Sequence

from faculty_records.domain.models import FacultyTableRow, LinkedRecord
from faculty_records.extraction.patterns import (
    DEGREE_PATTERN,
    UNDERGRADUATE_FRAGMENT_PATTERN,
    YEAR_PATTERN,
    first_match,
    substitute_degrees,
)
from faculty_records.logging import get_logger

logger = get_logger(__name__, component="transform")

# Typical age at undergraduate completion. A modeling assumption, so ages
# derived from it are estimates.
ASSUMED_GRADUATION_AGE = 22


def undergraduate_fragment(record: Optional[str]) -> Optional[str]:
    """The part of a record pairing a year with an undergraduate degree.

    Degree abbreviations are normalized first. Returns None when the record
    names no undergraduate degree next to a year (e.g. "1983, PHD, ...").
    """
    return first_match(UNDERGRADUATE_FRAGMENT_PATTERN, substitute_degrees(record))


def extract_graduation_year(record: Optional[str]) -> Optional[int]:
    """First 4-digit run of the undergraduate fragment, or None."""
    year = first_match(YEAR_PATTERN, undergraduate_fragment(record))
    return int(year) if year is not None else None


def extract_degree(record: Optional[str]) -> Optional[str]:
    """Normalized undergraduate degree, or None.

    The degree beside the graduation year wins; otherwise the first degree
    anywhere in the record.
    """
    degree = first_match(DEGREE_PATTERN, undergraduate_fragment(record))
    if degree is None:
        degree = first_match(DEGREE_PATTERN, substitute_degrees(record))
    return degree


def estimate_age(
    graduation_year: Optional[int],
    reference_year: int,
    assumed_graduation_age: int = ASSUMED_GRADUATION_AGE,
) -> Optional[int]:
    """Estimated age in reference_year, or None without a graduation year."""
    if graduation_year is None:
        return None
    return reference_year + assumed_graduation_age - graduation_year


def transform(
    records: Sequence[LinkedRecord],
    academic_year: str,
    reference_year: int,
    assumed_graduation_age: int = ASSUMED_GRADUATION_AGE,
) -> List[FacultyTableRow]:
    """Assemble one table row per linked record.

    Args:
        records: Linked records in flat-file order
        academic_year: Label stored on every row
        reference_year: Calendar year ages are estimated for
        assumed_graduation_age: Age at undergraduate completion

    Returns:
        Rows in the same order as records; missing fields stay None
    """
    rows: List[FacultyTableRow] = []

    for item in records:
        graduation_year = extract_graduation_year(item.record)
        rows.append(
            FacultyTableRow(
                name=item.name,
                graduation_year=graduation_year,
                degree=extract_degree(item.record),
                age=estimate_age(graduation_year, reference_year, assumed_graduation_age),
                academic_year=academic_year,
                department=item.department,
            )
        )

    with_year = sum(1 for row in rows if row.graduation_year is not None)
    logger.info(
        f"Built {len(rows)} rows for {academic_year}, {with_year} with a graduation year",
        extra={
            "event": "transform.rows.built",
            "academic_year": academic_year,
            "row_count": len(rows),
            "with_graduation_year": with_year,
        },
    )

    return rows
