"""Cross-document record linkage.

Names collected from one year's catalog are looked up in a secondary flat
file (another year's catalog carrying degree text). Matching is plain
substring containment, the same membership test the catalogs were designed
around. It is not anchored, so "Ann Lee" also matches a line for
"Joann Leeds"; that imprecision is accepted and candidates beyond the first
are only logged.
"""

import re
from typing import List, Optional, Pattern, Sequence, Union

from faculty_records.domain.models import LinkedRecord, RecordSource
from faculty_records.logging import get_logger

logger = get_logger(__name__, component="linking")

PatternLike = Union[str, Pattern[str]]


def _compile(pattern: PatternLike) -> Pattern[str]:
    return re.compile(pattern) if isinstance(pattern, str) else pattern


def find_candidate_lines(name: Optional[str], flat_file: Optional[Sequence[str]]) -> List[str]:
    """Lines of flat_file that contain name as a substring."""
    if not name or not flat_file:
        return []
    return [line for line in flat_file if name in line]


def link_record(
    name: Optional[str],
    flat_file: Optional[Sequence[str]],
    pattern: PatternLike,
) -> Optional[str]:
    """First pattern match across the lines containing name, or None."""
    compiled = _compile(pattern)
    candidates = find_candidate_lines(name, flat_file)

    if len(candidates) > 1:
        logger.debug(
            f"{len(candidates)} candidate lines for {name}; using the first match",
            extra={
                "event": "linking.record.multiple_candidates",
                "faculty_name": name,
                "candidate_count": len(candidates),
            },
        )

    for line in candidates:
        match = compiled.search(line)
        if match:
            return match.group(0)
    return None


def link_records(
    names: Sequence[Optional[str]],
    secondary_flat_file: Optional[Sequence[str]],
    pattern: PatternLike,
    departments: Optional[Sequence[Optional[str]]] = None,
) -> List[LinkedRecord]:
    """Link every name to an academic record found in a secondary flat file.

    Args:
        names: Display names in flat-file order; None marks an unparseable line
        secondary_flat_file: Flat file to search, or None when the year has none
        pattern: Degree/year extraction pattern
        departments: Optional departments aligned with names

    Returns:
        One LinkedRecord per input name, in the same order. Records that could
        not be found are explicit misses (record=None) for the caller to pass
        on to the directory lookup.
    """
    compiled = _compile(pattern)
    linked: List[LinkedRecord] = []

    for position, name in enumerate(names):
        record = link_record(name, secondary_flat_file, compiled)
        linked.append(
            LinkedRecord(
                position=position,
                name=name,
                record=record,
                source=RecordSource.SECONDARY if record is not None else RecordSource.NONE,
                department=departments[position] if departments is not None else None,
            )
        )

    found = sum(1 for item in linked if not item.is_missing)
    logger.info(
        f"Linked {found} of {len(linked)} names from the secondary document",
        extra={
            "event": "linking.records.linked",
            "linked_count": found,
            "name_count": len(linked),
            "has_secondary": secondary_flat_file is not None,
        },
    )

    return linked
