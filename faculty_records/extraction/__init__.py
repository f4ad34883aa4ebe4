"""Field extraction from normalized catalog lines and record fragments."""

from .names import (
    collect_departments,
    collect_faculty_names,
    collect_names,
    extract_department,
    extract_first_name,
    extract_last_name,
    extract_name,
)
from .patterns import (
    DEGREE_PATTERN,
    DEGREE_SUBSTITUTIONS,
    DEPARTMENT_PATTERN,
    EMAIL_LOCAL_PART_PATTERN,
    FIRST_NAME_PATTERN,
    LAST_NAME_PATTERN,
    UNDERGRADUATE_FRAGMENT_PATTERN,
    YEAR_PATTERN,
    first_match,
    substitute_degrees,
)

__all__ = [
    # Name collection
    "collect_names",
    "collect_faculty_names",
    "collect_departments",
    "extract_name",
    "extract_first_name",
    "extract_last_name",
    "extract_department",
    # Patterns
    "FIRST_NAME_PATTERN",
    "LAST_NAME_PATTERN",
    "DEPARTMENT_PATTERN",
    "YEAR_PATTERN",
    "DEGREE_PATTERN",
    "UNDERGRADUATE_FRAGMENT_PATTERN",
    "DEGREE_SUBSTITUTIONS",
    "EMAIL_LOCAL_PART_PATTERN",
    "first_match",
    "substitute_degrees",
]
