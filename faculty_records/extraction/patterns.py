"""Named extraction patterns.

Every rule that pulls a field out of catalog or profile text lives here as a
compiled pattern with a name, so each one can be tested on its own and the
stages that use them read as a sequence of named steps.
"""

import re
from typing import List, Optional, Pattern, Tuple

# Catalog lines: "Last,First Middle., Department"

# Between the first and second comma, one optional space after the first
FIRST_NAME_PATTERN = re.compile(r",\s?([^,]*),")

# From the first capital letter before the first comma up to that comma.
# Lowercase markers (e.g. "*" or "on leave" flags) ahead of the name are skipped.
LAST_NAME_PATTERN = re.compile(r"^[^A-Z,]*([A-Z][^,]*),")

# Everything after the second comma
DEPARTMENT_PATTERN = re.compile(r"^[^,]*,[^,]*,\s*(.*?)\s*$")

# Record fragments: "1978, B.S., M.I.T."

YEAR_PATTERN = re.compile(r"\d{4}")

# B.<x>. forms (B.A., B.S., B.Sc., B.Eng., B.S.E.), A.B., Diploma.
# Not preceded by a letter or dot, so "M.B.A." is not read as "B.A."
DEGREE_PATTERN = re.compile(r"(?<![A-Za-z.])(?:B\.[A-Z][a-z]{0,2}\.(?:[A-Z]\.)?|A\.B\.|Diploma)")

# A year next to an undergraduate degree, in either order
UNDERGRADUATE_FRAGMENT_PATTERN = re.compile(
    r"\d{4}[,;]?\s*(?:%s)|(?:%s)[^;\d]{0,80}?\d{4}" % (DEGREE_PATTERN.pattern, DEGREE_PATTERN.pattern)
)

# Ordered: longer abbreviations come before the shorter ones they contain
DEGREE_SUBSTITUTIONS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"\bBSE\b"), "B.S.E."),
    (re.compile(r"\bBSc\b"), "B.Sc."),
    (re.compile(r"\bBS\b"), "B.S."),
    (re.compile(r"\bBA\b"), "B.A."),
    (re.compile(r"\bAB\b"), "B.A."),
    (re.compile(r"\bB\.\s+([AS])\."), r"B.\1."),
]

# Directory identifiers are the local part of an email address
EMAIL_LOCAL_PART_PATTERN = re.compile(r"(?:mailto:)?\s*([A-Za-z0-9._+-]+)@")


def first_match(pattern: Pattern[str], text: Optional[str], group: int = 0) -> Optional[str]:
    """Return the first match of pattern in text, or None.

    A None text is treated as no match so missing values flow through
    extraction chains untouched.
    """
    if text is None:
        return None
    match = pattern.search(text)
    if not match:
        return None
    return match.group(group)


def substitute_degrees(text: Optional[str]) -> Optional[str]:
    """Apply the ordered degree-abbreviation table to text."""
    if text is None:
        return None
    for pattern, replacement in DEGREE_SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    return text
