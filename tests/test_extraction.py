"""Unit tests for name, department and pattern extraction."""

import pytest

from faculty_records.domain.models import FacultyName
from faculty_records.extraction import (
    DEGREE_PATTERN,
    EMAIL_LOCAL_PART_PATTERN,
    YEAR_PATTERN,
    collect_departments,
    collect_faculty_names,
    collect_names,
    extract_department,
    extract_first_name,
    extract_last_name,
    extract_name,
    first_match,
    substitute_degrees,
)


# ============================================================================
# Names
# ============================================================================


class TestNameExtraction:
    """Tests for first/last name capture from catalog lines."""

    def test_catalog_line_reordered(self):
        """Test the canonical catalog line yields 'first last'."""
        line = "Adams,Colin C., Mathematics and Statistics"

        assert extract_first_name(line) == "Colin C."
        assert extract_last_name(line) == "Adams"
        assert collect_names([line], reorder=True) == ["Colin C. Adams"]

    def test_catalog_line_document_order(self):
        """Test reorder=False keeps the document's last-first order."""
        assert collect_names(["Adams,Colin C., Mathematics"], reorder=False) == ["Adams, Colin C."]

    def test_optional_space_after_first_comma(self):
        """Test a single space after the first comma is tolerated."""
        assert extract_first_name("Bolton, Sarah J., English") == "Sarah J."

    def test_leading_marker_is_skipped(self):
        """Test lowercase/punctuation markers before the last name are dropped."""
        assert extract_last_name("*Chen,Wei, Physics") == "Chen"
        assert extract_last_name("  on leave Dunn,Pat, Music") == "Dunn"

    def test_compound_last_name(self):
        """Test spaces inside a last name are kept."""
        assert extract_last_name("Van Der Berg,Anna, Art") == "Van Der Berg"

    def test_line_with_one_separator_is_missing(self):
        """Test fewer than two commas yields a missing name, not an error."""
        assert extract_first_name("Adams,Colin") is None
        assert extract_name("Adams,Colin") is None
        assert collect_names(["Adams,Colin"]) == [None]

    def test_empty_first_name_is_missing(self):
        """Test an empty token between commas is missing."""
        assert extract_first_name("Adams,, Math") is None

    def test_line_without_capital_is_missing(self):
        """Test a line with no capitalized last name yields no name."""
        assert extract_last_name("adams,colin, math") is None

    def test_collect_names_is_positional(self):
        """Test output length and order match the flat file."""
        flat_file = ["Adams,Colin C., Math", "garbage", "Dunn,Pat, Music"]
        assert collect_names(flat_file) == ["Colin C. Adams", None, "Pat Dunn"]

    def test_collect_faculty_names_structured(self):
        """Test structured names are returned for downstream lookups."""
        names = collect_faculty_names(["Adams,Colin C., Math"])
        assert names == [FacultyName(first="Colin C.", last="Adams")]

    @pytest.mark.parametrize(
        "line",
        [
            "Adams,Colin C., Mathematics and Statistics",
            "*Chen,Wei, Physics",
            "Bolton, Sarah J., English",
        ],
    )
    def test_name_pair_invariant_under_reorder(self, line):
        """Test the unordered {first, last} pair does not depend on reorder."""
        name = extract_name(line)
        reordered = collect_names([line], reorder=True)[0]
        document_order = collect_names([line], reorder=False)[0]

        assert reordered == f"{name.first} {name.last}"
        assert document_order == f"{name.last}, {name.first}"
        last, first = document_order.split(", ", 1)
        assert {first, last} == {name.first, name.last}


class TestDepartmentExtraction:
    """Tests for department capture."""

    def test_department_after_second_comma(self):
        """Test the department is everything after the second comma."""
        assert extract_department("Adams,Colin C., Mathematics and Statistics") == (
            "Mathematics and Statistics"
        )

    def test_department_keeps_later_commas(self):
        """Test commas inside the department are kept."""
        assert extract_department("Lee,Ann, Art, Art History") == "Art, Art History"

    def test_missing_department(self):
        """Test lines without a department give None."""
        assert extract_department("Adams,Colin C.,") is None
        assert extract_department("Adams,Colin") is None

    def test_collect_departments(self):
        """Test departments align with flat-file positions."""
        assert collect_departments(["Adams,Colin C., Math", "x"]) == ["Math", None]


# ============================================================================
# Patterns
# ============================================================================


class TestPatterns:
    """Tests for the named extraction patterns."""

    def test_first_match_none_text(self):
        """Test missing text flows through as missing."""
        assert first_match(YEAR_PATTERN, None) is None

    def test_year_pattern(self):
        """Test the first 4-digit run is found."""
        assert first_match(YEAR_PATTERN, "B.A. 1983; Ph.D. 1990") == "1983"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1978, B.S., M.I.T.", "B.S."),
            ("1983, B.A., Harvard", "B.A."),
            ("2001, B.Sc., Toronto", "B.Sc."),
            ("1990, B.Eng., McGill", "B.Eng."),
            ("1975, A.B., Princeton", "A.B."),
            ("1969, Diploma, Heidelberg", "Diploma"),
        ],
    )
    def test_degree_family(self, text, expected):
        """Test each undergraduate degree form is recognized."""
        assert first_match(DEGREE_PATTERN, text) == expected

    def test_degree_pattern_ignores_graduate_degrees(self):
        """Test M.B.A. and PHD are not read as undergraduate degrees."""
        assert first_match(DEGREE_PATTERN, "1983, PHD, University of Wisconsin") is None
        assert first_match(DEGREE_PATTERN, "1990, M.B.A., Wharton") is None

    def test_substitute_degrees(self):
        """Test the ordered abbreviation table."""
        assert substitute_degrees("1983, BA, Harvard") == "1983, B.A., Harvard"
        assert substitute_degrees("1983, AB, Harvard") == "1983, B.A., Harvard"
        assert substitute_degrees("1983, BS, Yale") == "1983, B.S., Yale"
        assert substitute_degrees("1983, BSE, Penn") == "1983, B.S.E., Penn"
        assert substitute_degrees("1983, B. A., Smith") == "1983, B.A., Smith"

    def test_substitute_degrees_leaves_words_alone(self):
        """Test abbreviations only match as whole words."""
        assert substitute_degrees("BASIC studies at ABC") == "BASIC studies at ABC"
        assert substitute_degrees(None) is None

    def test_email_local_part(self):
        """Test the identifier is the email local part."""
        assert first_match(EMAIL_LOCAL_PART_PATTERN, "mailto:cadams@williams.edu", group=1) == "cadams"
