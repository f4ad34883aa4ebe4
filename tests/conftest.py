"""Shared fixtures for faculty records tests."""

from pathlib import Path
from typing import List

import pytest

from faculty_records.logging.context import clear_log_context
from faculty_records.persistence import close_database, init_database


PRIMARY_CATALOG = """\
WILLIAMS COLLEGE CATALOG 2015-16
Page 112
THE FACULTY
Listed alphabetically; emeriti appear separately
Adams,Colin C., Mathematics and Statistics
Bolton,Sarah J., English

113
*Chen,Wei, Physics
Dunn,Pat, Music
"""

SECONDARY_CATALOG = """\
WILLIAMS COLLEGE CATALOG 2013-14
FACULTY
Colin C. Adams, Professor of Mathematics, 1978, B.S., M.I.T.; Ph.D. (1983), Wisconsin
Sarah J. Bolton, Professor of English, 1983, BA, Harvard; Ph.D. 1990, Yale
Ann Other, Lecturer in Music, 1983, PHD, University of Wisconsin
"""


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Remove environment overrides so defaults apply."""
    for name in ("LOG_LEVEL", "DATABASE_URL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def primary_lines() -> List[str]:
    return PRIMARY_CATALOG.splitlines()


@pytest.fixture
def secondary_lines() -> List[str]:
    return SECONDARY_CATALOG.splitlines()


@pytest.fixture
def catalog_dir(tmp_path) -> Path:
    """Directory holding the sample catalogs as text files."""
    (tmp_path / "2015-16.txt").write_text(PRIMARY_CATALOG, encoding="utf-8")
    (tmp_path / "2013-14.txt").write_text(SECONDARY_CATALOG, encoding="utf-8")
    return tmp_path


@pytest.fixture
def config_file(catalog_dir, mock_env_vars) -> Path:
    """A valid config.yaml next to the sample catalogs."""
    path = catalog_dir / "config.yaml"
    path.write_text(
        """\
years:
  - label: "2015-16"
    document: 2015-16.txt
    anchor_keyword: FACULTY
    secondary_document: 2013-14.txt
directory:
  enabled: false
logging:
  level: INFO
  format: key-value
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def memory_db():
    """In-memory snapshot cache, closed after the test."""
    init_database("sqlite:///:memory:")
    yield
    close_database()
