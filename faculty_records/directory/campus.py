"""Client for a campus people directory served as HTML.

The directory has two pages of interest:
- a search page that lists people matching a name, each entry carrying an
  email link whose local part is the person's identifier
- a profile page per identifier, with an education section listing degrees

Both are located with CSS selectors from DirectoryConfig so a change in page
markup is a configuration change.
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from faculty_records.config.models import DirectoryConfig
from faculty_records.domain.models import FacultyName
from faculty_records.extraction.patterns import EMAIL_LOCAL_PART_PATTERN
from faculty_records.logging import get_logger

from .base import BaseDirectory
from .exceptions import DirectoryHTTPError
from .models import IdentifierResult

logger = get_logger(__name__, component="directory")


def _identifier_from_node(node: Tag) -> Optional[str]:
    """Identifier carried by a search-result node (href first, then text)."""
    for text in (node.get("href"), node.get_text(" ", strip=True)):
        if not text:
            continue
        match = EMAIL_LOCAL_PART_PATTERN.search(str(text))
        if match:
            return match.group(1)
    return None


def parse_identifiers(soup: BeautifulSoup, selector: str) -> List[str]:
    """Unique identifiers from a search page, in listing order."""
    identifiers: List[str] = []
    for node in soup.select(selector):
        identifier = _identifier_from_node(node)
        if identifier and identifier not in identifiers:
            identifiers.append(identifier)
    return identifiers


def parse_education(soup: BeautifulSoup, selector: str) -> Optional[str]:
    """Education section text from a profile page, or None when absent or empty."""
    section = soup.select_one(selector)
    if section is None:
        return None
    text = section.get_text(" ", strip=True)
    return text or None


class CampusDirectory(BaseDirectory):
    """Directory client for the configured campus search and profile pages."""

    def __init__(self, directory_config: DirectoryConfig, record_pattern) -> None:
        super().__init__(
            record_pattern=record_pattern,
            timeout=directory_config.http_request_timeout,
            user_agent=directory_config.user_agent,
        )
        self.config = directory_config

    def profile_url(self, identifier: str) -> str:
        return self.config.profile_url_template.format(identifier=identifier)

    def find_identifier(self, name: FacultyName) -> IdentifierResult:
        query = self.build_query(name)
        url = self.config.search_url

        markup = self._fetch_html(url, params={self.config.search_param: query})
        identifiers = parse_identifiers(self._parse_html(markup, url), self.config.identifier_selector)

        logger.debug(
            f"Directory search for '{query}' returned {len(identifiers)} identifier(s)",
            extra={
                "event": "directory.search.completed",
                "query": query,
                "identifiers": identifiers,
            },
        )
        return IdentifierResult(identifiers=identifiers)

    def fetch_profile(self, identifier: str) -> Optional[str]:
        """Education text for identifier.

        A profile page that does not exist (HTTP 404) is treated like a
        profile without an education section.
        """
        url = self.profile_url(identifier)
        try:
            markup = self._fetch_html(url)
        except DirectoryHTTPError as e:
            if e.status_code == 404:
                return None
            raise

        return parse_education(self._parse_html(markup, url), self.config.education_selector)
