"""Base directory client with shared functionality for all directory lookups.

This module provides the abstract base class that directory clients implement,
along with the shared HTTP handling, HTML parsing, and the name -> record
lookup flow built on top of the two abstract operations.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Pattern, Sequence, Tuple, Union

import requests
from bs4 import BeautifulSoup

from faculty_records.domain.models import Diagnostic, FacultyName, LinkedRecord, RecordSource
from faculty_records.logging import get_logger
from faculty_records.logging.context import log_context

from .exceptions import (
    DirectoryConfigurationError,
    DirectoryError,
    DirectoryHTTPError,
    DirectoryResponseError,
    DirectoryTimeoutError,
)
from .models import IdentifierResult, LookupResult, LookupStatus

logger = get_logger(__name__, component="directory")

HTML_PARSER = "lxml"


class BaseDirectory(ABC):
    """Base class for people-directory clients.

    Subclasses implement find_identifier() and fetch_profile(); lookup() and
    lookup_missing() compose them and turn every failure into a LookupResult
    so one bad name never stops a batch.

    Attributes:
        record_pattern: Pattern selecting the academic record in profile text
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    def __init__(
        self,
        record_pattern: Union[str, Pattern[str]],
        timeout: int = 30,
        user_agent: str = "FacultyRecords/1.0",
    ) -> None:
        """Initialize client with configuration.

        Args:
            record_pattern: Degree/year extraction pattern
            timeout: HTTP request timeout in seconds (default 30, range 1-300)
            user_agent: User-Agent header for requests

        Raises:
            DirectoryConfigurationError: If timeout is outside valid range or user_agent is empty
        """
        if not 1 <= timeout <= 300:
            raise DirectoryConfigurationError(
                f"Timeout must be between 1 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise DirectoryConfigurationError("user_agent cannot be empty")

        self.record_pattern = re.compile(record_pattern) if isinstance(record_pattern, str) else record_pattern
        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @abstractmethod
    def find_identifier(self, name: FacultyName) -> IdentifierResult:
        """Search the directory for a name.

        Returns:
            IdentifierResult listing every matching identifier in directory
            order (empty when the person is not listed)

        Raises:
            DirectoryError: On transport or parsing failure
        """
        pass

    @abstractmethod
    def fetch_profile(self, identifier: str) -> Optional[str]:
        """Fetch the education text from an identifier's profile.

        Returns:
            Education section text, or None when the profile has none

        Raises:
            DirectoryError: On transport or parsing failure
        """
        pass

    @staticmethod
    def build_query(name: FacultyName) -> str:
        """Build the search text for a name.

        Only the given name is used, without middle initials. Spaces inside
        a compound last name become hyphens, the form the directory indexes
        them under.
        """
        last = "-".join(name.last.split())
        return f"{name.given_name} {last}"

    def extract_record(self, text: Optional[str]) -> Optional[str]:
        """First record pattern match in text, or None."""
        if not text:
            return None
        match = self.record_pattern.search(text)
        return match.group(0) if match else None

    def lookup(self, name: FacultyName, display_name: Optional[str] = None) -> LookupResult:
        """Find the academic record for one name.

        Never raises for directory problems: not listed, no education section,
        no record in the education text, and transport failures all come back
        as a LookupResult with the matching status.
        """
        label = display_name or name.display()

        identifiers = IdentifierResult()

        with log_context(faculty_name=label):
            try:
                identifiers = self.find_identifier(name)

                if identifiers.selected is None:
                    logger.info(
                        f"{label} is not listed in the directory",
                        extra={"event": "directory.lookup.not_listed"},
                    )
                    return LookupResult(
                        name=label,
                        status=LookupStatus.NOT_LISTED,
                        note=f"no directory entry for '{self.build_query(name)}'",
                    )

                identifier = identifiers.selected
                if identifiers.is_ambiguous:
                    logger.warning(
                        f"{len(identifiers.identifiers)} directory entries for {label}; using {identifier}",
                        extra={
                            "event": "directory.lookup.ambiguous",
                            "candidates": identifiers.identifiers,
                            "selected": identifier,
                        },
                    )

                education = self.fetch_profile(identifier)
                if education is None:
                    logger.info(
                        f"Profile {identifier} has no education section",
                        extra={"event": "directory.lookup.no_education", "identifier": identifier},
                    )
                    return LookupResult(
                        name=label,
                        status=LookupStatus.NO_EDUCATION,
                        identifier=identifier,
                        candidates=identifiers.identifiers,
                        note=f"profile {identifier} has no education section",
                    )

                record = self.extract_record(education)
                if record is None:
                    logger.info(
                        f"No academic record in the education text of {identifier}",
                        extra={"event": "directory.lookup.no_match", "identifier": identifier},
                    )
                    return LookupResult(
                        name=label,
                        status=LookupStatus.NO_MATCH,
                        identifier=identifier,
                        candidates=identifiers.identifiers,
                        note=f"no academic record in the education text of {identifier}",
                    )

                logger.debug(
                    f"Found record for {label}",
                    extra={"event": "directory.lookup.found", "identifier": identifier},
                )
                return LookupResult(
                    name=label,
                    status=LookupStatus.FOUND,
                    record=record,
                    identifier=identifier,
                    candidates=identifiers.identifiers,
                )

            except DirectoryError as e:
                logger.warning(
                    f"Directory lookup failed for {label}: {e}",
                    extra={"event": "directory.lookup.failed", "error_type": type(e).__name__},
                )
                # Keep the search outcome when only the profile fetch failed
                return LookupResult(
                    name=label,
                    status=LookupStatus.FAILED,
                    identifier=identifiers.selected,
                    candidates=identifiers.identifiers,
                    note=str(e),
                )

    def lookup_missing(
        self,
        linked: Sequence[LinkedRecord],
        names: Sequence[Optional[FacultyName]],
        academic_year: Optional[str] = None,
    ) -> Tuple[List[LinkedRecord], List[Diagnostic]]:
        """Fill records missing after linkage with directory lookups.

        Args:
            linked: Output of record linkage, one entry per flat-file line
            names: Structured names aligned with linked (None for unparseable lines)
            academic_year: Year label attached to diagnostics

        Returns:
            Tuple of (records, diagnostics). records has the same length and
            order as linked; entries that already had a record are unchanged.
        """
        if len(linked) != len(names):
            raise ValueError(
                f"linked records and names must align, got {len(linked)} and {len(names)}"
            )

        results: List[LinkedRecord] = []
        diagnostics: List[Diagnostic] = []
        counts: Dict[str, int] = {status.value: 0 for status in LookupStatus}

        for item, name in zip(linked, names):
            if not item.is_missing or name is None:
                results.append(item)
                continue

            outcome = self.lookup(name, display_name=item.name)
            counts[outcome.status.value] += 1
            diagnostics.extend(outcome.diagnostics(academic_year))

            if outcome.record is not None:
                results.append(
                    item.model_copy(update={"record": outcome.record, "source": RecordSource.DIRECTORY})
                )
            else:
                results.append(item)

        logger.info(
            f"Directory lookups complete: {counts[LookupStatus.FOUND.value]} found",
            extra={"event": "directory.lookups.completed", "academic_year": academic_year, **counts},
        )

        return results, diagnostics

    def _fetch_html(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """Make HTTP GET request with error handling.

        Args:
            url: URL to request
            params: Query parameters
            headers: Additional headers to include (merged with defaults)

        Returns:
            Response body as text

        Raises:
            DirectoryHTTPError: On 4xx or 5xx HTTP status, or a transport failure
            DirectoryTimeoutError: On request timeout
        """
        request_headers = self._session.headers.copy()
        if headers:
            request_headers.update(headers)

        try:
            logger.debug(
                f"HTTP GET request to {url}",
                extra={
                    "event": "directory.fetch.request",
                    "url": url,
                    "params": params,
                    "timeout": self.timeout,
                },
            )

            response = self._session.get(
                url,
                headers=request_headers,
                params=params,
                timeout=self.timeout,
            )

            if response.status_code >= 400:
                # A missing page is an ordinary answer for profile fetches
                if response.status_code == 404:
                    log_level = logging.INFO
                elif response.status_code >= 500:
                    log_level = logging.WARNING
                else:
                    log_level = logging.ERROR
                logger.log(
                    log_level,
                    f"HTTP {response.status_code} error from {url}",
                    extra={
                        "event": "directory.fetch.error",
                        "status_code": response.status_code,
                        "url": url,
                    },
                )
                raise DirectoryHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=url,
                )

            logger.debug(
                "HTTP request succeeded",
                extra={
                    "event": "directory.fetch.succeeded",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            return response.text

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "directory.fetch.timeout",
                    "error_type": "Timeout",
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            raise DirectoryTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "directory.fetch.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise DirectoryHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

    def _parse_html(self, markup: str, url: str = "") -> BeautifulSoup:
        """Parse an HTML page.

        Raises:
            DirectoryResponseError: If the markup cannot be parsed
        """
        try:
            return BeautifulSoup(markup, HTML_PARSER)
        except (TypeError, ValueError) as e:
            logger.error(
                f"Failed to parse HTML from {url}",
                extra={"event": "directory.fetch.error", "error_type": type(e).__name__, "url": url},
            )
            raise DirectoryResponseError(f"Failed to parse HTML from {url}: {e}") from e
