"""Custom exceptions for people-directory clients."""


class DirectoryError(Exception):
    """Base exception for all directory errors.

    Lookups catch this per name: a DirectoryError for one person becomes a
    failed lookup for that person and the batch carries on.
    """

    pass


class DirectoryHTTPError(DirectoryError):
    """HTTP request failed with an error status or at the transport level.

    ``status_code`` is 0 when no response was received (connection refused,
    DNS failure and the like).
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DirectoryTimeoutError(DirectoryError):
    """HTTP request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class DirectoryResponseError(DirectoryError):
    """A response arrived but could not be parsed as HTML."""

    pass


class DirectoryConfigurationError(DirectoryError):
    """Invalid client configuration (timeout out of range, empty user agent)."""

    pass
