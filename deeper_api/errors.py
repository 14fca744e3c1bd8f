"""Exception types raised by the scraper and the refresh coordinator."""

from typing import Optional


class DeeperApiError(Exception):
    """Base class for all errors raised by this package."""


class FetchError(DeeperApiError):
    """The source page could not be fetched (transport error, timeout or non-2xx)."""

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url


class BlockedError(FetchError):
    """The source answered with a forbidden or edge-protection challenge response."""


class ParseError(DeeperApiError):
    """The fetched markup could not be handed to the document parser."""


class NoDataAvailable(DeeperApiError):
    """A refresh failed and there is no cached data to fall back to."""
