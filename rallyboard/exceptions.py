"""Exceptions raised inside rallyboard.

None of these ever reach an HTTP client: the sync loop catches them and logs.
"""

from typing import Optional


class RallyboardError(Exception):
    """Base class for rallyboard errors."""


class RemoteFetchError(RallyboardError):
    """The remote source could not be read or did not return JSON."""

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url
