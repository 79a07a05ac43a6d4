"""Exception types raised by the search pipeline."""

from typing import Optional


class LitSearchError(Exception):
    """Base class for all litsearch errors."""


class RemoteAccessError(LitSearchError):
    """NCBI request or response handling failed (timeout, HTTP status, transport, parse)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidInputError(LitSearchError, ValueError):
    """User-supplied tool argument rejected before any remote call."""


class StorageError(LitSearchError):
    """Search history store could not be read or written."""
