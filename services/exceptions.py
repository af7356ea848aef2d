"""
services/exceptions.py – Structured custom exception hierarchy for FreePlay.

All service-level errors derive from CatalogViewerError so callers can catch
broadly or specifically depending on context.
"""

from typing import Optional


class CatalogViewerError(Exception):
    """Base class for all FreePlay exceptions."""


class CatalogFetchError(CatalogViewerError):
    """Raised when the games list cannot be fetched or decoded."""


class CatalogNetworkError(CatalogFetchError):
    """Raised when the request never produced an HTTP response."""


class CatalogHTTPError(CatalogFetchError):
    """
    Raised when the API answers with a non-2xx status.

    Attributes
    ----------
    status_code : HTTP status returned by the API.
    """

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"HTTP error! Status: {status_code}")
