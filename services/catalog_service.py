"""
services/catalog_service.py – The single games-listing request.

One GET per category against the free-to-play games API.  Failures are
translated into the FreePlay exception hierarchy; the decoded body is handed
back untouched so the caller decides whether it holds anything to show.
"""

import logging
from typing import Any, Optional

import httpx

from services.exceptions import (
    CatalogFetchError,
    CatalogHTTPError,
    CatalogNetworkError,
)
from services.settings import ViewerSettings, load_settings

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE: str = "Access denied. Please check your API key."
NOT_FOUND_MESSAGE: str = "API endpoint not found."

# ── Public API ───────────────────────────────────────────────────────────────


def fetch_games(
    category: str,
    *,
    settings: Optional[ViewerSettings] = None,
    client: Optional[httpx.Client] = None,
) -> Any:
    """
    Request the games list for *category*.

    Parameters
    ----------
    category : Category key sent verbatim as the ``category`` query parameter.
    settings : Endpoint, credentials and timeout; loaded from the environment
               when omitted.
    client   : Pre-built ``httpx.Client``; a short-lived one is used otherwise.

    Returns
    -------
    The decoded JSON body – normally a list of game records, possibly empty.

    Raises
    ------
    CatalogHTTPError    on a non-2xx response.
    CatalogNetworkError on transport failure.
    CatalogFetchError   when the body is not valid JSON.
    """
    settings = settings or load_settings()
    logger.info("Requesting games for category '%s'", category)

    if client is not None:
        return _request(client, category, settings)
    with httpx.Client(timeout=settings.http_timeout) as owned:
        return _request(owned, category, settings)


def describe_error(message: str) -> str:
    """
    Turn a failure message into the text shown to the user.

    Only 401 and 404 are recognised, by looking for the status code in the
    message; anything else is shown as-is.
    """
    if "401" in message:
        return ACCESS_DENIED_MESSAGE
    if "404" in message:
        return NOT_FOUND_MESSAGE
    return message


# ── Private helpers ───────────────────────────────────────────────────────────


def _request(client: httpx.Client, category: str, settings: ViewerSettings) -> Any:
    # The provider's docs are unclear on ``category`` versus ``tag``.
    try:
        response = client.get(
            settings.api_url,
            params={"category": category},
            headers=settings.request_headers(),
            timeout=settings.http_timeout,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.warning("Games request for '%s' failed with HTTP %s", category, status)
        raise CatalogHTTPError(status) from exc
    except httpx.RequestError as exc:
        logger.warning("Network error requesting '%s': %s", category, exc)
        raise CatalogNetworkError(f"Network error while fetching games: {exc}") from exc

    try:
        return response.json()
    except ValueError as exc:
        raise CatalogFetchError(f"Games API returned an unreadable body: {exc}") from exc
