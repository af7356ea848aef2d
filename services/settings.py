"""
services/settings.py – Runtime configuration for FreePlay.

Defaults live in the configuration block below; each can be overridden from
the environment.  The API key is never stored in the source: without
FREEPLAY_API_KEY the provider answers 401 and the viewer shows its
access-denied message.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

# ── Configuration ────────────────────────────────────────────────────────────

API_URL: str = "https://free-to-play-games-database.p.rapidapi.com/api/games"
API_HOST: str = "free-to-play-games-database.p.rapidapi.com"

# Labels shown in the navigation row; the lower-cased label is the API key.
CATEGORIES: Tuple[str, ...] = (
    "MMORPG",
    "Shooter",
    "Sailing",
    "Permadeath",
    "Superhero",
    "Pixel",
)
DEFAULT_CATEGORY: str = "mmorpg"

HTTP_TIMEOUT: float = 30.0
LOG_LEVEL: str = "INFO"

ENV_PREFIX: str = "FREEPLAY_"


@dataclass(frozen=True)
class ViewerSettings:
    """
    Immutable bundle of everything the viewer needs at runtime.

    Attributes
    ----------
    api_url          : Games listing endpoint (without query string).
    api_host         : Value sent in the ``x-rapidapi-host`` header.
    api_key          : Value sent in the ``x-rapidapi-key`` header.
    default_category : Category selected at startup.
    categories       : Navigation labels, in display order.
    http_timeout     : Seconds before the request is abandoned.
    log_level        : Name of the root logging level.
    """

    api_url: str = API_URL
    api_host: str = API_HOST
    api_key: str = ""
    default_category: str = DEFAULT_CATEGORY
    categories: Tuple[str, ...] = field(default=CATEGORIES)
    http_timeout: float = HTTP_TIMEOUT
    log_level: str = LOG_LEVEL

    def request_headers(self) -> dict:
        return {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": self.api_host,
        }


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ViewerSettings:
    """
    Build settings from defaults plus ``FREEPLAY_*`` environment overrides.

    Parameters
    ----------
    environ : Mapping to read instead of ``os.environ`` (used by tests).
    """
    env = os.environ if environ is None else environ

    def _get(name: str, default: str) -> str:
        value = env.get(ENV_PREFIX + name, "").strip()
        return value or default

    timeout_raw = _get("HTTP_TIMEOUT", str(HTTP_TIMEOUT))
    try:
        timeout = float(timeout_raw)
    except ValueError:
        timeout = HTTP_TIMEOUT

    return ViewerSettings(
        api_url=_get("API_URL", API_URL),
        api_host=_get("API_HOST", API_HOST),
        api_key=_get("API_KEY", ""),
        http_timeout=timeout,
        log_level=_get("LOG_LEVEL", LOG_LEVEL).upper(),
    )
