"""
models/catalog_entry.py – Immutable data model for a single games-list record.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class CatalogEntry:
    """
    Represents one game returned by the listing API.

    Attributes
    ----------
    title             : Human-readable game title.
    thumbnail         : Absolute URL of the cover image.
    short_description : One-paragraph blurb.
    genre             : Genre label (e.g. "MMORPG").
    platform          : Platform label (e.g. "PC (Windows)").
    game_url          : Absolute URL of the game's page on the provider.

    Fields the API left out or sent as JSON ``null`` are both ``None``.
    """

    title: Optional[str] = None
    thumbnail: Optional[str] = None
    short_description: Optional[str] = None
    genre: Optional[str] = None
    platform: Optional[str] = None
    game_url: Optional[str] = None

    @classmethod
    def from_api(cls, record: Mapping[str, Any]) -> "CatalogEntry":
        """Build an entry from one decoded API record; extra keys are ignored."""
        return cls(
            title=record.get("title"),
            thumbnail=record.get("thumbnail"),
            short_description=record.get("short_description"),
            genre=record.get("genre"),
            platform=record.get("platform"),
            game_url=record.get("game_url"),
        )

    def __str__(self) -> str:
        return f"{self.title}  [{self.genre} / {self.platform}]"
