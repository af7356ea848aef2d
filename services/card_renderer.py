"""
services/card_renderer.py – Markup for game cards and for each view state.

Produces the HTML subset Qt's rich-text engine understands.  Field values
are inserted verbatim, exactly as the API sent them.

Public API
----------
  truncate_description(text, limit) : hard cut + "..."
  render_card(entry)                : one card fragment
  render_cards(entries)             : all cards, in the given order
  render_state(state)               : full container markup for a UIState
"""

from typing import Iterable, Optional

from models.catalog_entry import CatalogEntry
from models.view_state import Cleared, Empty, Error, Loading, Populated, UIState

# ── Configuration ────────────────────────────────────────────────────────────

DESCRIPTION_LIMIT: int = 50
MISSING_TEXT: str = "undefined"

LOADING_HTML: str = (
    '<div class="status loading"><p class="status-text">Loading Games...</p></div>'
)
EMPTY_HTML: str = (
    '<div class="status empty">'
    '<p class="status-text">No games found for this category.</p></div>'
)
ERROR_TEMPLATE: str = (
    '<div class="status error">'
    '<p class="error-text">Error loading data: {message}</p></div>'
)

_CARD_TEMPLATE = """
<div class="game-card">
  <a href="{game_url}" target="_blank" class="card-link">
    <img src="{thumbnail}" class="card-img" alt="{title}" width="280" />
    <table class="card-body" width="100%">
      <tr>
        <td><h6 class="card-title">{title}</h6></td>
        <td align="right"><span class="free-badge">FREE</span></td>
      </tr>
    </table>
    <p class="card-text">{description}</p>
    <table class="card-footer" width="100%">
      <tr>
        <td><span class="card-genre">{genre}</span></td>
        <td align="right"><span class="card-platform">{platform}</span></td>
      </tr>
    </table>
  </a>
</div>
"""


def _text(value: Optional[str]) -> str:
    return MISSING_TEXT if value is None else str(value)


def truncate_description(text: Optional[str], limit: int = DESCRIPTION_LIMIT) -> str:
    """
    First *limit* characters of *text* followed by ``...``.

    The cut ignores word boundaries and the ellipsis is appended even when
    nothing was removed.
    """
    return f"{_text(text)[:limit]}..."


def render_card(entry: CatalogEntry) -> str:
    """Markup fragment for one game card."""
    return _CARD_TEMPLATE.format(
        game_url=_text(entry.game_url),
        thumbnail=_text(entry.thumbnail),
        title=_text(entry.title),
        description=truncate_description(entry.short_description),
        genre=_text(entry.genre).upper(),
        platform=_text(entry.platform),
    )


def render_cards(entries: Iterable[CatalogEntry]) -> str:
    return "".join(render_card(entry) for entry in entries)


def render_state(state: UIState) -> str:
    """Container markup for *state*."""
    if isinstance(state, Cleared):
        return ""
    if isinstance(state, Loading):
        return LOADING_HTML
    if isinstance(state, Empty):
        return EMPTY_HTML
    if isinstance(state, Populated):
        return render_cards(state.entries)
    if isinstance(state, Error):
        return ERROR_TEMPLATE.format(message=state.message)
    raise TypeError(f"Unknown view state: {state!r}")
