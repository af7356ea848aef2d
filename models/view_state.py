"""
models/view_state.py – The states the card region can be in.

The region is always showing exactly one of these; the controller swaps them
and services/card_renderer.render_state() turns each into markup.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

from models.catalog_entry import CatalogEntry


@dataclass(frozen=True)
class Cleared:
    """Nothing shown; only observed between a selection and its loading state."""


@dataclass(frozen=True)
class Loading:
    category: str = ""


@dataclass(frozen=True)
class Populated:
    category: str
    entries: Tuple[CatalogEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Empty:
    category: str = ""


@dataclass(frozen=True)
class Error:
    message: str


UIState = Union[Cleared, Loading, Populated, Empty, Error]
