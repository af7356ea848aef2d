"""
main_window.py – FreePlay main window.

Layout
------
  ┌──────────────────────────────────────────────────────┐
  │  [MMORPG] [Shooter] [Sailing] [Permadeath] …         │  ← category bar
  ├──────────────────────────────────────────────────────┤
  │                                                      │
  │  Card browser (QTextBrowser)                         │
  │                                                      │
  ├──────────────────────────────────────────────────────┤
  │  Status bar                                          │
  └──────────────────────────────────────────────────────┘
"""

from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import Slot
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from controllers.catalog_controller import CatalogViewController, LoaderFactory
from models.view_state import Cleared, Empty, Error, Loading, Populated, UIState
from services.settings import ViewerSettings, load_settings
from widgets.card_browser import CardBrowser

# ── Colour palette ─────────────────────────────────────────────────────────────
_BG         = "#0f1117"
_BG2        = "#1a1d27"
_BG3        = "#22263a"
_ACCENT     = "#4f8ef7"
_TEXT       = "#e2e8f0"
_TEXT_DIM   = "#718096"
_BORDER     = "#2d3748"

_STYLESHEET = f"""
QMainWindow, QWidget {{
    background-color: {_BG};
    color: {_TEXT};
    font-family: 'Segoe UI', 'Consolas', monospace;
    font-size: 13px;
}}

/* ── Title ──────────────────────────────────────────────────────────────── */
QLabel#brand {{
    font-size: 20px;
    font-weight: bold;
    color: {_TEXT};
}}

/* ── Category bar ───────────────────────────────────────────────────────── */
QPushButton[role="category"] {{
    background-color: transparent;
    border: none;
    border-bottom: 2px solid transparent;
    padding: 8px 14px;
    color: {_TEXT_DIM};
    text-transform: uppercase;
}}
QPushButton[role="category"]:hover {{
    color: {_TEXT};
}}
QPushButton[role="category"][active="true"] {{
    color: {_ACCENT};
    border-bottom-color: {_ACCENT};
}}

/* ── Card browser ───────────────────────────────────────────────────────── */
QTextBrowser#cardBrowser {{
    background-color: {_BG};
    border: 1px solid {_BORDER};
    border-radius: 6px;
    padding: 8px;
}}

/* ── Scrollbars ─────────────────────────────────────────────────────────── */
QScrollBar:vertical {{
    width: 8px;
    background: {_BG};
    border: none;
}}
QScrollBar::handle:vertical {{
    background: {_BG3};
    border-radius: 4px;
    min-height: 20px;
}}
QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
    height: 0;
}}

/* ── Status bar ─────────────────────────────────────────────────────────── */
QStatusBar {{
    background: {_BG2};
    color: {_TEXT_DIM};
    border-top: 1px solid {_BORDER};
    font-size: 11px;
}}
"""


class MainWindow(QMainWindow):
    """Primary application window."""

    def __init__(
        self,
        settings: Optional[ViewerSettings] = None,
        *,
        loader_factory: Optional[LoaderFactory] = None,
        fetch_thumbnails: bool = True,
    ) -> None:
        super().__init__()
        self._settings = settings or load_settings()
        self.setWindowTitle("FreePlay  ·  Free-to-Play Games")
        self.setMinimumSize(760, 560)
        self.resize(1100, 780)
        self.setStyleSheet(_STYLESHEET)

        self._category_buttons: List[QPushButton] = []
        self._build_ui(fetch_thumbnails)

        self.controller = CatalogViewController(
            self._card_browser,
            loader_factory=loader_factory,
            settings=self._settings,
            parent=self,
        )
        self.controller.state_changed.connect(self._on_state_changed)
        self.controller.attach_category_controls(self._category_buttons)
        self._select_default()

    # ── UI construction ───────────────────────────────────────────────────────

    def _build_ui(self, fetch_thumbnails: bool) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        root_layout = QVBoxLayout(root)
        root_layout.setContentsMargins(24, 16, 24, 16)
        root_layout.setSpacing(12)

        # ── Zone A: Category bar ───────────────────────────────────────────
        bar = QHBoxLayout()
        bar.setSpacing(4)
        brand = QLabel("FreePlay")
        brand.setObjectName("brand")
        bar.addWidget(brand)
        bar.addStretch()
        for label in self._settings.categories:
            button = QPushButton(label)
            button.setProperty("role", "category")
            button.setProperty("active", False)
            bar.addWidget(button)
            self._category_buttons.append(button)
        root_layout.addLayout(bar)

        # ── Zone B: Cards ──────────────────────────────────────────────────
        self._card_browser = CardBrowser(fetch_thumbnails=fetch_thumbnails)
        root_layout.addWidget(self._card_browser, stretch=1)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

    def _select_default(self) -> None:
        default = self._settings.default_category
        button = self.controller.control_for(default)
        if button is not None:
            self.controller.mark_active(button)
        self.controller.select_category(default)

    # ── Accessors ─────────────────────────────────────────────────────────────

    @property
    def card_browser(self) -> CardBrowser:
        return self._card_browser

    @property
    def category_buttons(self) -> List[QPushButton]:
        return list(self._category_buttons)

    # ── Slots ─────────────────────────────────────────────────────────────────

    @Slot(object)
    def _on_state_changed(self, state: UIState) -> None:
        if isinstance(state, Loading):
            self._set_status(f"Loading {state.category} games…")
        elif isinstance(state, Populated):
            self._set_status(f"{len(state.entries)} {state.category} games.")
        elif isinstance(state, Empty):
            self._set_status(f"No {state.category} games.")
        elif isinstance(state, Error):
            self._set_status("Load failed.")
        elif isinstance(state, Cleared):
            self._set_status("")

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 – Qt override
        self.controller.shutdown()
        super().closeEvent(event)

    # ── UI helpers ────────────────────────────────────────────────────────────

    def _set_status(self, msg: str) -> None:
        self._status_bar.showMessage(msg)
