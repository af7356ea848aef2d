"""
widgets/card_browser.py – Rich-text region that displays the game cards.

Qt's rich-text engine does not fetch remote images by itself, so thumbnails
are downloaded on the global QThreadPool and the current markup is laid out
again once they arrive.  Card links open in the system web browser.
"""

import logging
from typing import Dict, Optional, Set

import httpx
from PySide6.QtCore import QObject, QRunnable, QThreadPool, QTimer, QUrl, Signal, Slot
from PySide6.QtGui import QImage, QTextDocument
from PySide6.QtWidgets import QTextBrowser, QWidget

logger = logging.getLogger(__name__)

# ── Configuration ────────────────────────────────────────────────────────────

THUMBNAIL_TIMEOUT: float = 15.0
RELAYOUT_DELAY_MS: int = 150

_BG2      = "#1a1d27"
_ACCENT   = "#4f8ef7"
_TEXT     = "#e2e8f0"
_TEXT_DIM = "#718096"
_ERROR    = "#fc8181"

_DOCUMENT_CSS = f"""
a.card-link {{ color: {_TEXT}; text-decoration: none; }}
div.game-card {{ background-color: {_BG2}; margin-bottom: 16px; padding: 12px; }}
h6.card-title {{ color: {_TEXT}; font-size: 14px; }}
span.free-badge {{ background-color: {_ACCENT}; color: white; font-weight: bold; }}
p.card-text {{ color: {_TEXT_DIM}; }}
span.card-genre, span.card-platform {{ color: {_TEXT_DIM}; font-size: 11px; }}
p.status-text {{ color: {_TEXT}; font-size: 20px; }}
p.error-text {{ color: {_ERROR}; font-size: 18px; }}
"""


class _ThumbnailSignals(QObject):
    done = Signal(str, object)
    failed = Signal(str)


class _ThumbnailTask(QRunnable):
    def __init__(self, url: str) -> None:
        super().__init__()
        self.url = url
        self.signals = _ThumbnailSignals()

    def run(self) -> None:
        try:
            response = httpx.get(self.url, timeout=THUMBNAIL_TIMEOUT, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Could not load thumbnail %s: %s", self.url, exc)
            self.signals.failed.emit(self.url)
            return
        self.signals.done.emit(self.url, response.content)


class CardBrowser(QTextBrowser):
    """
    Card container.  Accepts markup through setHtml() like any QTextBrowser.

    Parameters
    ----------
    fetch_thumbnails : When False remote images are never requested.
    thread_pool      : Pool running the downloads; the global pool by default.
    """

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        fetch_thumbnails: bool = True,
        thread_pool: Optional[QThreadPool] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("cardBrowser")
        self.setOpenExternalLinks(True)
        self.setReadOnly(True)
        self.document().setDefaultStyleSheet(_DOCUMENT_CSS)

        self._fetch_thumbnails = fetch_thumbnails
        self._pool = thread_pool or QThreadPool.globalInstance()
        self._html = ""
        self._images: Dict[str, QImage] = {}
        self._requested: Set[str] = set()
        self._tasks: Dict[str, _ThumbnailTask] = {}

        self._relayout_timer = QTimer(self)
        self._relayout_timer.setSingleShot(True)
        self._relayout_timer.setInterval(RELAYOUT_DELAY_MS)
        self._relayout_timer.timeout.connect(self._relayout)

    def setHtml(self, html: str) -> None:  # noqa: N802 – Qt override
        self._html = html
        super().setHtml(html)

    def current_html(self) -> str:
        """The markup last given to setHtml(), before Qt normalises it."""
        return self._html

    def loadResource(self, resource_type: int, url: QUrl):  # noqa: N802 – Qt override
        key = url.toString()
        is_image = resource_type == QTextDocument.ResourceType.ImageResource.value
        if is_image and url.scheme() in ("http", "https"):
            image = self._images.get(key)
            if image is not None:
                return image
            self._request_thumbnail(key)
        return super().loadResource(resource_type, url)

    # ── Thumbnails ────────────────────────────────────────────────────────────

    def _request_thumbnail(self, url: str) -> None:
        if not self._fetch_thumbnails or url in self._requested:
            return
        self._requested.add(url)
        task = _ThumbnailTask(url)
        task.signals.done.connect(self._on_thumbnail_done)
        task.signals.failed.connect(self._on_thumbnail_failed)
        self._tasks[url] = task
        self._pool.start(task)

    @Slot(str, object)
    def _on_thumbnail_done(self, url: str, data: bytes) -> None:
        self._tasks.pop(url, None)
        image = QImage.fromData(data)
        if image.isNull():
            logger.warning("Thumbnail %s is not a readable image", url)
            return
        self._images[url] = image
        self._relayout_timer.start()

    @Slot(str)
    def _on_thumbnail_failed(self, url: str) -> None:
        self._tasks.pop(url, None)

    @Slot()
    def _relayout(self) -> None:
        bar = self.verticalScrollBar()
        position = bar.value()
        super().setHtml(self._html)
        # pageCount() finishes the layout, so the scroll range is current again.
        self.document().pageCount()
        bar.setValue(position)
