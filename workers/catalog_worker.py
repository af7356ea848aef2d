"""
workers/catalog_worker.py – Background QThread that performs one games-list
request.

Signal contract
---------------
  loaded(int, object) : (request_id, decoded body) on success
  failed(int, str)    : (request_id, user-facing message) on failure

Every loader carries the id it was issued with so the receiver can tell a
stale answer from the latest one.
"""

from typing import Callable, Optional

from PySide6.QtCore import QThread, Signal

from services import catalog_service
from services.exceptions import CatalogViewerError
from services.settings import ViewerSettings

FetchFunction = Callable[..., object]


class CatalogLoader(QThread):
    """
    Runs catalog_service.fetch_games() on a background thread.

    Instantiate, connect signals, then call start().
    """

    # ── Signals ───────────────────────────────────────────────────────────────
    loaded = Signal(int, object)
    failed = Signal(int, str)

    def __init__(
        self,
        request_id: int,
        category: str,
        settings: Optional[ViewerSettings] = None,
        fetch: FetchFunction = catalog_service.fetch_games,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.request_id = request_id
        self.category   = category
        self._settings  = settings
        self._fetch     = fetch

    # ── QThread entry point ───────────────────────────────────────────────────

    def run(self) -> None:
        try:
            data = self._fetch(self.category, settings=self._settings)
        except CatalogViewerError as exc:
            self.failed.emit(self.request_id, catalog_service.describe_error(str(exc)))
        except Exception as exc:  # noqa: BLE001
            # Catch-all so the worker thread never silently dies.
            self.failed.emit(
                self.request_id,
                catalog_service.describe_error(f"{type(exc).__name__}: {exc}"),
            )
        else:
            self.loaded.emit(self.request_id, data)
