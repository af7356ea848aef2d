"""
controllers/catalog_controller.py – Owns the card region and drives the
select → loading → cards / empty / error cycle.

The controller never touches widgets beyond two seams:
  * the container, any object with ``setHtml(str)``
  * the category controls, checkable Qt buttons
which keeps it drivable from tests with stand-ins.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import QAbstractButton

from models.catalog_entry import CatalogEntry
from models.view_state import Cleared, Empty, Error, Loading, Populated, UIState
from services.card_renderer import render_state
from services.settings import ViewerSettings
from workers.catalog_worker import CatalogLoader

logger = logging.getLogger(__name__)

# (request_id, category, parent) -> object with loaded/failed signals and start()
LoaderFactory = Callable[[int, str, QObject], QObject]


def default_loader_factory(settings: Optional[ViewerSettings] = None) -> LoaderFactory:
    """Factory producing real CatalogLoader threads parented to the controller."""

    def _make(request_id: int, category: str, parent: QObject) -> CatalogLoader:
        return CatalogLoader(request_id, category, settings=settings, parent=parent)

    return _make


def _is_running(loader: QObject) -> bool:
    is_running = getattr(loader, "isRunning", None)
    return bool(is_running and is_running())


def _dispose(loader: QObject) -> None:
    # finished() fires just before the thread returns; wait() closes that gap.
    wait = getattr(loader, "wait", None)
    if wait is not None:
        wait()
    loader.deleteLater()


class _DetachedLoaders(QObject):
    """
    Keeps loaders alive after their controller is gone.

    A QThread destroyed while running aborts the process, so loaders still
    busy at shutdown are unparented and held here until they finish.
    """

    def __init__(self) -> None:
        super().__init__()
        self._loaders: List[QObject] = []

    def adopt(self, loader: QObject) -> None:
        loader.setParent(None)
        self._loaders.append(loader)
        loader.finished.connect(self._reap)

    def loaders(self) -> List[QObject]:
        return list(self._loaders)

    def wait_all(self) -> None:
        """Block until every adopted loader has returned; bounded by the HTTP timeout."""
        for loader in list(self._loaders):
            loader.wait()
        self._reap()

    @Slot()
    def _reap(self) -> None:
        for loader in [l for l in self._loaders if not _is_running(l)]:
            self._loaders.remove(loader)
            _dispose(loader)


_detached: Optional[_DetachedLoaders] = None


def _detached_registry() -> _DetachedLoaders:
    global _detached
    if _detached is None:
        _detached = _DetachedLoaders()
    return _detached


def detached_loaders() -> List[QObject]:
    """Loaders handed over by shutdown() that have not finished yet."""
    return _detached.loaders() if _detached is not None else []


def wait_for_detached_loaders() -> None:
    if _detached is not None:
        _detached.wait_all()


class CatalogViewController(QObject):
    """
    Fetches the games list for a category and renders it into *container*.

    Only the most recently issued request may update the container; answers
    to older requests are dropped when they arrive.
    """

    state_changed = Signal(object)

    def __init__(
        self,
        container,
        loader_factory: Optional[LoaderFactory] = None,
        settings: Optional[ViewerSettings] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._container = container
        self._loader_factory = loader_factory or default_loader_factory(settings)
        self._state: UIState = Cleared()
        self._latest_request = 0
        self._pending: Dict[int, QObject] = {}
        self._running: List[QObject] = []
        self._controls: List[QAbstractButton] = []
        self._handlers: List[Tuple[QAbstractButton, Callable]] = []

    # ── Public API ────────────────────────────────────────────────────────────

    @property
    def state(self) -> UIState:
        return self._state

    @property
    def latest_request(self) -> int:
        return self._latest_request

    def select_category(self, category: str) -> int:
        """
        Clear the region, show the loading indicator and request *category*.

        Returns the id assigned to the request.
        """
        self._show(Cleared())
        self._show(Loading(category))

        self._latest_request += 1
        request_id = self._latest_request
        loader = self._loader_factory(request_id, category, self)
        loader.loaded.connect(self._on_loaded)
        loader.failed.connect(self._on_failed)
        finished = getattr(loader, "finished", None)
        if finished is not None:
            finished.connect(self._reap_loaders)
        self._pending[request_id] = loader
        self._running.append(loader)
        logger.debug("Issued request #%d for '%s'", request_id, category)
        loader.start()
        return request_id

    def attach_category_controls(self, controls: Sequence[QAbstractButton]) -> None:
        """
        Make each control select its (lower-cased) label when clicked.

        Controls from an earlier call are detached first.
        """
        for control, handler in self._handlers:
            control.clicked.disconnect(handler)
        self._handlers = []

        self._controls = list(controls)
        for control in self._controls:
            control.setCheckable(True)
            handler = lambda _checked=False, c=control: self._on_control_clicked(c)  # noqa: E731
            control.clicked.connect(handler)
            self._handlers.append((control, handler))

    def mark_active(self, control: QAbstractButton) -> None:
        """Flag *control* as the active category and every other control as not."""
        for other in self._controls:
            _set_active(other, other is control)
        if control not in self._controls:
            _set_active(control, True)

    def control_for(self, category: str) -> Optional[QAbstractButton]:
        for control in self._controls:
            if control.text().lower() == category.lower():
                return control
        return None

    def shutdown(self) -> None:
        """Hand loaders that are still running, stale ones included, to the detached registry."""
        for loader in list(self._running):
            if _is_running(loader):
                self._running.remove(loader)
                _detached_registry().adopt(loader)
        self._pending.clear()

    # ── Slots ─────────────────────────────────────────────────────────────────

    def _on_control_clicked(self, control: QAbstractButton) -> None:
        self.mark_active(control)
        self.select_category(control.text().lower())

    @Slot(int, object)
    def _on_loaded(self, request_id: int, data: object) -> None:
        category = self._finish(request_id)
        if category is None:
            return
        if not isinstance(data, list) or not data:
            self._show(Empty(category))
            return
        entries = tuple(
            CatalogEntry.from_api(record) if isinstance(record, Mapping) else CatalogEntry()
            for record in data
        )
        self._show(Populated(category, entries))

    @Slot(int, str)
    def _on_failed(self, request_id: int, message: str) -> None:
        if self._finish(request_id) is None:
            return
        self._show(Error(message))

    @Slot()
    def _reap_loaders(self) -> None:
        for loader in [l for l in self._running if not _is_running(l)]:
            self._running.remove(loader)
            _dispose(loader)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _finish(self, request_id: int) -> Optional[str]:
        """Forget the loader; return its category, or None if the answer is stale."""
        loader = self._pending.pop(request_id, None)
        if request_id != self._latest_request:
            logger.debug(
                "Discarding stale response #%d (latest is #%d)",
                request_id,
                self._latest_request,
            )
            return None
        return getattr(loader, "category", None) or self._current_category()

    def _current_category(self) -> str:
        state = self._state
        return getattr(state, "category", "")

    def _show(self, state: UIState) -> None:
        self._state = state
        self._container.setHtml(render_state(state))
        self.state_changed.emit(state)


def _set_active(control: QAbstractButton, active: bool) -> None:
    control.setChecked(active)
    control.setProperty("active", active)
    # Dynamic properties only restyle after a re-polish.
    style = control.style()
    style.unpolish(control)
    style.polish(control)
