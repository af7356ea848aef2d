import threading

import shiboken6

from controllers.catalog_controller import detached_loaders, wait_for_detached_loaders
from main_window import MainWindow
from services.card_renderer import LOADING_HTML
from services.settings import ViewerSettings
from workers.catalog_worker import CatalogLoader


def _window(qtbot, loaders):
    window = MainWindow(ViewerSettings(), loader_factory=loaders, fetch_thumbnails=False)
    qtbot.addWidget(window)
    return window


def test_startup_selects_default_category(qtbot, loaders):
    window = _window(qtbot, loaders)

    assert [l.category for l in loaders.loaders] == ["mmorpg"]
    assert window.card_browser.current_html() == LOADING_HTML
    active = [b.text() for b in window.category_buttons if b.isChecked()]
    assert active == ["MMORPG"]


def test_category_button_switches_category(qtbot, loaders, records):
    window = _window(qtbot, loaders)
    shooter = next(b for b in window.category_buttons if b.text() == "Shooter")

    shooter.click()
    loaders.last.succeed(records)

    assert loaders.last.category == "shooter"
    assert window.card_browser.current_html().count('class="game-card"') == len(records)
    active = [b.text() for b in window.category_buttons if b.isChecked()]
    assert active == ["Shooter"]
    assert window.statusBar().currentMessage() == f"{len(records)} shooter games."


def test_error_is_reflected_in_status_bar(qtbot, loaders):
    window = _window(qtbot, loaders)

    loaders.last.fail("API endpoint not found.")

    assert "API endpoint not found." in window.card_browser.current_html()
    assert window.statusBar().currentMessage() == "Load failed."


def test_closing_while_a_fetch_is_blocked_keeps_the_thread_alive(qtbot):
    release = threading.Event()
    started = threading.Event()
    made = []

    def fetch(category, settings=None):
        started.set()
        release.wait(5)
        return []

    def factory(request_id, category, parent):
        loader = CatalogLoader(request_id, category, fetch=fetch, parent=parent)
        made.append(loader)
        return loader

    window = MainWindow(ViewerSettings(), loader_factory=factory, fetch_thumbnails=False)
    window.show()
    assert started.wait(2)

    window.close()
    shiboken6.delete(window)

    loader = made[0]
    assert loader in detached_loaders()
    assert loader.parent() is None
    assert loader.isRunning()

    release.set()
    qtbot.waitUntil(lambda: not detached_loaders(), timeout=3000)


def test_shutdown_also_detaches_stale_running_loaders(qtbot):
    release = threading.Event()
    made = []

    def fetch(category, settings=None):
        release.wait(5)
        return []

    def factory(request_id, category, parent):
        loader = CatalogLoader(request_id, category, fetch=fetch, parent=parent)
        made.append(loader)
        return loader

    window = MainWindow(ViewerSettings(), loader_factory=factory, fetch_thumbnails=False)
    window.show()
    window.controller.select_category("shooter")

    window.close()

    assert made[0] in detached_loaders()
    assert made[1] in detached_loaders()

    release.set()
    wait_for_detached_loaders()
    assert detached_loaders() == []
    shiboken6.delete(window)
