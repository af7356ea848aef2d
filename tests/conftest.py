import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import List  # noqa: E402

import pytest  # noqa: E402
from PySide6.QtCore import QObject, Signal  # noqa: E402

from models.catalog_entry import CatalogEntry  # noqa: E402


class FakeContainer:
    """Stands in for the card browser; remembers every markup it was given."""

    def __init__(self) -> None:
        self.history: List[str] = []

    def setHtml(self, html: str) -> None:  # noqa: N802
        self.history.append(html)

    @property
    def html(self) -> str:
        return self.history[-1] if self.history else ""


class FakeLoader(QObject):
    """Loader that only answers when the test tells it to."""

    loaded = Signal(int, object)
    failed = Signal(int, str)

    def __init__(self, request_id: int, category: str, parent=None) -> None:
        super().__init__(parent)
        self.request_id = request_id
        self.category = category
        self.started = False

    def start(self) -> None:
        self.started = True

    def succeed(self, data) -> None:
        self.loaded.emit(self.request_id, data)

    def fail(self, message: str) -> None:
        self.failed.emit(self.request_id, message)


class LoaderRecorder:
    def __init__(self) -> None:
        self.loaders: List[FakeLoader] = []

    def __call__(self, request_id: int, category: str, parent: QObject) -> FakeLoader:
        loader = FakeLoader(request_id, category, parent)
        self.loaders.append(loader)
        return loader

    @property
    def last(self) -> FakeLoader:
        return self.loaders[-1]


@pytest.fixture
def container():
    return FakeContainer()


@pytest.fixture
def loaders():
    return LoaderRecorder()


def make_record(index: int, **overrides) -> dict:
    record = {
        "id": index,
        "title": f"Game {index}",
        "thumbnail": f"https://www.freetogame.com/g/{index}/thumbnail.jpg",
        "short_description": f"Description of game number {index}.",
        "genre": "MMORPG",
        "platform": "PC (Windows)",
        "game_url": f"https://www.freetogame.com/open/game-{index}",
        "publisher": "Someone",
    }
    record.update(overrides)
    return record


@pytest.fixture
def records():
    return [make_record(i) for i in range(1, 4)]


@pytest.fixture
def entry():
    return CatalogEntry.from_api(make_record(1))
