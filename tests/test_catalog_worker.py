from services.catalog_service import ACCESS_DENIED_MESSAGE
from services.exceptions import CatalogHTTPError, CatalogNetworkError
from workers.catalog_worker import CatalogLoader


def _run(loader: CatalogLoader):
    loaded, failed = [], []
    loader.loaded.connect(lambda rid, data: loaded.append((rid, data)))
    loader.failed.connect(lambda rid, msg: failed.append((rid, msg)))
    loader.run()
    return loaded, failed


def test_success_emits_loaded_with_request_id(qtbot, records):
    calls = []

    def fetch(category, settings=None):
        calls.append(category)
        return records

    loaded, failed = _run(CatalogLoader(7, "shooter", fetch=fetch))

    assert calls == ["shooter"]
    assert loaded == [(7, records)]
    assert failed == []


def test_http_401_emits_access_denied(qtbot):
    def fetch(category, settings=None):
        raise CatalogHTTPError(401)

    loaded, failed = _run(CatalogLoader(2, "shooter", fetch=fetch))

    assert loaded == []
    assert failed == [(2, ACCESS_DENIED_MESSAGE)]


def test_network_error_message_is_passed_through(qtbot):
    def fetch(category, settings=None):
        raise CatalogNetworkError("Network error while fetching games: timed out")

    _, failed = _run(CatalogLoader(3, "pixel", fetch=fetch))

    assert failed == [(3, "Network error while fetching games: timed out")]


def test_unexpected_exception_is_reported_not_raised(qtbot):
    def fetch(category, settings=None):
        raise RuntimeError("boom")

    _, failed = _run(CatalogLoader(4, "pixel", fetch=fetch))

    assert failed == [(4, "RuntimeError: boom")]
