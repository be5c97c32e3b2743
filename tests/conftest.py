import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from roomwalk import create_app  # noqa: E402
from roomwalk.layout import LayoutConfig, RoomTemplateCatalog  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True, "LAYOUT_DISABLE_CACHE": False, "SUPPRESS_ROUTE_MAP": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def catalog():
    return RoomTemplateCatalog.default()


@pytest.fixture()
def scenario_config():
    """MinY=0, MaxY=4000, MaxX=3000, step=1000: a 4 row x 5 column grid."""
    return LayoutConfig(move_amount=1000, min_y=0, max_y=4000, max_x=3000, start_x=0, seed=7)


@pytest.fixture(autouse=True)
def _clear_layout_cache():
    """Cached layouts must not leak between tests."""
    from roomwalk.routes import layout_api

    with layout_api._layout_cache_lock:
        layout_api._layout_cache.clear()
    yield


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    from roomwalk import logging_utils

    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    yield
