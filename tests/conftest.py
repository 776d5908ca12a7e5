import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from tilegen import create_app  # noqa: E402
from tilegen.routes import layout_api  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_layout_cache():
    """Layouts cached by one test must not satisfy another test's request."""
    with layout_api._layout_cache_lock:
        layout_api._layout_cache.clear()
    yield


@pytest.fixture
def medium_layout():
    """A 40x30 layout for seed 1234 (the default web request size)."""
    from tilegen.layout import LayoutGenerator

    return LayoutGenerator(width=40, height=30, seed=1234).run()
