"""Pytest configuration shared by unit and integration tests.

Unit fakes live in tests/unit (fakes.py, conftest.py); the SQLite-backed
models and fixtures live in tests/integration.
"""

import pytest

from search_registry.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from ambient SEARCH_* / DATABASE_* environment."""
    for name in (
        "DATABASE_URL",
        "SEARCH_TYPES",
        "SEARCH_DEFAULT_PRIVATE_KEY",
        "SEARCH_EAGER_LOAD",
        "SEARCH_PRESERVE_HIT_ORDER",
        "DEBUG",
        "APP_NAME",
        "APP_VERSION",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
