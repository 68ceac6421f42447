"""Root-level pytest fixtures for all tests."""

import pytest
from test_helpers import FakeClient, reset_all_globals

from utils.cache_store import CacheStore


@pytest.fixture(autouse=True)
def reset_global_state(tmp_path, monkeypatch):
    """Point the default cache at a temp dir and reset singletons after each test."""
    monkeypatch.setenv("ARKHAM_PROXIES_CACHE_DIR", str(tmp_path / "default-cache"))
    yield
    reset_all_globals()


@pytest.fixture
def cache_store(tmp_path) -> CacheStore:
    return CacheStore(tmp_path / "cache")


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
