"""Pytest configuration and fixtures."""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from shorturl.core.exceptions import StorageError
from shorturl.core.setting import Settings
from shorturl.db import KeyValueStore, MemoryStore
from shorturl.main import create_app

TEST_BASE_URL = "http://localhost:8787"


class FailingStore(KeyValueStore):
    """Store whose reads and/or writes always fail."""

    def __init__(self, fail_get: bool = True, fail_put: bool = True):
        self.fail_get = fail_get
        self.fail_put = fail_put
        self.data = {}

    async def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise StorageError(f"failed to read '{key}'")
        return self.data.get(key)

    async def put(self, key: str, value: str) -> None:
        if self.fail_put:
            raise StorageError(f"failed to write '{key}'")
        self.data[key] = value

    async def list(self, prefix: Optional[str] = None) -> List[str]:
        return sorted(self.data)

    async def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None


def make_settings(**overrides) -> Settings:
    values = {
        "ENVIRONMENT": "test",
        "BASE_URL": TEST_BASE_URL,
        "STORAGE_BACKEND": "memory",
        "RATE_LIMIT_ENABLED": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(settings, store):
    """TestClient for an app backed by an in-memory store."""
    app = create_app(settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456?tab=votes#answer",
    ]
