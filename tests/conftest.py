"""
Global pytest fixtures for the link shortener test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide isolated in-memory Storage and a LinkManager wired to it
    - Provide a scripted code generator so collision paths are deterministic
    - Provide a storage backend that is always down, for outage handling

Why an app factory?
    Using `create_app()` ensures each test gets fresh in-memory state,
    eliminating cross-test flakiness.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from link_shortener.errors import StoreUnavailableError
from link_shortener.manager.link_manager import LinkManager
from link_shortener.storage.base import BaseStorage
from link_shortener.storage.storage import Storage

DEMO_AUTH = ("link_demo", "link_demo")
ADMIN_AUTH = ("link_admin", "link_admin")


class ScriptedCodes:
    """Code generator that hands out a fixed sequence of candidates."""

    def __init__(self, codes):
        self.codes = list(codes)
        self.calls = 0

    def __call__(self, length=None):
        if self.calls >= len(self.codes):
            raise AssertionError("code generator called more times than scripted")
        code = self.codes[self.calls]
        self.calls += 1
        return code


class DownStorage(BaseStorage):
    """Backend whose every call fails as an unreachable database would."""

    def insert_link(self, link):
        raise StoreUnavailableError()

    def get_link_by_code(self, short_code):
        raise StoreUnavailableError()

    def list_links_for_user(self, user_id):
        raise StoreUnavailableError()

    def delete_link(self, link_id, user_id):
        raise StoreUnavailableError()


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory storage backend."""
    return Storage()


@pytest.fixture
def manager(storage: Storage) -> LinkManager:
    """LinkManager over the storage fixture with default policy (8 chars, 5 attempts)."""
    return LinkManager(storage=storage, code_length=8, max_attempts=5)


@pytest.fixture
def scripted():
    """Factory for ScriptedCodes, e.g. scripted(["code0001", "code0002"])."""
    return ScriptedCodes


@pytest.fixture
def client(storage: Storage) -> TestClient:
    """Fresh TestClient over a new app sharing the storage fixture."""
    return TestClient(create_app(storage=storage))


@pytest.fixture
def down_client() -> TestClient:
    """TestClient over an app whose storage backend is unavailable."""
    return TestClient(create_app(storage=DownStorage()))
