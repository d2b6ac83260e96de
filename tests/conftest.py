"""
Shared pytest fixtures: a fresh store per test and an HTTP client bound to it.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from userstore.app import create_app
from userstore.store import UserStore


@pytest.fixture
def store() -> UserStore:
    return UserStore()


@pytest.fixture
def client(store: UserStore) -> TestClient:
    return TestClient(create_app(store))
