"""Shared pytest fixtures.

Each test gets a fresh app (and therefore a fresh session registry), so
stores never leak between tests. The reference date for period filters is
pinned through ``app.dependency_overrides``.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from finance_tracker.config import Settings
from finance_tracker.deps import get_today
from finance_tracker.main import create_app

from tests.helpers import TODAY


@pytest.fixture
def app():
    app = create_app(Settings(seed_data=True))
    app.dependency_overrides[get_today] = lambda: TODAY
    return app


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c
