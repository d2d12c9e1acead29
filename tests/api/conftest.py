"""API test fixtures: FastAPI test client wired to seeded stores.

Invariants:
    - Stores and db manager injected through dependency_overrides
    - The lifespan does not run under ASGITransport; lifespan tests drive it directly
"""

import pytest
from httpx import ASGITransport, AsyncClient

from storefront.api.dependencies import (
    get_db_manager, get_product_store, get_user_store,
)
from storefront.main import app


@pytest.fixture
async def client(db_manager, seeded_users, seeded_products):
    """FastAPI test client with the store dependencies overridden."""
    app.dependency_overrides[get_user_store] = lambda: seeded_users
    app.dependency_overrides[get_product_store] = lambda: seeded_products
    app.dependency_overrides[get_db_manager] = lambda: db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
