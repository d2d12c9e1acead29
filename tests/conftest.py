"""Root conftest: shared test configuration and store fixtures.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - Stores are initialized (tables + unique indexes) before use
    - seeded_* fixtures load the bootstrap dataset, so ids 1..5 and the three
      products exist
"""

import os

import pytest

# Must be set before storefront.main builds the module-level app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from storefront.infrastructure.database import DatabaseSessionManager  # noqa: E402
from storefront.services.product_store import ProductStore  # noqa: E402
from storefront.services.seeder import BOOTSTRAP_PRODUCTS, BOOTSTRAP_USERS  # noqa: E402
from storefront.services.user_store import UserStore  # noqa: E402


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'store.db'}"


@pytest.fixture
async def db_manager(database_url):
    manager = DatabaseSessionManager(database_url)
    yield manager
    await manager.dispose()


@pytest.fixture
async def user_store(db_manager):
    store = UserStore(db_manager)
    await store.initialize()
    return store


@pytest.fixture
async def product_store(db_manager):
    store = ProductStore(db_manager)
    await store.initialize()
    return store


@pytest.fixture
async def seeded_users(user_store):
    await user_store.insert_many(BOOTSTRAP_USERS)
    return user_store


@pytest.fixture
async def seeded_products(product_store):
    await product_store.insert_many(BOOTSTRAP_PRODUCTS)
    return product_store
