"""Route Dependencies: hand the lifespan-built stores to route handlers.

Invariants:
    - Stores are read from app.state, populated once by the lifespan
    - Tests swap them through app.dependency_overrides
"""

from fastapi import Request

from storefront.core.repository_protocols import ProductStoreLike, UserStoreLike
from storefront.infrastructure.database import DatabaseSessionManager


def get_db_manager(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "db", None)


def get_user_store(request: Request) -> UserStoreLike:
    return request.app.state.user_store


def get_product_store(request: Request) -> ProductStoreLike:
    return request.app.state.product_store
