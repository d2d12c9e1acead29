"""Storefront API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Stores are built by the lifespan and reach routes only through dependencies
    - Startup order: logging → engine → table/index creation → seeding → serve
    - A StorageFaultError during initialization aborts startup
    - Shutdown always disposes the engine, including on SIGINT

Design Decisions:
    - create_app() factory so tests and scripts can pass their own Settings;
      the module-level ``app`` serves ``uvicorn storefront.main:app``
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__
from storefront.api.error_handlers import register_error_handlers
from storefront.api.routes import health, products, users
from storefront.config import Settings, get_settings
from storefront.core.errors import StorageFaultError
from storefront.infrastructure.database import DatabaseSessionManager
from storefront.infrastructure.observability import setup_logging
from storefront.services.product_store import ProductStore
from storefront.services.seeder import (
    BOOTSTRAP_PRODUCTS, BOOTSTRAP_USERS, seed_if_empty,
)
from storefront.services.user_store import UserStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    user_store = UserStore(db, insert_attempts=settings.user_id_insert_attempts)
    product_store = ProductStore(db)
    try:
        await user_store.initialize()
        await product_store.initialize()
    except StorageFaultError:
        logger.critical("Storage unreachable at startup, aborting")
        await db.dispose()
        raise

    if settings.seed_on_startup:
        await seed_if_empty(user_store, BOOTSTRAP_USERS)
        await seed_if_empty(product_store, BOOTSTRAP_PRODUCTS)

    app.state.db = db
    app.state.user_store = user_store
    app.state.product_store = product_store
    logger.info("Storefront API started")
    try:
        yield
    finally:
        await db.dispose()
        logger.info("Database connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application for the given settings."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Storefront API", version=__version__, lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)

    register_error_handlers(app)
    return app


app = create_app()
