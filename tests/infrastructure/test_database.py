"""Database Session Manager: verifies error mapping, rollback and health checks.

Invariants:
    - Operational/driver errors leave the session as StorageFaultError
    - IntegrityError passes through untranslated for the stores to map
    - health_check never raises
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError

from storefront.core.errors import StorageFaultError
from storefront.infrastructure.database import DatabaseSessionManager
from storefront.models import UserDocument


async def test_operational_error_becomes_storage_fault(db_manager):
    with pytest.raises(StorageFaultError) as exc_info:
        async with db_manager.session():
            raise OperationalError("SELECT 1", {}, Exception("connection reset"))
    assert exc_info.value.operation == "execute"
    assert "connection reset" not in exc_info.value.message


async def test_integrity_error_passes_through(db_manager):
    with pytest.raises(IntegrityError):
        async with db_manager.session():
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))


async def test_create_tables_is_idempotent(db_manager):
    await db_manager.create_tables(UserDocument.__table__)
    await db_manager.create_tables(UserDocument.__table__)
    async with db_manager.session() as db:
        assert await db.scalar(text("SELECT COUNT(*) FROM users")) == 0


async def test_create_tables_unreachable_storage(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}",
    )
    with pytest.raises(StorageFaultError) as exc_info:
        await manager.create_tables(UserDocument.__table__)
    assert exc_info.value.operation == "connect"
    await manager.dispose()


async def test_health_check_true_for_live_database(db_manager):
    assert await db_manager.health_check() is True


async def test_health_check_false_when_unreachable(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}",
    )
    assert await manager.health_check() is False
    await manager.dispose()


async def test_uncommitted_writes_discarded_on_error(db_manager, user_store):
    with pytest.raises(StorageFaultError):
        async with db_manager.session() as db:
            db.add(UserDocument(id=1, name="Ghost", email="g@x.com"))
            await db.flush()
            raise OperationalError("INSERT", {}, Exception("lost connection"))
    assert await user_store.count() == 0
