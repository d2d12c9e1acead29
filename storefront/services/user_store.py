"""User Store: auto-ID resource store for the users collection.

Invariants:
    - id assigned by the store (max + 1), never taken from a client payload
    - The UNIQUE index on users.id is the only collision guard; a rejected insert
      surfaces as ConflictError("Duplicate ID"), never as a 500
    - Updates strip id and createdAt before applying anything
    - Every operation opens its own session: no transaction spans two calls

Design Decisions:
    - Read-then-derive id assignment kept (max id + 1). Two concurrent creators can
      derive the same id; the loser gets ConflictError. insert_attempts > 1 re-derives
      and retries before giving up.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from storefront.core.documents import (
    CREATED_AT, format_missing, missing_fields, split_fields, strip_protected,
)
from storefront.core.errors import (
    ConflictError, ErrorContext, InvalidInputError, ResourceNotFoundError,
)
from storefront.infrastructure.database import DatabaseSessionManager
from storefront.models.user import UserDocument

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email")
PROTECTED_FIELDS = ("id", CREATED_AT)


class UserStore:
    """Users keyed by a server-assigned, monotonically derived integer id."""

    collection = "users"

    def __init__(self, db: DatabaseSessionManager, insert_attempts: int = 1):
        self._db = db
        self._insert_attempts = max(1, insert_attempts)

    def _context(self, user_id: int | None = None) -> ErrorContext:
        return ErrorContext(
            collection=self.collection,
            record_key=str(user_id) if user_id is not None else None,
        )

    def _not_found(self, user_id: int) -> ResourceNotFoundError:
        return ResourceNotFoundError("User", str(user_id), self._context(user_id))

    async def initialize(self) -> None:
        """Create the users table and its unique id index."""
        await self._db.create_tables(UserDocument.__table__)
        logger.info("User store ready", extra={"collection": self.collection})

    async def count(self) -> int:
        async with self._db.session() as db:
            return await db.scalar(select(func.count()).select_from(UserDocument))

    async def next_identifier(self) -> int:
        """Highest assigned id + 1, or 1 for an empty collection. Not atomic."""
        async with self._db.session() as db:
            last_id = await db.scalar(
                select(UserDocument.id).order_by(UserDocument.id.desc()).limit(1),
            )
        return last_id + 1 if last_id is not None else 1

    async def create(self, fields: Mapping[str, Any]) -> dict:
        missing = missing_fields(fields, REQUIRED_FIELDS)
        if missing:
            raise InvalidInputError(
                format_missing(missing), field=missing[0], context=self._context(),
            )

        for attempt in range(1, self._insert_attempts + 1):
            user_id = await self.next_identifier()
            user = UserDocument(
                id=user_id,
                name=fields["name"],
                email=fields["email"],
                age=fields.get("age") or 0,
                is_active=True,
                created_at=datetime.now(timezone.utc),
                extra={},
            )
            try:
                async with self._db.session() as db:
                    db.add(user)
                    await db.commit()
            except IntegrityError:
                logger.warning(
                    f"User id {user_id} already taken",
                    extra={
                        "collection": self.collection,
                        "record_key": user_id,
                        "attempt": attempt,
                    },
                )
                continue
            logger.info(
                f"Created user {user_id}",
                extra={"collection": self.collection, "record_key": user_id},
            )
            return user.to_document()

        raise ConflictError("Duplicate ID", self._context(user_id))

    async def insert_many(self, documents: Sequence[Mapping[str, Any]]) -> int:
        """Insert pre-identified documents in one commit (used for seeding)."""
        now = datetime.now(timezone.utc)
        rows = []
        for doc in documents:
            columns, extra = split_fields(
                strip_protected(doc, (CREATED_AT,)), {"id": "id", **UserDocument.FIELD_COLUMNS},
            )
            rows.append(UserDocument(**columns, created_at=now, extra=extra))
        try:
            async with self._db.session() as db:
                db.add_all(rows)
                await db.commit()
        except IntegrityError:
            raise ConflictError("Duplicate ID", self._context())
        return len(rows)

    async def find_all(
        self, is_active: bool | None = None, min_age: int | None = None,
    ) -> list[dict]:
        """All users in insertion order, optionally filtered.

        ``min_age`` is exclusive: only users strictly older match.
        """
        query = select(UserDocument).order_by(UserDocument.pk)
        if is_active is not None:
            query = query.where(UserDocument.is_active == is_active)
        if min_age is not None:
            query = query.where(UserDocument.age > min_age)
        async with self._db.session() as db:
            result = await db.execute(query)
            return [user.to_document() for user in result.scalars().all()]

    async def find_one(self, user_id: int) -> dict | None:
        async with self._db.session() as db:
            user = await db.scalar(
                select(UserDocument).where(UserDocument.id == user_id),
            )
        return user.to_document() if user else None

    async def get(self, user_id: int) -> dict:
        user = await self.find_one(user_id)
        if user is None:
            raise self._not_found(user_id)
        return user

    async def update(self, user_id: int, fields: Mapping[str, Any]) -> dict:
        """Apply a partial update and return the full record as stored afterwards."""
        payload = strip_protected(fields, PROTECTED_FIELDS)
        columns, extra = split_fields(payload, UserDocument.FIELD_COLUMNS)

        async with self._db.session() as db:
            user = await db.scalar(
                select(UserDocument).where(UserDocument.id == user_id),
            )
            if user is None:
                raise self._not_found(user_id)

            if columns or extra:
                values = dict(columns)
                if extra:
                    values["extra"] = {**(user.extra or {}), **extra}
                result = await db.execute(
                    update(UserDocument)
                    .where(UserDocument.id == user_id)
                    .values(**values),
                )
                if result.rowcount == 0:
                    raise self._not_found(user_id)
                await db.commit()
                logger.info(
                    f"Updated user {user_id}: {sorted(payload)}",
                    extra={"collection": self.collection, "record_key": user_id},
                )

            refreshed = await db.scalar(
                select(UserDocument)
                .where(UserDocument.id == user_id)
                .execution_options(populate_existing=True),
            )
            if refreshed is None:
                raise self._not_found(user_id)
            return refreshed.to_document()

    async def toggle_active(self, user_id: int) -> bool:
        """Flip isActive and return the new value."""
        async with self._db.session() as db:
            user = await db.scalar(
                select(UserDocument).where(UserDocument.id == user_id),
            )
            if user is None:
                raise self._not_found(user_id)
            new_status = not user.is_active
            result = await db.execute(
                update(UserDocument)
                .where(UserDocument.id == user_id)
                .values(is_active=new_status),
            )
            if result.rowcount == 0:
                raise self._not_found(user_id)
            await db.commit()
        logger.info(
            f"User {user_id} {'activated' if new_status else 'deactivated'}",
            extra={"collection": self.collection, "record_key": user_id},
        )
        return new_status

    async def delete(self, user_id: int) -> None:
        async with self._db.session() as db:
            result = await db.execute(
                delete(UserDocument).where(UserDocument.id == user_id),
            )
            await db.commit()
        if result.rowcount == 0:
            raise self._not_found(user_id)
        logger.info(
            f"Deleted user {user_id}",
            extra={"collection": self.collection, "record_key": user_id},
        )
