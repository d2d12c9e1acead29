"""Product Store: natural-key resource store for the products collection.

Invariants:
    - name is unique (UNIQUE index) and doubles as the lookup key
    - A rename never lands on a name held by another product
    - Duplicate-name pre-checks are advisory; the unique index rejection is
      translated to ConflictError, never left as a 500
    - createdAt is stripped from update payloads

Design Decisions:
    - "No changes made" means an empty payload. A payload identical to the stored
      record succeeds unchanged; a record deleted between lookup and write is
      reported as not found.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.documents import (
    CREATED_AT, format_missing, is_absent, missing_fields, split_fields,
    strip_protected,
)
from storefront.core.errors import (
    ConflictError, ErrorContext, InvalidInputError, ResourceNotFoundError,
)
from storefront.infrastructure.database import DatabaseSessionManager
from storefront.models.product import ProductDocument

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "price", "category")


class ProductStore:
    """Products keyed by their client-chosen name."""

    collection = "products"

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    def _context(self, name: str | None = None) -> ErrorContext:
        return ErrorContext(collection=self.collection, record_key=name)

    def _not_found(self, name: str) -> ResourceNotFoundError:
        return ResourceNotFoundError("Product", name, self._context(name))

    async def initialize(self) -> None:
        """Create the products table and its unique name index."""
        await self._db.create_tables(ProductDocument.__table__)
        logger.info("Product store ready", extra={"collection": self.collection})

    async def count(self) -> int:
        async with self._db.session() as db:
            return await db.scalar(select(func.count()).select_from(ProductDocument))

    async def create(self, fields: Mapping[str, Any]) -> dict:
        missing = missing_fields(fields, REQUIRED_FIELDS)
        if missing:
            raise InvalidInputError(
                format_missing(missing),
                field=missing[0], context=self._context(),
            )
        name = fields["name"]

        if await self.find_one(name) is not None:
            raise ConflictError(
                "Product with this name already exists", self._context(name),
            )

        product = ProductDocument(
            name=name,
            price=fields["price"],
            category=fields["category"],
            created_at=datetime.now(timezone.utc),
            extra={},
        )
        try:
            async with self._db.session() as db:
                db.add(product)
                await db.commit()
        except IntegrityError:
            logger.warning(
                f"Product '{name}' inserted concurrently",
                extra={"collection": self.collection, "record_key": name},
            )
            raise ConflictError("Duplicate product name", self._context(name))
        logger.info(
            f"Created product '{name}'",
            extra={"collection": self.collection, "record_key": name},
        )
        return product.to_document()

    async def insert_many(self, documents: Sequence[Mapping[str, Any]]) -> int:
        """Insert documents in one commit (used for seeding)."""
        now = datetime.now(timezone.utc)
        rows = []
        for doc in documents:
            columns, extra = split_fields(
                strip_protected(doc, (CREATED_AT,)), ProductDocument.FIELD_COLUMNS,
            )
            rows.append(ProductDocument(**columns, created_at=now, extra=extra))
        try:
            async with self._db.session() as db:
                db.add_all(rows)
                await db.commit()
        except IntegrityError:
            raise ConflictError("Duplicate product name", self._context())
        return len(rows)

    async def find_all(self) -> list[dict]:
        async with self._db.session() as db:
            result = await db.execute(
                select(ProductDocument).order_by(ProductDocument.pk),
            )
            return [product.to_document() for product in result.scalars().all()]

    async def find_one(self, name: str) -> dict | None:
        async with self._db.session() as db:
            product = await db.scalar(
                select(ProductDocument).where(ProductDocument.name == name),
            )
        return product.to_document() if product else None

    async def get(self, name: str) -> dict:
        product = await self.find_one(name)
        if product is None:
            raise self._not_found(name)
        return product

    async def _name_taken(self, db: AsyncSession, name: str, exclude_pk: int) -> bool:
        """Whether a product other than ``exclude_pk`` already holds ``name``. Advisory."""
        taken = await db.scalar(
            select(ProductDocument.pk).where(
                ProductDocument.name == name,
                ProductDocument.pk != exclude_pk,
            ),
        )
        return taken is not None

    async def update(self, name: str, fields: Mapping[str, Any]) -> dict:
        """Partially update a product, renaming it when the payload carries a new name.

        Returns the record as stored after the write, looked up by its new name
        when it was renamed.
        """
        payload = strip_protected(fields, (CREATED_AT,))
        if "name" in payload and is_absent(payload["name"]):
            raise InvalidInputError(
                "name cannot be empty", field="name", context=self._context(name),
            )
        new_name = payload.get("name", name)
        renamed = new_name != name
        columns, extra = split_fields(payload, ProductDocument.FIELD_COLUMNS)

        try:
            async with self._db.session() as db:
                product = await db.scalar(
                    select(ProductDocument).where(ProductDocument.name == name),
                )
                if product is None:
                    raise self._not_found(name)
                if not payload:
                    raise InvalidInputError("No changes made", context=self._context(name))

                if renamed and await self._name_taken(db, new_name, product.pk):
                    raise ConflictError(
                        "Product name already in use by another product",
                        self._context(new_name),
                    )

                values = dict(columns)
                if extra:
                    values["extra"] = {**(product.extra or {}), **extra}
                result = await db.execute(
                    update(ProductDocument)
                    .where(ProductDocument.name == name)
                    .values(**values),
                )
                if result.rowcount == 0:
                    raise self._not_found(name)
                await db.commit()

                updated = await db.scalar(
                    select(ProductDocument)
                    .where(ProductDocument.name == new_name)
                    .execution_options(populate_existing=True),
                )
                if updated is None:
                    raise self._not_found(new_name)
        except IntegrityError:
            logger.warning(
                f"Rename of '{name}' to '{new_name}' rejected by unique index",
                extra={"collection": self.collection, "record_key": name},
            )
            raise ConflictError("Product name already exists", self._context(new_name))

        if renamed:
            logger.info(
                f"Renamed product '{name}' to '{new_name}'",
                extra={"collection": self.collection, "record_key": new_name},
            )
        else:
            logger.info(
                f"Updated product '{name}': {sorted(payload)}",
                extra={"collection": self.collection, "record_key": name},
            )
        return updated.to_document()

    async def delete(self, name: str) -> None:
        async with self._db.session() as db:
            result = await db.execute(
                delete(ProductDocument).where(ProductDocument.name == name),
            )
            await db.commit()
        if result.rowcount == 0:
            raise self._not_found(name)
        logger.info(
            f"Deleted product '{name}'",
            extra={"collection": self.collection, "record_key": name},
        )
