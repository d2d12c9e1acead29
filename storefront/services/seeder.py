"""Seeder: one-time bootstrap data for freshly created collections.

Invariants:
    - Inserts only when the collection is empty (count == 0), in a single batch
    - Never raises: a failed seed is logged and the store stays usable, empty
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from storefront.core.repository_protocols import SeedableStore

logger = logging.getLogger(__name__)

BOOTSTRAP_USERS: tuple[dict[str, Any], ...] = (
    {"id": 1, "name": "Rahul", "email": "rahul@example.com", "age": 25, "isActive": True},
    {"id": 2, "name": "Aditi", "email": "aditi@example.com", "age": 30, "isActive": True},
    {"id": 3, "name": "Priya", "email": "priya@example.com", "age": 22, "isActive": False},
    {"id": 4, "name": "Amit", "email": "amit@example.com", "age": 35, "isActive": True},
    {"id": 5, "name": "Sneha", "email": "sneha@example.com", "age": 28, "isActive": False},
)

BOOTSTRAP_PRODUCTS: tuple[dict[str, Any], ...] = (
    {"name": "Laptop", "price": 999.99, "category": "Electronics"},
    {"name": "T-Shirt", "price": 19.99, "category": "Clothing"},
    {"name": "Coffee Mug", "price": 12.50, "category": "Home & Kitchen"},
)


async def seed_if_empty(
    store: SeedableStore, documents: Sequence[Mapping[str, Any]],
) -> int:
    """Insert ``documents`` into ``store`` if it holds no records.

    Returns the number of inserted records, 0 when seeding was skipped or failed.
    """
    try:
        existing = await store.count()
        if existing:
            logger.info(
                f"Skipping seed: {existing} record(s) present",
                extra={"collection": store.collection},
            )
            return 0
        inserted = await store.insert_many(documents)
    except Exception as e:
        logger.error(
            f"Error seeding initial data: {e}",
            extra={"collection": store.collection, "operation": "seed"},
        )
        return 0
    logger.info(
        f"Seeded {inserted} initial record(s)",
        extra={"collection": store.collection},
    )
    return inserted
