"""Boundary Protocols: contracts between the HTTP shell and the resource stores.

Invariants:
    - Routes and the seeder depend on these Protocols, never on concrete store classes
    - Every method is async because every implementation does IO
    - Records cross the boundary as plain dicts (the client-facing JSON document)

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol


class SeedableStore(Protocol):
    """Anything the seeder can bootstrap."""
    collection: str

    async def count(self) -> int: ...
    async def insert_many(self, documents: Sequence[Mapping[str, Any]]) -> int: ...


class UserStoreLike(SeedableStore, Protocol):
    """Contract for the auto-ID users collection."""
    async def initialize(self) -> None: ...
    async def next_identifier(self) -> int: ...
    async def create(self, fields: Mapping[str, Any]) -> dict: ...
    async def find_all(
        self, is_active: bool | None = None, min_age: int | None = None,
    ) -> list[dict]: ...
    async def find_one(self, user_id: int) -> dict | None: ...
    async def get(self, user_id: int) -> dict: ...
    async def update(self, user_id: int, fields: Mapping[str, Any]) -> dict: ...
    async def toggle_active(self, user_id: int) -> bool: ...
    async def delete(self, user_id: int) -> None: ...


class ProductStoreLike(SeedableStore, Protocol):
    """Contract for the natural-key products collection."""
    async def initialize(self) -> None: ...
    async def create(self, fields: Mapping[str, Any]) -> dict: ...
    async def find_all(self) -> list[dict]: ...
    async def find_one(self, name: str) -> dict | None: ...
    async def get(self, name: str) -> dict: ...
    async def update(self, name: str, fields: Mapping[str, Any]) -> dict: ...
    async def delete(self, name: str) -> None: ...
