"""User ORM: one row per user document in the auto-ID collection.

Invariants:
    - pk is an internal surrogate (insertion order), never exposed to clients
    - id carries a UNIQUE index: the storage layer is the final arbiter of id uniqueness
    - created_at set once at insert, never written by updates
    - extra holds attributes outside the known field set, merged by updates
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.documents import as_utc
from storefront.db.base import Base


class UserDocument(Base):
    """A user record keyed by its server-assigned integer id."""
    __tablename__ = "users"
    __table_args__ = (Index("ux_users_id", "id", unique=True),)

    # JSON document key -> mapped attribute
    FIELD_COLUMNS = {
        "name": "name",
        "email": "email",
        "age": "age",
        "isActive": "is_active",
    }

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    extra: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    def to_document(self) -> dict:
        """Render as the flat JSON document clients see."""
        doc = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "isActive": self.is_active,
            "createdAt": as_utc(self.created_at),
        }
        for key, value in (self.extra or {}).items():
            doc.setdefault(key, value)
        return doc
