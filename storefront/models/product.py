"""Product ORM: one row per product document in the natural-key collection.

Invariants:
    - name carries a UNIQUE index and is both the lookup key and a mutable field
    - created_at set once at insert, never written by updates
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.documents import as_utc
from storefront.db.base import Base


class ProductDocument(Base):
    """A product record keyed by its client-chosen name."""
    __tablename__ = "products"
    __table_args__ = (Index("ux_products_name", "name", unique=True),)

    FIELD_COLUMNS = {
        "name": "name",
        "price": "price",
        "category": "category",
    }

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    extra: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    def to_document(self) -> dict:
        doc = {
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "createdAt": as_utc(self.created_at),
        }
        for key, value in (self.extra or {}).items():
            doc.setdefault(key, value)
        return doc
