"""Product Schemas: Pydantic request bodies for the products collection."""

from pydantic import BaseModel, ConfigDict, field_validator


class ProductCreate(BaseModel):
    """POST /products body."""
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    price: float | None = None
    category: str | None = None


class ProductUpdate(BaseModel):
    """PUT /products/{name} body. A different name renames the product."""
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    price: float | None = None
    category: str | None = None

    @field_validator("name", "price", "category", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v

    def to_payload(self) -> dict:
        return self.model_dump(exclude_unset=True)
