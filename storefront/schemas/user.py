"""User Schemas: Pydantic request bodies for the users collection.

Invariants:
    - Unknown keys are kept (extra="allow"); the store decides what to apply
    - Required-field presence on create is checked by the store, not here,
      so a missing name/email is an InvalidInputError with one message shape
    - An update may omit any field but may not null out a stored one
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.core.documents import INTEGER_MAX


class UserCreate(BaseModel):
    """POST /users body. isActive and id are server-controlled and ignored."""
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    email: str | None = None
    age: int | None = Field(None, ge=0, le=INTEGER_MAX)


class UserUpdate(BaseModel):
    """PUT /users/{id} body: partial, any subset of fields."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    email: str | None = None
    age: int | None = Field(None, ge=0, le=INTEGER_MAX)
    is_active: bool | None = Field(None, alias="isActive")

    @field_validator("name", "email", "age", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v

    def to_payload(self) -> dict:
        """Only the keys the client actually sent, under their JSON names."""
        return self.model_dump(exclude_unset=True, by_alias=True)
