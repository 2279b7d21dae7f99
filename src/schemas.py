"""
Pydantic field sets for products, users and reviews.

These are the typed inputs of the catalog store; both protocol adapters build
them from their own loosely-typed payloads.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


class Product(BaseModel):
    id: int
    name: str
    about: str
    price: float


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    about: str
    price: float = Field(..., gt=0, allow_inf_nan=False)


class ProductUpdate(BaseModel):
    """Partial update; only the fields the client actually sent are applied.

    Absent fields are not in ``model_fields_set`` and never reach the SET
    clause. Sending a field with ``null`` is rejected since none of the
    columns accept NULL; omitted fields keep their default and skip validation.
    """

    name: str | None = Field(None, min_length=1)
    about: str | None = None
    price: float | None = Field(None, gt=0, allow_inf_nan=False)

    @field_validator("name", "about", "price")
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("field may be omitted but not set to null")
        return value

    def present_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ProductFilters(BaseModel):
    name_contains: str | None = None
    about_contains: str | None = None
    max_price: str | None = None  # raw text, parsed leniently by the query builder


class User(BaseModel):
    id: int
    username: str
    email: EmailStr


class UserCreate(BaseModel):
    username: str
    email: EmailStr
    password: str = Field(..., min_length=6)


class ReviewCreate(BaseModel):
    product_id: int
    user_id: int
    score: int = Field(..., ge=1, le=5)
    content: str | None = None


class Review(ReviewCreate):
    id: int
