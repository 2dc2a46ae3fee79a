"""Product request/response schemas - REST API contract (camelCase on the wire)."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

from catalog.db.models.product import ProductCategory

# Two-decimal amounts go out as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductCreate(BaseModel):
    """Create request. Only structural parsing here; value rules live in ProductValidator."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = ""
    brand: str = ""
    sku: str = ""
    # Enum name or integer value; undefined values are kept so the validator can report them
    category: int | str
    price: Decimal
    release_date: datetime
    image_url: str | None = None
    stock_quantity: int = 1

    @field_validator("category", mode="before")
    @classmethod
    def category_name_to_value(cls, v):
        parsed = ProductCategory.parse(v) if isinstance(v, (int, str)) else None
        return int(parsed) if parsed is not None else v

    @property
    def category_enum(self) -> ProductCategory | None:
        return ProductCategory.parse(self.category)


class ProductProfile(BaseModel):
    """Create response: stored fields plus derived presentation fields. Never persisted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    name: str
    brand: str
    sku: str
    category: str
    price: Money
    release_date: datetime
    created_at: datetime
    image_url: str | None = None
    is_available: bool
    stock_quantity: int

    # Derived
    category_display_name: str
    formatted_price: str
    product_age: str
    brand_initials: str
    availability_status: str
