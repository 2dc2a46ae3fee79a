"""
Product model - the persisted catalog item.
"""

import enum
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.core.constants import (
    BRAND_MAX_LENGTH_DB,
    IMAGE_URL_MAX_LENGTH_DB,
    NAME_BRAND_UNIQUE_CONSTRAINT,
    NAME_MAX_LENGTH_DB,
    SKU_MAX_LENGTH_DB,
    SKU_UNIQUE_CONSTRAINT,
)
from catalog.db.base import Base


class ProductCategory(enum.IntEnum):
    """Stored as its integer value; accepted on the wire by name or value."""

    ELECTRONICS = 0
    CLOTHING = 1
    BOOKS = 2
    HOME = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: "int | str | ProductCategory") -> "ProductCategory | None":
        """Resolve a name ("Electronics", case-insensitive) or integer; None if undefined."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.lstrip("-").isdigit():
                value = int(text)
            else:
                return cls.__members__.get(text.upper())
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class Product(Base):
    """Catalog item. Created once per accepted request and never mutated by the create flow."""

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("sku", name=SKU_UNIQUE_CONSTRAINT),
        UniqueConstraint("name", "brand", name=NAME_BRAND_UNIQUE_CONSTRAINT),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH_DB), nullable=False)
    brand: Mapped[str] = mapped_column(String(BRAND_MAX_LENGTH_DB), nullable=False)
    sku: Mapped[str] = mapped_column(String(SKU_MAX_LENGTH_DB), nullable=False)
    category: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    release_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(IMAGE_URL_MAX_LENGTH_DB), nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, sku={self.sku})>"
