"""
Product repository - lookups used by the validator and the creation service.
"""

from datetime import datetime

from catalog.db.models.product import Product
from catalog.db.repositories.base_repository import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Product-specific queries. Backed by the unique constraints on sku and (name, brand)."""

    def __init__(self, session):
        super().__init__(session, Product)

    async def sku_exists(self, sku: str) -> bool:
        return await self.exists(Product.sku == sku)

    async def name_brand_exists(self, name: str, brand: str) -> bool:
        return await self.exists(Product.name == name, Product.brand == brand)

    async def count_created_between(self, start: datetime, end: datetime) -> int:
        """Products whose created_at falls in [start, end). Used for the daily creation limit."""
        return await self.count(Product.created_at >= start, Product.created_at < end)
