# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from catalog.db.repositories.product_repository import ProductRepository

__all__ = ["ProductRepository"]
