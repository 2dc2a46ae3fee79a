"""
Product service - the create use case.
Orchestrates request validation, duplicate-SKU guard, persistence, cache
invalidation, profile mapping and metrics; keeps the endpoint thin.
Design: Depends on the repository, a Redis-like cache (anything with an
async `delete`) and an optional validator, all injected so tests can pass fakes.
"""

import random
import re
import time
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy.exc import IntegrityError

from catalog.core.constants import (
    ALL_PRODUCTS_CACHE_KEY,
    NAME_BRAND_ALREADY_EXISTS_MESSAGE,
    NAME_BRAND_UNIQUE_CONSTRAINT,
    SKU_ALREADY_EXISTS_MESSAGE,
    SKU_UNIQUE_CONSTRAINT,
)
from catalog.core.exceptions import DuplicateKeyError, ProductValidationError
from catalog.core.metrics import CreationMetrics, log_creation_metrics
from catalog.core.operation import OperationContext
from catalog.db.models.product import Product
from catalog.db.repositories.product_repository import ProductRepository
from catalog.schemas.product import ProductCreate, ProductProfile
from catalog.services.product_profile import build_profile, utc_now
from catalog.services.product_validator import ProductValidator

# PostgreSQL names the constraint; SQLite names the columns
_POSTGRES_CONSTRAINT = re.compile(r'unique constraint "(?P<name>[^"]+)"')
_SQLITE_COLUMNS = re.compile(r"UNIQUE constraint failed: (?P<columns>[\w., ]+)")
_CONSTRAINT_BY_COLUMNS = {
    "products.sku": SKU_UNIQUE_CONSTRAINT,
    "products.name, products.brand": NAME_BRAND_UNIQUE_CONSTRAINT,
}


class Cache(Protocol):
    async def delete(self, *names: str) -> Any: ...


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def _category_label(request: ProductCreate) -> str:
    category = request.category_enum
    return category.label if category is not None else str(request.category)


def violated_unique_constraint(exc: IntegrityError) -> str | None:
    """Name of the product unique constraint behind `exc`, or None for any other integrity error."""
    orig = exc.orig
    for error in (orig, getattr(orig, "__cause__", None)):
        name = getattr(error, "constraint_name", None)  # asyncpg
        if name:
            return name if name in (SKU_UNIQUE_CONSTRAINT, NAME_BRAND_UNIQUE_CONSTRAINT) else None
    message = str(orig)
    match = _POSTGRES_CONSTRAINT.search(message)
    if match:
        name = match.group("name")
        return name if name in (SKU_UNIQUE_CONSTRAINT, NAME_BRAND_UNIQUE_CONSTRAINT) else None
    match = _SQLITE_COLUMNS.search(message)
    if match:
        return _CONSTRAINT_BY_COLUMNS.get(match.group("columns").strip())
    return None


class ProductService:
    """Handles product creation: one linear sequence per request, no retries."""

    def __init__(
        self,
        product_repo: ProductRepository,
        cache: Cache,
        validator: ProductValidator | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.product_repo = product_repo
        self.cache = cache
        self.validator = validator
        self.rng = rng
        self.clock = clock

    async def create(self, data: ProductCreate, correlation_id: str | None = None) -> ProductProfile:
        """Validate and persist a request, returning its profile.

        Raises ProductValidationError when a rule fails and DuplicateKeyError
        when the SKU (or name and brand) is taken; any other error is logged
        and re-raised unchanged. Every attempt emits one CreationMetrics record.
        """
        operation = OperationContext.start(self.rng, correlation_id)
        log = operation.logger
        category = _category_label(data)
        started = time.perf_counter()
        validation_ms = 0.0
        persistence_ms = 0.0

        log.info(
            "Product creation started. Name: %s, Brand: %s, SKU: %s, Category: %s",
            data.name,
            data.brand,
            data.sku,
            category,
            extra={"product_name": data.name, "brand": data.brand, "sku": data.sku, "category": category},
        )

        try:
            stage = time.perf_counter()
            if self.validator is not None:
                result = await self.validator.validate(data)
                if not result.is_valid:
                    validation_ms = _elapsed_ms(stage)
                    log.error(
                        "Product validation failed for SKU: %s. Errors: %s",
                        data.sku,
                        "; ".join(f"{f.field}: {f.message}" for f in result.failures),
                        extra={"sku": data.sku, "fields": sorted({f.field for f in result.failures})},
                    )
                    raise ProductValidationError(result.failures)

            sku_exists = await self.product_repo.sku_exists(data.sku)
            log.info(
                "SKU validation completed for SKU: %s. Exists: %s",
                data.sku,
                sku_exists,
                extra={"sku": data.sku, "sku_exists": sku_exists, "duration_ms": _elapsed_ms(stage)},
            )
            if sku_exists:
                validation_ms = _elapsed_ms(stage)
                log.error("SKU validation failed. Duplicate SKU detected: %s", data.sku, extra={"sku": data.sku})
                raise DuplicateKeyError(SKU_ALREADY_EXISTS_MESSAGE.format(sku=data.sku))

            stock_valid = data.stock_quantity >= 0
            validation_ms = _elapsed_ms(stage)
            log.info(
                "Stock validation completed. Quantity: %d, Valid: %s",
                data.stock_quantity,
                stock_valid,
                extra={"stock_quantity": data.stock_quantity, "stock_valid": stock_valid, "duration_ms": validation_ms},
            )

            product = self._build_product(data)

            stage = time.perf_counter()
            log.info("Database save operation started for product: %s", data.name, extra={"sku": data.sku})
            product = await self._save(product)
            persistence_ms = _elapsed_ms(stage)
            log.info(
                "Database save operation completed. ProductId: %s",
                product.id,
                extra={"product_id": str(product.id), "duration_ms": persistence_ms},
            )

            stage = time.perf_counter()
            await self.cache.delete(ALL_PRODUCTS_CACHE_KEY)
            log.info(
                "Cache invalidation completed for key: %s",
                ALL_PRODUCTS_CACHE_KEY,
                extra={"cache_key": ALL_PRODUCTS_CACHE_KEY, "duration_ms": _elapsed_ms(stage)},
            )

            profile = build_profile(product, now=self.clock())
        except ProductValidationError as exc:
            reason = "; ".join(f.message for f in exc.failures)
            self._emit_metrics(operation, data, category, validation_ms, persistence_ms, started, reason)
            raise
        except Exception as exc:
            log.error(
                "Unexpected error during product creation for SKU: %s. Error: %s",
                data.sku,
                exc,
                exc_info=True,
                extra={"sku": data.sku},
            )
            self._emit_metrics(operation, data, category, validation_ms, persistence_ms, started, str(exc))
            raise

        self._emit_metrics(operation, data, category, validation_ms, persistence_ms, started)
        return profile

    def _build_product(self, data: ProductCreate) -> Product:
        category = data.category_enum
        if category is None:
            raise ValueError(f"Undefined product category: {data.category!r}")
        return Product(
            id=uuid.uuid4(),
            name=data.name,
            brand=data.brand,
            sku=data.sku,
            category=int(category),
            price=data.price,
            release_date=data.release_date,
            image_url=data.image_url,
            is_available=data.stock_quantity > 0,
            stock_quantity=data.stock_quantity,
            created_at=self.clock(),
        )

    async def _save(self, product: Product) -> Product:
        """Insert; a product unique-constraint hit (concurrent create) becomes DuplicateKeyError."""
        try:
            return await self.product_repo.add(product)
        except IntegrityError as exc:
            constraint = violated_unique_constraint(exc)
            if constraint == SKU_UNIQUE_CONSTRAINT:
                raise DuplicateKeyError(SKU_ALREADY_EXISTS_MESSAGE.format(sku=product.sku)) from exc
            if constraint == NAME_BRAND_UNIQUE_CONSTRAINT:
                raise DuplicateKeyError(
                    NAME_BRAND_ALREADY_EXISTS_MESSAGE.format(name=product.name, brand=product.brand),
                    field="product",
                ) from exc
            raise

    def _emit_metrics(
        self,
        operation: OperationContext,
        data: ProductCreate,
        category: str,
        validation_ms: float,
        persistence_ms: float,
        started: float,
        error_reason: str | None = None,
    ) -> None:
        metrics = CreationMetrics(
            operation_id=operation.operation_id,
            product_name=data.name,
            sku=data.sku,
            category=category,
            validation_duration_ms=validation_ms,
            persistence_duration_ms=persistence_ms,
            total_duration_ms=_elapsed_ms(started),
            success=error_reason is None,
            error_reason=error_reason,
        )
        log_creation_metrics(operation.logger, metrics)
