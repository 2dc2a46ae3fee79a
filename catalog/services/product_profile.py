"""
Product profile - derived, presentation-only fields computed from a stored Product.

Every derived field is a pure function of (product, now) registered in
DERIVED_FIELDS under its response field name. Nothing here touches the
database or the cache, so a profile can be rebuilt on every read.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from catalog.core.constants import (
    AVAILABILITY_IN_STOCK,
    AVAILABILITY_LAST_ITEM,
    AVAILABILITY_LIMITED_STOCK,
    AVAILABILITY_OUT_OF_STOCK,
    AVAILABILITY_UNAVAILABLE,
    AVERAGE_DAYS_PER_MONTH,
    AVERAGE_DAYS_PER_YEAR,
    BRAND_INITIALS_PLACEHOLDER,
    CATEGORY_DISPLAY_DEFAULT,
    HOME_DISCOUNT_MULTIPLIER,
    LIMITED_STOCK_THRESHOLD,
    MONTHS_OLD_THRESHOLD_DAYS,
    NEW_RELEASE_THRESHOLD_DAYS,
    PRICE_QUANTUM,
    PRODUCT_AGE_CLASSIC,
    PRODUCT_AGE_NEW_RELEASE,
    YEARS_OLD_THRESHOLD_DAYS,
)
from catalog.db.models.product import Product, ProductCategory
from catalog.schemas.product import ProductProfile

CATEGORY_DISPLAY_NAMES = {
    ProductCategory.ELECTRONICS: "Electronics & Technology",
    ProductCategory.CLOTHING: "Clothing & Fashion",
    ProductCategory.BOOKS: "Books & Media",
    ProductCategory.HOME: "Home & Garden",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} old"


def category_display_name(product: Product, now: datetime) -> str:
    return CATEGORY_DISPLAY_NAMES.get(ProductCategory.parse(product.category), CATEGORY_DISPLAY_DEFAULT)


def formatted_price(product: Product, now: datetime) -> str:
    """Currency string with two decimals, e.g. $1,299.99."""
    amount = Decimal(product.price).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def product_age(product: Product, now: datetime) -> str:
    days = (as_utc(now) - as_utc(product.release_date)).days
    if days < NEW_RELEASE_THRESHOLD_DAYS:
        return PRODUCT_AGE_NEW_RELEASE
    if days < MONTHS_OLD_THRESHOLD_DAYS:
        return _plural(int(days / AVERAGE_DAYS_PER_MONTH), "month")
    if days < YEARS_OLD_THRESHOLD_DAYS:
        return _plural(int(days / AVERAGE_DAYS_PER_YEAR), "year")
    return PRODUCT_AGE_CLASSIC


def brand_initials(product: Product, now: datetime) -> str:
    """Initials of the first and last word: Tech Innovations -> TI, Nike -> N, blank -> ?."""
    brand = product.brand or ""
    if not brand.strip():
        return BRAND_INITIALS_PLACEHOLDER
    words = [w for w in brand.split(" ") if w]
    if len(words) < 2:
        return words[0][0].upper()
    return f"{words[0][0]}{words[-1][0]}".upper()


def availability_status(product: Product, now: datetime) -> str:
    if not product.is_available:
        return AVAILABILITY_OUT_OF_STOCK
    if product.stock_quantity == 0:
        return AVAILABILITY_UNAVAILABLE
    if product.stock_quantity == 1:
        return AVAILABILITY_LAST_ITEM
    if product.stock_quantity <= LIMITED_STOCK_THRESHOLD:
        return AVAILABILITY_LIMITED_STOCK
    return AVAILABILITY_IN_STOCK


def conditional_price(product: Product, now: datetime) -> Decimal:
    # Home prices are shown with a 10% discount
    price = Decimal(product.price)
    if product.category == ProductCategory.HOME:
        price *= HOME_DISCOUNT_MULTIPLIER
    return price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def conditional_image_url(product: Product, now: datetime) -> str | None:
    # Home images are filtered out of the response
    if product.category == ProductCategory.HOME:
        return None
    return product.image_url


DERIVED_FIELDS: dict[str, Callable[[Product, datetime], Any]] = {
    "category_display_name": category_display_name,
    "formatted_price": formatted_price,
    "product_age": product_age,
    "brand_initials": brand_initials,
    "availability_status": availability_status,
    "price": conditional_price,
    "image_url": conditional_image_url,
}


def _category_label(value: int) -> str:
    category = ProductCategory.parse(value)
    return category.label if category is not None else str(value)


def build_profile(product: Product, now: datetime | None = None) -> ProductProfile:
    """Map a stored product to its response view. Same product and `now` give the same profile."""
    now = now or utc_now()
    data: dict[str, Any] = {
        "id": product.id,
        "name": product.name,
        "brand": product.brand,
        "sku": product.sku,
        "category": _category_label(product.category),
        "release_date": product.release_date,
        "created_at": product.created_at,
        "is_available": product.is_available,
        "stock_quantity": product.stock_quantity,
    }
    for field_name, resolve in DERIVED_FIELDS.items():
        data[field_name] = resolve(product, now)
    return ProductProfile(**data)
