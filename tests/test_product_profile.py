"""
Product profile tests - derived fields are pure functions of (product, now).
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from catalog.db.models import ProductCategory
from catalog.services.product_profile import (
    DERIVED_FIELDS,
    availability_status,
    brand_initials,
    build_profile,
    category_display_name,
    formatted_price,
    product_age,
)
from conftest import NOW, make_product


@pytest.mark.parametrize(
    "category, expected",
    [
        (ProductCategory.ELECTRONICS, "Electronics & Technology"),
        (ProductCategory.CLOTHING, "Clothing & Fashion"),
        (ProductCategory.BOOKS, "Books & Media"),
        (ProductCategory.HOME, "Home & Garden"),
        (42, "Uncategorized"),
    ],
)
def test_category_display_name(category, expected):
    assert category_display_name(make_product(category=int(category)), NOW) == expected


@pytest.mark.parametrize(
    "days, expected",
    [
        (0, "New Release"),
        (15, "New Release"),
        (29, "New Release"),
        (30, "0 months old"),
        (45, "1 month old"),
        (100, "3 months old"),
        (364, "11 months old"),
        (365, "0 years old"),
        (400, "1 year old"),
        (800, "2 years old"),
        (1824, "4 years old"),
        (1825, "Classic"),
        (5000, "Classic"),
    ],
)
def test_product_age_buckets(days, expected):
    product = make_product(release_date=NOW - timedelta(days=days))
    assert product_age(product, NOW) == expected


def test_product_age_accepts_naive_stored_dates():
    # SQLite returns naive datetimes; they are read as UTC
    product = make_product(release_date=(NOW - timedelta(days=45)).replace(tzinfo=None))
    assert product_age(product, NOW) == "1 month old"


@pytest.mark.parametrize(
    "brand, expected",
    [
        ("Tech Innovations", "TI"),
        ("Apple Inc", "AI"),
        ("Nike", "N"),
        ("nike", "N"),
        ("  spaced   out  brand ", "SB"),
        ("", "?"),
        ("   ", "?"),
    ],
)
def test_brand_initials(brand, expected):
    assert brand_initials(make_product(brand=brand), NOW) == expected


@pytest.mark.parametrize(
    "is_available, stock, expected",
    [
        (True, 0, "Unavailable"),
        (True, 1, "Last Item"),
        (True, 2, "Limited Stock"),
        (True, 5, "Limited Stock"),
        (True, 6, "In Stock"),
        (True, 50, "In Stock"),
        (False, 0, "Out of Stock"),
        (False, 50, "Out of Stock"),
    ],
)
def test_availability_status(is_available, stock, expected):
    product = make_product(is_available=is_available, stock_quantity=stock)
    assert availability_status(product, NOW) == expected


@pytest.mark.parametrize(
    "price, expected",
    [
        (Decimal("199.99"), "$199.99"),
        (Decimal("1299.5"), "$1,299.50"),
        (Decimal("0.005"), "$0.01"),
        (Decimal("10"), "$10.00"),
    ],
)
def test_formatted_price(price, expected):
    assert formatted_price(make_product(price=price), NOW) == expected


def test_home_profile_discounts_price_and_hides_image():
    product = make_product(
        category=int(ProductCategory.HOME),
        name="Office Chair",
        brand="Furniture Plus",
        price=Decimal("250.00"),
        image_url="https://example.com/chair.png",
    )

    profile = build_profile(product, NOW)

    assert profile.price == Decimal("225.00")
    assert str(profile.price) == "225.00"
    assert profile.price == Decimal("250.00") * Decimal("0.9")
    assert profile.image_url is None
    assert profile.category_display_name == "Home & Garden"
    # Stored values are untouched
    assert product.price == Decimal("250.00")
    assert product.image_url == "https://example.com/chair.png"


@pytest.mark.parametrize("category", [ProductCategory.ELECTRONICS, ProductCategory.CLOTHING, ProductCategory.BOOKS])
def test_non_home_profile_passes_price_and_image_through(category):
    product = make_product(category=int(category), price=Decimal("80.00"))
    profile = build_profile(product, NOW)
    assert profile.price == Decimal("80.00")
    assert profile.image_url == "https://example.com/headphones.jpg"

    no_image = build_profile(make_product(category=int(category), image_url=None), NOW)
    assert no_image.image_url is None


def test_electronics_profile():
    profile = build_profile(make_product(), NOW)

    assert profile.category == "Electronics"
    assert profile.category_display_name == "Electronics & Technology"
    assert profile.brand_initials == "TI"
    assert profile.product_age == "New Release"
    assert profile.formatted_price == "$199.99"
    assert profile.availability_status == "In Stock"
    assert profile.is_available is True


def test_build_profile_is_idempotent():
    product = make_product()
    first = build_profile(product, NOW)
    second = build_profile(product, NOW)
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_profile_keeps_stored_fields():
    product = make_product()
    profile = build_profile(product, NOW)
    for name in ("id", "name", "brand", "sku", "release_date", "created_at", "is_available", "stock_quantity"):
        assert getattr(profile, name) == getattr(product, name)


def test_derived_fields_table_covers_profile_outputs():
    assert set(DERIVED_FIELDS) == {
        "category_display_name",
        "formatted_price",
        "product_age",
        "brand_initials",
        "availability_status",
        "price",
        "image_url",
    }


def test_profile_serializes_camel_case():
    data = build_profile(make_product(), NOW).model_dump(mode="json", by_alias=True)
    assert data["categoryDisplayName"] == "Electronics & Technology"
    assert data["brandInitials"] == "TI"
    assert data["stockQuantity"] == 50
    assert data["price"] == 199.99
    assert "imageUrl" in data


def test_home_discount_is_rounded_to_cents():
    product = make_product(category=int(ProductCategory.HOME), name="Wall Clock", price=Decimal("19.99"))
    # 19.99 * 0.9 = 17.991
    assert str(build_profile(product, NOW).price) == "17.99"
