"""
BDD step definitions for the product profile feature (pytest-bdd).
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from catalog.db.models import ProductCategory
from catalog.services.product_profile import build_profile
from conftest import NOW, make_product

scenarios("../features/product_profile.feature")


@pytest.fixture
def context():
    """Shared state between steps."""
    return {}


@given(
    parsers.parse('a "{category}" product from brand "{brand}" priced at "{price}" with {stock:d} units'),
)
def product_values(context, category, brand, price, stock):
    context["values"] = {
        "category": int(ProductCategory.parse(category)),
        "brand": brand,
        "price": Decimal(price),
        "stock_quantity": stock,
        "is_available": stock > 0,
    }


@given(parsers.parse("it was released {days:d} days ago"))
def released_days_ago(context, days):
    context["values"]["release_date"] = NOW - timedelta(days=days)


@when("I build its profile")
def build(context):
    context["profile"] = build_profile(make_product(**context["values"]), NOW)


@then(parsers.parse('the "{field}" should be "{expected}"'))
def field_equals(context, field, expected):
    assert getattr(context["profile"], field) == expected


@then(parsers.parse('the profile price should be "{expected}"'))
def price_equals(context, expected):
    assert context["profile"].price == Decimal(expected)


@then("the profile should have no image")
def no_image(context):
    assert context["profile"].image_url is None
