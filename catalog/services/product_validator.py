"""
Product create validator - field rules, category-conditional rules and uniqueness lookups.

Rules are plain data: each field owns a RuleChain of (guard, check, message)
entries. Inside a chain the first failing rule ends that chain; every chain
runs, so one request can collect failures on several fields. Checks may be
sync or async (repository lookups). Lookup errors are logged and re-raised,
never reported as validation failures.
"""

import inspect
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from urllib.parse import urlparse

from catalog.config import get_settings
from catalog.core import constants as c
from catalog.core.exceptions import ValidationFailure
from catalog.db.models.product import ProductCategory
from catalog.db.repositories.product_repository import ProductRepository
from catalog.schemas.product import ProductCreate
from catalog.services.product_profile import as_utc, utc_now

logger = logging.getLogger(__name__)

Check = Callable[[ProductCreate], bool | Awaitable[bool]]
Guard = Callable[[ProductCreate], bool]


@dataclass(frozen=True)
class Rule:
    check: Check
    message: str
    when: Guard | None = None


@dataclass(frozen=True)
class RuleChain:
    field: str
    rules: tuple[Rule, ...]


@dataclass
class ValidationResult:
    failures: list[ValidationFailure] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.failures


def is_electronics(r: ProductCreate) -> bool:
    return r.category == ProductCategory.ELECTRONICS


def is_clothing(r: ProductCreate) -> bool:
    return r.category == ProductCategory.CLOTHING


def is_home(r: ProductCreate) -> bool:
    return r.category == ProductCategory.HOME


def _contains_any(text: str, words: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(word in lowered for word in words)


def _not_blank(value: str | None) -> bool:
    return bool(value and value.strip())


def _years_before(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:  # Feb 29 -> Feb 28
        return moment.replace(year=moment.year - years, day=28)


def is_valid_image_url(url: str) -> bool:
    """http(s) URL whose text ends in a known image extension."""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    if parsed.scheme.lower() not in c.IMAGE_URL_SCHEMES or not parsed.netloc:
        return False
    return url.strip().lower().endswith(c.IMAGE_EXTENSIONS)


class ProductValidator:
    """Stateless rule evaluator; the only state it reads lives behind the repository."""

    def __init__(
        self,
        repository: ProductRepository,
        max_daily_products: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.max_daily_products = (
            max_daily_products if max_daily_products is not None else get_settings().max_daily_products
        )
        self.clock = clock
        self.chains = self._build_chains()

    async def validate(self, request: ProductCreate) -> ValidationResult:
        result = ValidationResult()
        for chain in self.chains:
            failure = await self._run_chain(chain, request)
            if failure is not None:
                result.failures.append(failure)
        if not result.is_valid:
            logger.warning(
                "Product validation failed for SKU %s: %d rule(s) broken",
                request.sku,
                len(result.failures),
                extra={"sku": request.sku, "fields": sorted({f.field for f in result.failures})},
            )
        return result

    def _now(self) -> datetime:
        return as_utc(self.clock())

    async def _run_chain(self, chain: RuleChain, request: ProductCreate) -> ValidationFailure | None:
        for rule in chain.rules:
            if rule.when is not None and not rule.when(request):
                continue
            outcome = rule.check(request)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if not outcome:
                return ValidationFailure(chain.field, rule.message)
        return None

    def _build_chains(self) -> list[RuleChain]:
        return [
            RuleChain(
                "name",
                (
                    Rule(lambda r: _not_blank(r.name), c.NAME_REQUIRED_MESSAGE),
                    Rule(lambda r: c.NAME_MIN_LENGTH <= len(r.name) <= c.NAME_MAX_LENGTH, c.NAME_LENGTH_MESSAGE),
                    Rule(lambda r: not _contains_any(r.name, c.INAPPROPRIATE_WORDS), c.NAME_INAPPROPRIATE_MESSAGE),
                    Rule(
                        lambda r: _contains_any(r.name, c.TECHNOLOGY_KEYWORDS),
                        c.ELECTRONICS_KEYWORDS_MESSAGE,
                        when=is_electronics,
                    ),
                    Rule(
                        lambda r: not _contains_any(r.name, c.RESTRICTED_HOME_WORDS),
                        c.HOME_INAPPROPRIATE_MESSAGE,
                        when=is_home,
                    ),
                ),
            ),
            RuleChain(
                "brand",
                (
                    Rule(lambda r: _not_blank(r.brand), c.BRAND_REQUIRED_MESSAGE),
                    Rule(lambda r: c.BRAND_MIN_LENGTH <= len(r.brand) <= c.BRAND_MAX_LENGTH, c.BRAND_LENGTH_MESSAGE),
                    Rule(
                        lambda r: re.fullmatch(c.BRAND_NAME_PATTERN, r.brand) is not None,
                        c.BRAND_INVALID_CHARACTERS_MESSAGE,
                    ),
                    Rule(
                        lambda r: len(r.brand) >= c.CLOTHING_BRAND_MIN_LENGTH,
                        c.CLOTHING_BRAND_LENGTH_MESSAGE,
                        when=is_clothing,
                    ),
                ),
            ),
            RuleChain(
                "sku",
                (
                    Rule(lambda r: _not_blank(r.sku), c.SKU_REQUIRED_MESSAGE),
                    Rule(lambda r: re.fullmatch(c.SKU_PATTERN, r.sku) is not None, c.SKU_FORMAT_MESSAGE),
                    Rule(self._sku_is_unique, c.SKU_UNIQUE_MESSAGE),
                ),
            ),
            RuleChain(
                "category",
                (Rule(lambda r: r.category_enum is not None, c.CATEGORY_INVALID_MESSAGE),),
            ),
            RuleChain(
                "price",
                (
                    Rule(lambda r: r.price > 0, c.PRICE_POSITIVE_MESSAGE),
                    Rule(lambda r: r.price < c.MAX_PRICE, c.PRICE_MAX_MESSAGE),
                    Rule(lambda r: r.price == r.price.quantize(c.PRICE_QUANTUM), c.PRICE_DECIMAL_PLACES_MESSAGE),
                    Rule(lambda r: r.price >= c.ELECTRONICS_MIN_PRICE, c.ELECTRONICS_MIN_PRICE_MESSAGE, when=is_electronics),
                    Rule(lambda r: r.price <= c.HOME_MAX_PRICE, c.HOME_MAX_PRICE_MESSAGE, when=is_home),
                ),
            ),
            RuleChain(
                "releaseDate",
                (
                    Rule(lambda r: as_utc(r.release_date) <= self._now(), c.RELEASE_DATE_FUTURE_MESSAGE),
                    Rule(lambda r: r.release_date.year >= c.MIN_RELEASE_YEAR, c.RELEASE_DATE_MIN_YEAR_MESSAGE),
                    Rule(
                        lambda r: as_utc(r.release_date) >= _years_before(self._now(), c.ELECTRONICS_MAX_AGE_YEARS),
                        c.ELECTRONICS_RELEASE_MESSAGE,
                        when=is_electronics,
                    ),
                ),
            ),
            RuleChain(
                "stockQuantity",
                (
                    Rule(lambda r: r.stock_quantity >= 0, c.STOCK_NEGATIVE_MESSAGE),
                    Rule(lambda r: r.stock_quantity <= c.MAX_STOCK_QUANTITY, c.STOCK_MAX_MESSAGE),
                    Rule(
                        lambda r: r.stock_quantity <= c.EXPENSIVE_PRODUCT_MAX_STOCK,
                        c.EXPENSIVE_STOCK_MESSAGE,
                        when=lambda r: r.price > c.EXPENSIVE_PRODUCT_THRESHOLD,
                    ),
                ),
            ),
            RuleChain(
                "imageUrl",
                (Rule(lambda r: is_valid_image_url(r.image_url), c.IMAGE_URL_MESSAGE, when=lambda r: _not_blank(r.image_url)),),
            ),
            RuleChain("product", (Rule(self._name_is_unique_for_brand, c.NAME_UNIQUE_PER_BRAND_MESSAGE),)),
            # Cross-field business rules, each reported on its own
            RuleChain("product", (Rule(self._under_daily_limit, c.DAILY_LIMIT_MESSAGE),)),
            RuleChain(
                "product",
                (Rule(lambda r: not is_electronics(r) or r.price >= c.ELECTRONICS_MIN_PRICE, c.ELECTRONICS_MIN_PRICE_MESSAGE),),
            ),
            RuleChain(
                "product",
                (Rule(lambda r: not is_home(r) or not _contains_any(r.name, c.RESTRICTED_HOME_WORDS), c.HOME_INAPPROPRIATE_MESSAGE),),
            ),
            RuleChain(
                "product",
                (
                    Rule(
                        lambda r: r.price <= c.HIGH_VALUE_PRODUCT_THRESHOLD
                        or r.stock_quantity <= c.HIGH_VALUE_PRODUCT_MAX_STOCK,
                        c.HIGH_VALUE_STOCK_MESSAGE,
                    ),
                ),
            ),
        ]

    # --- Lookups (database errors propagate to the caller) ---

    async def _sku_is_unique(self, request: ProductCreate) -> bool:
        try:
            exists = await self.repository.sku_exists(request.sku)
        except Exception:
            logger.exception("Error checking SKU uniqueness for %r", request.sku, extra={"sku": request.sku})
            raise
        if exists:
            logger.warning("SKU %r already exists in the system", request.sku, extra={"sku": request.sku})
        return not exists

    async def _name_is_unique_for_brand(self, request: ProductCreate) -> bool:
        if not _not_blank(request.name) or not _not_blank(request.brand):
            return True
        try:
            exists = await self.repository.name_brand_exists(request.name, request.brand)
        except Exception:
            logger.exception(
                "Error checking product name uniqueness for %r in brand %r",
                request.name,
                request.brand,
                extra={"sku": request.sku},
            )
            raise
        if exists:
            logger.warning(
                "Product with name %r and brand %r already exists",
                request.name,
                request.brand,
                extra={"sku": request.sku},
            )
        return not exists

    async def _under_daily_limit(self, request: ProductCreate) -> bool:
        start = self._now().replace(hour=0, minute=0, second=0, microsecond=0)
        try:
            created_today = await self.repository.count_created_between(start, start + timedelta(days=1))
        except Exception:
            logger.exception("Error checking daily product limit", extra={"sku": request.sku})
            raise
        if created_today >= self.max_daily_products:
            logger.warning(
                "Daily product addition limit reached. Products added today: %d",
                created_today,
                extra={"sku": request.sku},
            )
            return False
        return True
