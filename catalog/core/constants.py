"""
Product rules and presentation constants shared by the validator and the profile builder.
"""

from decimal import Decimal

# Name
NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 200
INAPPROPRIATE_WORDS = ("spam", "scam", "fake", "counterfeit", "replica")
TECHNOLOGY_KEYWORDS = (
    "smart",
    "wireless",
    "digital",
    "electronic",
    "tech",
    "bluetooth",
    "usb",
    "4k",
    "laptop",
    "phone",
    "tablet",
    "camera",
    "headphones",
    "speaker",
    "monitor",
    "charger",
)
RESTRICTED_HOME_WORDS = ("weapon", "explosive", "toxic", "hazardous", "flammable")

# Brand
BRAND_MIN_LENGTH = 2
BRAND_MAX_LENGTH = 100
CLOTHING_BRAND_MIN_LENGTH = 3
BRAND_NAME_PATTERN = r"^[A-Za-z0-9\s\-'.]+$"

# SKU
SKU_MIN_LENGTH = 5
SKU_MAX_LENGTH = 20
SKU_PATTERN = rf"^[A-Za-z0-9\-]{{{SKU_MIN_LENGTH},{SKU_MAX_LENGTH}}}$"

# Price
MAX_PRICE = Decimal("10000")
ELECTRONICS_MIN_PRICE = Decimal("50")
HOME_MAX_PRICE = Decimal("500")
PRICE_DECIMAL_PLACES = 2
PRICE_QUANTUM = Decimal("0.01")

# Release date
MIN_RELEASE_YEAR = 1900
ELECTRONICS_MAX_AGE_YEARS = 5

# Stock
MAX_STOCK_QUANTITY = 100_000
EXPENSIVE_PRODUCT_THRESHOLD = Decimal("1000")
EXPENSIVE_PRODUCT_MAX_STOCK = 100
HIGH_VALUE_PRODUCT_THRESHOLD = Decimal("5000")
HIGH_VALUE_PRODUCT_MAX_STOCK = 10

# Image URL
IMAGE_URL_SCHEMES = ("http", "https")
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

# Storage column sizes
NAME_MAX_LENGTH_DB = 255
BRAND_MAX_LENGTH_DB = 255
SKU_MAX_LENGTH_DB = 50
IMAGE_URL_MAX_LENGTH_DB = 2048
SKU_UNIQUE_CONSTRAINT = "uq_products_sku"
NAME_BRAND_UNIQUE_CONSTRAINT = "uq_products_name_brand"

# Cache
ALL_PRODUCTS_CACHE_KEY = "all_products"

# Operation ids (log correlation)
OPERATION_ID_CHARACTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
OPERATION_ID_LENGTH = 8

# Profile: age thresholds in days
NEW_RELEASE_THRESHOLD_DAYS = 30
MONTHS_OLD_THRESHOLD_DAYS = 365
YEARS_OLD_THRESHOLD_DAYS = 1825
AVERAGE_DAYS_PER_MONTH = 30.44
AVERAGE_DAYS_PER_YEAR = 365.25
PRODUCT_AGE_NEW_RELEASE = "New Release"
PRODUCT_AGE_CLASSIC = "Classic"

# Profile: availability
LIMITED_STOCK_THRESHOLD = 5
AVAILABILITY_OUT_OF_STOCK = "Out of Stock"
AVAILABILITY_UNAVAILABLE = "Unavailable"
AVAILABILITY_LAST_ITEM = "Last Item"
AVAILABILITY_LIMITED_STOCK = "Limited Stock"
AVAILABILITY_IN_STOCK = "In Stock"

# Profile: Home category pricing
HOME_DISCOUNT_MULTIPLIER = Decimal("0.9")

BRAND_INITIALS_PLACEHOLDER = "?"
CATEGORY_DISPLAY_DEFAULT = "Uncategorized"

# Messages
NAME_REQUIRED_MESSAGE = "Product name is required."
NAME_LENGTH_MESSAGE = f"Product name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters."
NAME_INAPPROPRIATE_MESSAGE = "Product name contains inappropriate content."
ELECTRONICS_KEYWORDS_MESSAGE = "Electronics product names must contain a technology keyword."
HOME_INAPPROPRIATE_MESSAGE = "Home product name contains restricted words."
BRAND_REQUIRED_MESSAGE = "Brand is required."
BRAND_LENGTH_MESSAGE = f"Brand name must be between {BRAND_MIN_LENGTH} and {BRAND_MAX_LENGTH} characters."
BRAND_INVALID_CHARACTERS_MESSAGE = (
    "Brand name may only contain letters, digits, spaces, hyphens, apostrophes and dots."
)
CLOTHING_BRAND_LENGTH_MESSAGE = (
    f"Clothing brands must be at least {CLOTHING_BRAND_MIN_LENGTH} characters long."
)
SKU_REQUIRED_MESSAGE = "SKU is required."
SKU_FORMAT_MESSAGE = (
    f"SKU must be alphanumeric with hyphens, between {SKU_MIN_LENGTH} and {SKU_MAX_LENGTH} characters."
)
SKU_UNIQUE_MESSAGE = "SKU already exists in the system."
CATEGORY_INVALID_MESSAGE = "Category must be a valid product category."
PRICE_POSITIVE_MESSAGE = "Price must be greater than 0."
PRICE_MAX_MESSAGE = f"Price must be less than ${MAX_PRICE:,.2f}."
PRICE_DECIMAL_PLACES_MESSAGE = f"Price cannot have more than {PRICE_DECIMAL_PLACES} decimal places."
ELECTRONICS_MIN_PRICE_MESSAGE = (
    f"Electronics products must have a minimum price of ${ELECTRONICS_MIN_PRICE:,.2f}."
)
HOME_MAX_PRICE_MESSAGE = f"Home products cannot exceed ${HOME_MAX_PRICE:,.2f}."
RELEASE_DATE_FUTURE_MESSAGE = "Release date cannot be in the future."
RELEASE_DATE_MIN_YEAR_MESSAGE = f"Release date cannot be before year {MIN_RELEASE_YEAR}."
ELECTRONICS_RELEASE_MESSAGE = (
    f"Electronics products must be released within the last {ELECTRONICS_MAX_AGE_YEARS} years."
)
STOCK_NEGATIVE_MESSAGE = "Stock quantity cannot be negative."
STOCK_MAX_MESSAGE = f"Stock quantity cannot exceed {MAX_STOCK_QUANTITY}."
EXPENSIVE_STOCK_MESSAGE = (
    f"Expensive products (>{EXPENSIVE_PRODUCT_THRESHOLD}) must have limited stock "
    f"(<={EXPENSIVE_PRODUCT_MAX_STOCK} units)."
)
IMAGE_URL_MESSAGE = "Image URL must be a valid http/https URL ending in .jpg, .jpeg, .png, .gif or .webp."
NAME_UNIQUE_PER_BRAND_MESSAGE = "A product with the same name already exists for this brand."
DAILY_LIMIT_MESSAGE = "Daily product creation limit reached."
HIGH_VALUE_STOCK_MESSAGE = (
    f"High-value products (>{HIGH_VALUE_PRODUCT_THRESHOLD}) cannot have more than "
    f"{HIGH_VALUE_PRODUCT_MAX_STOCK} units in stock."
)

SKU_ALREADY_EXISTS_MESSAGE = "A product with SKU '{sku}' already exists. SKU must be unique."
NAME_BRAND_ALREADY_EXISTS_MESSAGE = (
    "A product named '{name}' already exists for brand '{brand}'."
)
