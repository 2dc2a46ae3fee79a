"""
Product domain exceptions.

Raised by the validator and the service layer; the API layer translates
them into HTTP responses (see catalog.api.error_handlers).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationFailure:
    """One rule violation, keyed by the request field name used on the wire."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ProductValidationError(Exception):
    """The create request broke one or more validation rules."""

    def __init__(self, failures: list[ValidationFailure], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.failures = list(failures)


class DuplicateKeyError(ProductValidationError):
    """A product with the same SKU (or name and brand) already exists."""

    def __init__(self, message: str, field: str = "sku"):
        super().__init__([ValidationFailure(field, message)], message)
