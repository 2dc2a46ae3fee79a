"""
Error handlers - global exception handlers for the catalog API.

- DuplicateKeyError -> 409 with the duplicate message
- ProductValidationError -> 400 with field-level failures
- RequestValidationError (pydantic) -> 400 in the same shape
- Exception (catch-all) -> 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.core.exceptions import DuplicateKeyError, ProductValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        logger.warning("Duplicate product rejected: %s", exc.message, extra={"path": request.url.path})
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})

    @app.exception_handler(ProductValidationError)
    async def product_validation_handler(request: Request, exc: ProductValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": exc.message, "errors": [f.to_dict() for f in exc.failures]},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Malformed request on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Validation failed", "errors": [_format_error(e) for e in exc.errors()]},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def _format_error(error: dict) -> dict[str, str]:
    # loc is ("body", "<camelCase field>", ...) for body fields
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = loc[0] if loc else "body"
    return {"field": field, "message": error.get("msg", "Invalid value")}
