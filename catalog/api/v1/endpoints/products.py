"""
Product endpoints - create a catalog product and return its profile.
Design: Thin controller; validator and service hold the business logic.
Errors are raised as domain exceptions and shaped by catalog.api.error_handlers.
"""

from fastapi import APIRouter, Request, status

from catalog.cache.redis_client import RedisClient
from catalog.db.repositories.product_repository import ProductRepository
from catalog.db.session import DbSession
from catalog.schemas.product import ProductCreate, ProductProfile
from catalog.services.product_service import ProductService
from catalog.services.product_validator import ProductValidator

router = APIRouter()


@router.post(
    "",
    response_model=ProductProfile,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Validation failed"},
        status.HTTP_409_CONFLICT: {"description": "Duplicate SKU or name/brand"},
    },
)
async def create_product(request: Request, session: DbSession, redis: RedisClient, data: ProductCreate):
    """Validate, persist and return the product profile with derived fields."""
    repo = ProductRepository(session)
    svc = ProductService(repo, redis, validator=ProductValidator(repo))
    return await svc.create(data, correlation_id=getattr(request.state, "correlation_id", None))
