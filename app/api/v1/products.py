"""Product routes: brand owners write, brand owners/shop owners/admins read (scoped)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import require_roles
from app.core.database import get_db
from app.models.user import Role
from app.schemas.auth import Identity
from app.schemas.catalog import ProductCreate, ProductResponse, ProductsPage, ProductUpdate
from app.schemas.pagination import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.services.products import ProductService

router = APIRouter()

Reader = Annotated[
    Identity,
    Depends(require_roles(Role.BRAND_OWNER, Role.SHOP_OWNER, Role.SUPER_ADMIN)),
]
Owner = Annotated[Identity, Depends(require_roles(Role.BRAND_OWNER))]


def get_product_service(db: Annotated[Session, Depends(get_db)]) -> ProductService:
    return ProductService(db)


Products = Annotated[ProductService, Depends(get_product_service)]


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(body: ProductCreate, identity: Owner, service: Products) -> ProductResponse:
    """Create a product under one of the caller's brands (code unique per brand)."""
    return ProductResponse.model_validate(service.create(body, identity))


@router.get("", response_model=ProductsPage)
def list_products(
    identity: Reader,
    service: Products,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_LIMIT)] = DEFAULT_PAGE_LIMIT,
    search: Annotated[str | None, Query(max_length=255)] = None,
    brand_id: Annotated[UUID | None, Query(alias="brandId")] = None,
) -> ProductsPage:
    """Active products visible to the caller; search matches name or product code."""
    return service.list_products(identity, page, limit, search=search, brand_id=brand_id)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: UUID, identity: Reader, service: Products) -> ProductResponse:
    return ProductResponse.model_validate(service.get(product_id, identity))


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    body: ProductUpdate,
    identity: Owner,
    service: Products,
) -> ProductResponse:
    return ProductResponse.model_validate(service.update(product_id, body, identity))


@router.delete("/{product_id}", response_model=ProductResponse)
def delete_product(product_id: UUID, identity: Owner, service: Products) -> ProductResponse:
    """Soft delete (isActive=false)."""
    return ProductResponse.model_validate(service.delete(product_id, identity))
