"""Brand routes. Brand owners manage their own brands; admins and linked shops can read."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import require_roles
from app.core.database import get_db
from app.models.user import Role
from app.schemas.auth import Identity
from app.schemas.catalog import BrandCreate, BrandResponse, BrandUpdate
from app.services.brands import BrandService

router = APIRouter()

# Router-level declaration; routes that list their own roles override it.
BRAND_ROLES = (Role.BRAND_OWNER, Role.SUPER_ADMIN, Role.SHOP_OWNER)

Reader = Annotated[Identity, Depends(require_roles(router_roles=BRAND_ROLES))]
Owner = Annotated[Identity, Depends(require_roles(Role.BRAND_OWNER, router_roles=BRAND_ROLES))]


def get_brand_service(db: Annotated[Session, Depends(get_db)]) -> BrandService:
    return BrandService(db)


Brands = Annotated[BrandService, Depends(get_brand_service)]


@router.post("", response_model=BrandResponse, status_code=status.HTTP_201_CREATED)
def create_brand(body: BrandCreate, identity: Owner, service: Brands) -> BrandResponse:
    return BrandResponse.model_validate(service.create(body, identity))


@router.get("", response_model=list[BrandResponse])
def list_brands(identity: Reader, service: Brands) -> list[BrandResponse]:
    """Brand owners see their brands, SUPER_ADMIN sees all, shop owners see linked brands."""
    return [BrandResponse.model_validate(b) for b in service.list_brands(identity)]


@router.get("/{brand_id}", response_model=BrandResponse)
def get_brand(brand_id: UUID, identity: Reader, service: Brands) -> BrandResponse:
    return BrandResponse.model_validate(service.get(brand_id, identity))


@router.patch("/{brand_id}", response_model=BrandResponse)
def update_brand(
    brand_id: UUID,
    body: BrandUpdate,
    identity: Owner,
    service: Brands,
) -> BrandResponse:
    return BrandResponse.model_validate(service.update(brand_id, body, identity))


@router.delete("/{brand_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_brand(brand_id: UUID, identity: Owner, service: Brands) -> None:
    service.delete(brand_id, identity)
