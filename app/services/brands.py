"""Brand CRUD scoped by the ownership resolver."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from app.models import Brand, Product
from app.schemas.auth import Identity
from app.schemas.catalog import BrandCreate, BrandUpdate
from app.services.errors import ForbiddenError, NotFoundError
from app.services.ownership import OwnershipResolver

logger = logging.getLogger(__name__)


class BrandService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.ownership = OwnershipResolver(db)

    def create(self, body: BrandCreate, identity: Identity) -> Brand:
        owner = self.ownership.brand_owner_profile(identity)
        brand = Brand(name=body.name, owner_id=owner.id)
        self.db.add(brand)
        self.db.commit()
        self.db.refresh(brand)
        logger.info("Brand created brand_id=%s owner_id=%s", brand.id, owner.id)
        return brand

    def list_brands(self, identity: Identity) -> list[Brand]:
        owner_ids = self.ownership.visible_owner_ids(identity)
        query = self.db.query(Brand)
        if owner_ids is not None:
            if not owner_ids:
                return []
            query = query.filter(Brand.owner_id.in_(owner_ids))
        return query.order_by(Brand.created_at, Brand.id).all()

    def get(self, brand_id: UUID, identity: Identity, require_ownership: bool = False) -> Brand:
        brand = self.db.query(Brand).filter(Brand.id == brand_id).first()
        if brand is None:
            raise NotFoundError("Brand not found")
        self.ownership.authorize(identity, brand.owner_id, require_ownership=require_ownership)
        return brand

    def update(self, brand_id: UUID, body: BrandUpdate, identity: Identity) -> Brand:
        brand = self.get(brand_id, identity, require_ownership=True)
        if body.name is not None:
            brand.name = body.name
        self.db.commit()
        self.db.refresh(brand)
        return brand

    def delete(self, brand_id: UUID, identity: Identity) -> None:
        """Hard delete; refused while the brand still has products."""
        brand = self.get(brand_id, identity, require_ownership=True)
        product_count = self.db.query(Product).filter(Product.brand_id == brand.id).count()
        if product_count > 0:
            raise ForbiddenError("Cannot delete brand with existing products")
        self.db.delete(brand)
        self.db.commit()
        logger.info("Brand deleted brand_id=%s", brand_id)
