"""Product create/read/update/soft-delete with ownership checks and scoped listing."""

import logging
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Brand, Product
from app.schemas.auth import Identity
from app.schemas.catalog import ProductCreate, ProductResponse, ProductsPage, ProductUpdate
from app.schemas.pagination import PageMeta
from app.services.errors import BadRequestError, NotFoundError
from app.services.ownership import OwnershipResolver

logger = logging.getLogger(__name__)

DUPLICATE_CODE = "Product code already exists for this brand"


def _contains_pattern(term: str) -> str:
    """LIKE pattern matching `term` literally anywhere; `\\` is the escape character."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProductService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.ownership = OwnershipResolver(db)

    def create(self, body: ProductCreate, identity: Identity) -> Product:
        brand = self.db.query(Brand).filter(Brand.id == body.brand_id).first()
        if brand is None:
            raise NotFoundError("Brand not found")
        self.ownership.authorize(identity, brand.owner_id, require_ownership=True)

        exists = (
            self.db.query(Product)
            .filter(Product.brand_id == brand.id, Product.product_code == body.product_code)
            .first()
        )
        if exists is not None:
            raise BadRequestError(DUPLICATE_CODE)

        product = Product(
            name=body.name,
            product_code=body.product_code,
            description=body.description,
            brand_id=brand.id,
            owner_id=brand.owner_id,
        )
        self.db.add(product)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequestError(DUPLICATE_CODE) from e
        self.db.refresh(product)
        logger.info("Product created product_id=%s brand_id=%s", product.id, brand.id)
        return product

    def get(
        self,
        product_id: UUID,
        identity: Identity,
        require_ownership: bool = False,
    ) -> Product:
        product = (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.is_active.is_(True))
            .first()
        )
        if product is None:
            raise NotFoundError("Product not found")
        self.ownership.authorize(identity, product.owner_id, require_ownership=require_ownership)
        return product

    def list_products(
        self,
        identity: Identity,
        page: int,
        limit: int,
        search: str | None = None,
        brand_id: UUID | None = None,
    ) -> ProductsPage:
        owner_ids = self.ownership.visible_owner_ids(identity)
        if owner_ids is not None and not owner_ids:
            return ProductsPage(data=[], meta=PageMeta.build(total=0, page=page, limit=limit))

        query = self.db.query(Product).filter(Product.is_active.is_(True))
        if owner_ids is not None:
            query = query.filter(Product.owner_id.in_(owner_ids))
        if brand_id is not None:
            query = query.filter(Product.brand_id == brand_id)
        if search and search.strip():
            pattern = _contains_pattern(search.strip())
            query = query.filter(
                or_(
                    Product.name.ilike(pattern, escape="\\"),
                    Product.product_code.ilike(pattern, escape="\\"),
                )
            )

        total = query.count()
        products = (
            query.order_by(Product.created_at.desc(), Product.id)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return ProductsPage(
            data=[ProductResponse.model_validate(p) for p in products],
            meta=PageMeta.build(total=total, page=page, limit=limit),
        )

    def update(self, product_id: UUID, body: ProductUpdate, identity: Identity) -> Product:
        product = self.get(product_id, identity, require_ownership=True)
        if body.name is not None:
            product.name = body.name
        if body.description is not None:
            product.description = body.description
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product_id: UUID, identity: Identity) -> Product:
        product = self.get(product_id, identity, require_ownership=True)
        product.is_active = False
        self.db.commit()
        self.db.refresh(product)
        logger.info("Product deactivated product_id=%s", product_id)
        return product
