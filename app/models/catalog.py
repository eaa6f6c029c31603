"""ORM models for the catalog resources guarded by ownership checks."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

from app.models.base import Base


class BrandOwnerShop(Base):
    """Delegation link letting a SHOP_OWNER read a brand owner's catalog."""

    __tablename__ = "brand_owner_shops"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    brand_owner_id = Column(
        Uuid,
        ForeignKey("brand_owners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    shop_owner_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("brand_owner_id", "shop_owner_id", name="uq_brand_owner_shop"),
    )


class Brand(Base):
    __tablename__ = "brands"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    owner_id = Column(
        Uuid,
        ForeignKey("brand_owners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class Product(Base):
    """
    Product under a brand.

    owner_id duplicates the brand's owner so access checks need no join.
    Deletion is soft (is_active=False).
    """

    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    product_code = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    brand_id = Column(
        Uuid,
        ForeignKey("brands.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    owner_id = Column(
        Uuid,
        ForeignKey("brand_owners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("brand_id", "product_code", name="uq_products_brand_code"),
    )
