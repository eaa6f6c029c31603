"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.catalog import Brand, BrandOwnerShop, Product
from app.models.user import BrandOwner, Role, User

__all__ = ["Base", "Brand", "BrandOwner", "BrandOwnerShop", "Product", "Role", "User"]
