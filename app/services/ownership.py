"""Shared ownership checks for brand-owned resources (brands, products)."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from app.models import BrandOwner, BrandOwnerShop, Role
from app.schemas.auth import Identity
from app.services.errors import ForbiddenError

logger = logging.getLogger(__name__)


class OwnershipResolver:
    """
    Decides whether an identity may act on a resource owned by a BrandOwner profile.

    SUPER_ADMIN is always allowed. A BRAND_OWNER is allowed only on resources
    owned by its own profile. A SHOP_OWNER gets read access (require_ownership
    False) through an active delegation link. Everyone else is denied.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def brand_owner_profile(self, identity: Identity) -> BrandOwner:
        """Return the caller's BrandOwner profile; Forbidden if it has none."""
        profile = (
            self.db.query(BrandOwner).filter(BrandOwner.user_id == identity.id).first()
        )
        if profile is None:
            raise ForbiddenError("BrandOwner profile not found")
        return profile

    def has_active_link(self, shop_owner_id: UUID, brand_owner_id: UUID) -> bool:
        link = (
            self.db.query(BrandOwnerShop)
            .filter(
                BrandOwnerShop.shop_owner_id == shop_owner_id,
                BrandOwnerShop.brand_owner_id == brand_owner_id,
                BrandOwnerShop.is_active.is_(True),
            )
            .first()
        )
        return link is not None

    def authorize(
        self,
        identity: Identity,
        owner_id: UUID,
        require_ownership: bool = True,
    ) -> None:
        """Raise ForbiddenError unless identity may access a resource owned by owner_id."""
        if identity.role is Role.SUPER_ADMIN:
            return
        if identity.role is Role.BRAND_OWNER:
            profile = self.brand_owner_profile(identity)
            if profile.id != owner_id:
                logger.warning(
                    "Ownership denied: user_id=%s owner_id=%s", identity.id, owner_id
                )
                raise ForbiddenError("Access denied")
            return
        if identity.role is Role.SHOP_OWNER:
            if not require_ownership and self.has_active_link(identity.id, owner_id):
                return
            logger.warning(
                "Shop owner access denied: user_id=%s owner_id=%s", identity.id, owner_id
            )
            raise ForbiddenError("Access denied")
        raise ForbiddenError("Access denied")

    def visible_owner_ids(self, identity: Identity) -> list[UUID] | None:
        """
        Owner ids whose resources identity may list.
        None means unrestricted (SUPER_ADMIN); an empty list means nothing is visible.
        """
        if identity.role is Role.SUPER_ADMIN:
            return None
        if identity.role is Role.BRAND_OWNER:
            return [self.brand_owner_profile(identity).id]
        if identity.role is Role.SHOP_OWNER:
            rows = (
                self.db.query(BrandOwnerShop.brand_owner_id)
                .filter(
                    BrandOwnerShop.shop_owner_id == identity.id,
                    BrandOwnerShop.is_active.is_(True),
                )
                .all()
            )
            return [row[0] for row in rows]
        raise ForbiddenError("Access denied")
