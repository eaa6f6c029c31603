"""Tests for OwnershipResolver: per-role access decisions and visible owner scoping."""

import unittest
import uuid

from app.models import Role
from app.schemas.auth import Identity
from app.services.errors import ForbiddenError
from app.services.ownership import OwnershipResolver
from tests.support import create_user, identity_of, link_shop, make_session_factory


class TestOwnershipResolver(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.resolver = OwnershipResolver(self.db)
        self.owner_a = create_user(self.db, "a@example.com", Role.BRAND_OWNER, "555-0001")
        self.owner_b = create_user(self.db, "b@example.com", Role.BRAND_OWNER, "555-0002")
        self.shop = create_user(self.db, "shop@example.com", Role.SHOP_OWNER, "555-0003")
        self.admin = create_user(self.db, "root@example.com", Role.SUPER_ADMIN, "555-0004")
        self.profile_a = self.owner_a.brand_owner
        self.profile_b = self.owner_b.brand_owner

    def tearDown(self) -> None:
        self.db.close()

    def test_super_admin_always_allowed(self) -> None:
        self.resolver.authorize(identity_of(self.admin), self.profile_a.id)
        self.resolver.authorize(identity_of(self.admin), uuid.uuid4())

    def test_brand_owner_allowed_on_own_resources(self) -> None:
        self.resolver.authorize(identity_of(self.owner_a), self.profile_a.id)
        self.resolver.authorize(identity_of(self.owner_a), self.profile_a.id, require_ownership=False)

    def test_brand_owner_denied_on_other_owner(self) -> None:
        for require in (True, False):
            with self.subTest(require_ownership=require):
                with self.assertRaises(ForbiddenError):
                    self.resolver.authorize(
                        identity_of(self.owner_a), self.profile_b.id, require_ownership=require
                    )

    def test_brand_owner_without_profile_denied(self) -> None:
        orphan = Identity(id=uuid.uuid4(), role=Role.BRAND_OWNER)
        with self.assertRaises(ForbiddenError):
            self.resolver.authorize(orphan, self.profile_a.id)

    def test_shop_owner_needs_active_link_and_read_only(self) -> None:
        shop = identity_of(self.shop)
        with self.assertRaises(ForbiddenError):
            self.resolver.authorize(shop, self.profile_a.id, require_ownership=False)
        link_shop(self.db, self.profile_a, self.shop)
        self.resolver.authorize(shop, self.profile_a.id, require_ownership=False)
        with self.assertRaises(ForbiddenError):
            self.resolver.authorize(shop, self.profile_a.id, require_ownership=True)
        with self.assertRaises(ForbiddenError):
            self.resolver.authorize(shop, self.profile_b.id, require_ownership=False)

    def test_inactive_link_denied(self) -> None:
        link_shop(self.db, self.profile_a, self.shop, active=False)
        with self.assertRaises(ForbiddenError):
            self.resolver.authorize(identity_of(self.shop), self.profile_a.id, require_ownership=False)

    def test_other_roles_denied(self) -> None:
        for role in (Role.END_USER, Role.ADMINISTRATOR):
            with self.subTest(role=role):
                with self.assertRaises(ForbiddenError):
                    self.resolver.authorize(
                        Identity(id=uuid.uuid4(), role=role),
                        self.profile_a.id,
                        require_ownership=False,
                    )

    def test_visible_owner_ids(self) -> None:
        self.assertIsNone(self.resolver.visible_owner_ids(identity_of(self.admin)))
        self.assertEqual(
            self.resolver.visible_owner_ids(identity_of(self.owner_a)), [self.profile_a.id]
        )
        self.assertEqual(self.resolver.visible_owner_ids(identity_of(self.shop)), [])
        link_shop(self.db, self.profile_b, self.shop)
        self.assertEqual(
            self.resolver.visible_owner_ids(identity_of(self.shop)), [self.profile_b.id]
        )
        with self.assertRaises(ForbiddenError):
            self.resolver.visible_owner_ids(Identity(id=uuid.uuid4(), role=Role.END_USER))


if __name__ == "__main__":
    unittest.main()
