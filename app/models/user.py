"""ORM models for identities (auth and RBAC) and the brand owner profile."""

import enum
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from app.models.base import Base


class Role(str, enum.Enum):
    END_USER = "END_USER"
    ADMINISTRATOR = "ADMINISTRATOR"
    BRAND_OWNER = "BRAND_OWNER"
    SHOP_OWNER = "SHOP_OWNER"
    SUPER_ADMIN = "SUPER_ADMIN"


class User(Base):
    """
    Account for JWT authentication and role-based access control.

    refresh_token_hash holds the digest of the single valid refresh token (None
    after logout). token_version only grows; bumping it invalidates every
    refresh token issued before.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, length=32),
        nullable=False,
        default=Role.END_USER,
    )
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=True)
    refresh_token_hash = Column(String(255), nullable=True)
    token_version = Column(Integer, nullable=False, default=0, server_default="0")
    is_deleted = Column(Boolean, nullable=False, default=False, server_default="false")
    deleted_at = Column(DateTime(timezone=True), nullable=True)
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

    brand_owner = relationship(
        "BrandOwner",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        # Email and phone are unique among non-deleted identities only.
        Index(
            "uq_users_email_active",
            "email",
            unique=True,
            postgresql_where=is_deleted.is_(False),
            sqlite_where=is_deleted.is_(False),
        ),
        Index(
            "uq_users_phone_active",
            "phone",
            unique=True,
            postgresql_where=is_deleted.is_(False),
            sqlite_where=is_deleted.is_(False),
        ),
    )


class BrandOwner(Base):
    """Business profile of a BRAND_OWNER identity (one per user)."""

    __tablename__ = "brand_owners"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    business_name = Column(String(255), nullable=False)
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

    user = relationship("User", back_populates="brand_owner")
