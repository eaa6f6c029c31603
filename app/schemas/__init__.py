"""Pydantic request/response schemas."""

from app.schemas.auth import (
    Identity,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UpdateProfileRequest,
    UsersPage,
)
from app.schemas.catalog import (
    BrandCreate,
    BrandResponse,
    BrandUpdate,
    ProductCreate,
    ProductResponse,
    ProductsPage,
    ProductUpdate,
)
from app.schemas.health import HealthResponse
from app.schemas.pagination import PageMeta

__all__ = [
    "BrandCreate",
    "BrandResponse",
    "BrandUpdate",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "MessageResponse",
    "PageMeta",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "ProductsPage",
    "ProfileResponse",
    "PublicUser",
    "RegisterRequest",
    "RegisterResponse",
    "TokenResponse",
    "UpdateProfileRequest",
    "UsersPage",
]
