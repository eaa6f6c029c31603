"""Request/response schemas for auth endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.models.user import Role
from app.schemas.pagination import PageMeta

PHONE_MAX_LEN = 32
NAME_MAX_LEN = 100
BUSINESS_NAME_MAX_LEN = 255


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class RegisterRequest(BaseModel):
    """Brand owner registration: identity fields plus the business name."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, alias="firstName")
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LEN, alias="lastName")
    phone: str = Field(..., min_length=1, max_length=PHONE_MAX_LEN)
    business_name: str = Field(
        ..., min_length=1, max_length=BUSINESS_NAME_MAX_LEN, alias="businessName"
    )

    @field_validator("first_name", "phone", "business_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: UUID = Field(..., alias="userId")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RefreshRequest(BaseModel):
    """Optional body for clients that cannot send the refresh cookie."""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class PublicUser(BaseModel):
    """Identity summary safe to return to clients (no password or token hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    role: Role


class TokenResponse(BaseModel):
    """Access token (and rotated refresh token) returned by login and refresh."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken", description="JWT access token")
    refresh_token: str | None = Field(
        default=None, alias="refreshToken", description="JWT refresh token"
    )
    token_type: str = Field(default="bearer", alias="tokenType")
    user: PublicUser


class Identity(BaseModel):
    """Resolved caller (id, role) attached by the access guard."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    role: Role


class BusinessProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    business_name: str = Field(..., alias="businessName")


class ProfileResponse(BaseModel):
    """GET /auth/profile body; business is set only for brand owners."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    email: str
    role: Role
    first_name: str = Field(..., alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    phone: str
    business: BusinessProfile | None = None
    created_at: datetime = Field(..., alias="createdAt")


class UpdateProfileRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str | None = Field(
        default=None, min_length=1, max_length=NAME_MAX_LEN, alias="firstName"
    )
    last_name: str | None = Field(default=None, max_length=NAME_MAX_LEN, alias="lastName")
    phone: str | None = Field(default=None, min_length=1, max_length=PHONE_MAX_LEN)
    business_name: str | None = Field(
        default=None, min_length=1, max_length=BUSINESS_NAME_MAX_LEN, alias="businessName"
    )

    @field_validator("first_name", "phone", "business_name")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_required(v)


class MessageResponse(BaseModel):
    message: str


class UserListItem(BaseModel):
    """User entry for admin list (no password or token hash)."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    email: str
    phone: str
    role: Role
    first_name: str = Field(..., alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    created_at: datetime = Field(..., alias="createdAt")


class UsersPage(BaseModel):
    """Response for GET /auth/admin/users (SUPER_ADMIN only)."""

    data: list[UserListItem]
    meta: PageMeta
