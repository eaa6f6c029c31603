"""Request/response schemas for brand and product endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.pagination import PageMeta


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class BrandCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _strip_required(v)


class BrandUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class BrandResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    owner_id: UUID = Field(..., alias="ownerId")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class ProductCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    product_code: str = Field(..., min_length=1, max_length=100, alias="productCode")
    brand_id: UUID = Field(..., alias="brandId")
    description: str | None = Field(default=None, max_length=10_000)

    @field_validator("name", "product_code")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        return _strip_required(v)


class ProductUpdate(BaseModel):
    """Only name and description are editable; code and brand are fixed."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=10_000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class ProductResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    product_code: str = Field(..., alias="productCode")
    description: str | None = None
    brand_id: UUID = Field(..., alias="brandId")
    owner_id: UUID = Field(..., alias="ownerId")
    is_active: bool = Field(..., alias="isActive")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class ProductsPage(BaseModel):
    data: list[ProductResponse]
    meta: PageMeta
