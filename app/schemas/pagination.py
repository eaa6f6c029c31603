"""Shared page metadata for paginated list responses."""

import math

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


class PageMeta(BaseModel):
    """Pagination metadata: total rows, current page, page size and last page."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    last_page: int = Field(..., ge=0, alias="lastPage")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(
            total=total,
            page=page,
            limit=limit,
            last_page=math.ceil(total / limit) if limit else 0,
        )
