"""카테고리 Pydantic 스키마.

Category request/response schemas.
"""

from datetime import datetime

from pydantic import Field

from erp_hub.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str | None = None
    color: str | None = None


class CategoryOut(CamelModel):
    id: str
    name: str
    description: str | None = None
    color: str | None = None
    created_at: datetime
    updated_at: datetime


class CategoryWithCount(CategoryOut):
    issue_count: int = 0
