from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ProductCategoryCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    display_name: str = Field(..., min_length=1, max_length=255)
    display_order: int = 0


class ProductCategoryUpdate(BaseModel):
    display_name: Optional[str] = Field(None, min_length=1, max_length=255)
    display_order: Optional[int] = None


class ProductCategoryResponse(BaseModel):
    id: UUID
    code: str
    display_name: str
    display_order: int

    class Config:
        from_attributes = True


class ProductCategoryListResponse(BaseModel):
    items: List[ProductCategoryResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
