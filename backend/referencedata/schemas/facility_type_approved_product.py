from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class FacilityTypeApprovedProductCreate(BaseModel):
    orderable_id: UUID
    program_id: UUID
    facility_type_id: UUID
    max_periods_of_stock: float = Field(..., ge=0)
    min_periods_of_stock: Optional[float] = Field(None, ge=0)
    emergency_order_point: Optional[float] = Field(None, ge=0)
    active: bool = True


class FacilityTypeApprovedProductUpdate(BaseModel):
    orderable_id: Optional[UUID] = None
    program_id: Optional[UUID] = None
    facility_type_id: Optional[UUID] = None
    max_periods_of_stock: Optional[float] = Field(None, ge=0)
    min_periods_of_stock: Optional[float] = Field(None, ge=0)
    emergency_order_point: Optional[float] = Field(None, ge=0)
    active: Optional[bool] = None


class FacilityTypeApprovedProductResponse(BaseModel):
    id: UUID
    version_id: int
    orderable_id: UUID
    program_id: UUID
    program_code: str
    facility_type_id: UUID
    facility_type_code: str
    max_periods_of_stock: float
    min_periods_of_stock: Optional[float] = None
    emergency_order_point: Optional[float] = None
    active: bool
    last_updated: datetime

    class Config:
        from_attributes = True


class FacilityTypeApprovedProductListResponse(BaseModel):
    items: List[FacilityTypeApprovedProductResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
