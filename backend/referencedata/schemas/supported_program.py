from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class SupportedProgramCreate(BaseModel):
    program_id: UUID
    active: bool = True
    locally_active: bool = True
    start_date: Optional[date] = None


class SupportedProgramResponse(BaseModel):
    facility_id: UUID
    program_id: UUID
    program_code: str
    active: bool
    locally_active: bool
    start_date: Optional[date] = None

    class Config:
        from_attributes = True
