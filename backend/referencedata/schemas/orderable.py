from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field


class DispensableSchema(BaseModel):
    dispensing_unit: Optional[str] = None
    size_code: Optional[str] = None
    route_of_administration: Optional[str] = None

    class Config:
        from_attributes = True


class ProgramOrderableSchema(BaseModel):
    program_id: UUID
    category_id: Optional[UUID] = None
    active: bool = True
    full_supply: bool = True
    display_order: int = 0
    doses_per_patient: Optional[int] = Field(None, ge=0)
    price_per_pack: Optional[Decimal] = Field(None, ge=0)
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None

    class Config:
        from_attributes = True


class OrderableCreate(BaseModel):
    product_code: str = Field(..., min_length=1, max_length=255)
    full_product_name: Optional[str] = None
    description: Optional[str] = None
    dispensable: DispensableSchema = Field(default_factory=DispensableSchema)
    net_content: int = Field(0, ge=0)
    pack_rounding_threshold: int = Field(0, ge=0)
    round_to_zero: bool = False
    programs: List[ProgramOrderableSchema] = Field(default_factory=list)
    identifiers: Dict[str, str] = Field(default_factory=dict)
    extra_data: Dict[str, str] = Field(default_factory=dict)


class OrderableUpdate(BaseModel):
    product_code: Optional[str] = Field(None, min_length=1, max_length=255)
    full_product_name: Optional[str] = None
    description: Optional[str] = None
    dispensable: Optional[DispensableSchema] = None
    net_content: Optional[int] = Field(None, ge=0)
    pack_rounding_threshold: Optional[int] = Field(None, ge=0)
    round_to_zero: Optional[bool] = None
    programs: Optional[List[ProgramOrderableSchema]] = None
    identifiers: Optional[Dict[str, str]] = None
    extra_data: Optional[Dict[str, str]] = None


class OrderableResponse(BaseModel):
    id: UUID
    version_id: int
    product_code: str
    full_product_name: Optional[str] = None
    description: Optional[str] = None
    dispensable: DispensableSchema
    net_content: int
    pack_rounding_threshold: int
    round_to_zero: bool
    programs: List[ProgramOrderableSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices("programs", "program_orderables"),
    )
    identifiers: Dict[str, str] = Field(default_factory=dict)
    extra_data: Dict[str, str] = Field(default_factory=dict)
    last_updated: datetime

    class Config:
        from_attributes = True


class OrderableListResponse(BaseModel):
    items: List[OrderableResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class PacksToOrderResponse(BaseModel):
    orderable_id: UUID
    version_id: int
    dispensing_units: int
    packs_to_order: int
