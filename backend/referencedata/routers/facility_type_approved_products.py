"""
Facility Type Approved Products Router — Thin Controller (SRP / DIP)
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from referencedata.database import get_db
from referencedata.repositories.facility_type_approved_product_repository import (
    FacilityTypeApprovedProductSearchParams,
)
from referencedata.repositories.versioned import PageRequest
from referencedata.routers._paging import get_page_request
from referencedata.schemas.facility_type_approved_product import (
    FacilityTypeApprovedProductCreate,
    FacilityTypeApprovedProductListResponse,
    FacilityTypeApprovedProductResponse,
    FacilityTypeApprovedProductUpdate,
)
from referencedata.services.facility_type_approved_product_service import FacilityTypeApprovedProductService

router = APIRouter(prefix="/facility-type-approved-products", tags=["Facility Type Approved Products"])


def get_ftap_service(db: Session = Depends(get_db)) -> FacilityTypeApprovedProductService:
    return FacilityTypeApprovedProductService(db)


@router.get("", response_model=FacilityTypeApprovedProductListResponse)
def search_facility_type_approved_products(
    facility_id: Optional[UUID] = Query(None, alias="facility"),
    facility_type: Optional[List[str]] = Query(None, alias="facilityType"),
    program: Optional[UUID] = None,
    program_code: Optional[str] = Query(None, alias="programCode"),
    full_supply: Optional[bool] = Query(None, alias="fullSupply"),
    orderable_id: Optional[List[UUID]] = Query(None, alias="orderableId"),
    active: Optional[bool] = None,
    page_request: PageRequest = Depends(get_page_request),
    service: FacilityTypeApprovedProductService = Depends(get_ftap_service),
):
    params = FacilityTypeApprovedProductSearchParams(
        facility_id=facility_id,
        facility_type_codes=tuple(facility_type or ()),
        program_id=program,
        program_code=program_code,
        full_supply=full_supply,
        orderable_ids=tuple(orderable_id or ()),
        active=active,
    )
    return service.search(params, page_request)


@router.get("/{ftap_id}", response_model=FacilityTypeApprovedProductResponse)
def get_facility_type_approved_product(
    ftap_id: UUID,
    version_id: Optional[int] = Query(None, alias="versionId", ge=1),
    service: FacilityTypeApprovedProductService = Depends(get_ftap_service),
):
    return service.get(ftap_id, version_id)


@router.post("", response_model=FacilityTypeApprovedProductResponse, status_code=201)
def create_facility_type_approved_product(
    body: FacilityTypeApprovedProductCreate,
    service: FacilityTypeApprovedProductService = Depends(get_ftap_service),
):
    return service.create(body)


@router.put("/{ftap_id}", response_model=FacilityTypeApprovedProductResponse)
def update_facility_type_approved_product(
    ftap_id: UUID,
    body: FacilityTypeApprovedProductUpdate,
    service: FacilityTypeApprovedProductService = Depends(get_ftap_service),
):
    return service.update(ftap_id, body)


@router.delete("/{ftap_id}", response_model=FacilityTypeApprovedProductResponse)
def deactivate_facility_type_approved_product(
    ftap_id: UUID,
    service: FacilityTypeApprovedProductService = Depends(get_ftap_service),
):
    return service.deactivate(ftap_id)
