"""
Orderables Router — Thin Controller (SRP / DIP)
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from referencedata.database import get_db
from referencedata.repositories.orderable_repository import OrderableSearchParams
from referencedata.repositories.versioned import PageRequest
from referencedata.routers._paging import get_page_request
from referencedata.schemas.orderable import (
    OrderableCreate,
    OrderableListResponse,
    OrderableResponse,
    OrderableUpdate,
    PacksToOrderResponse,
)
from referencedata.services.orderable_service import OrderableService

router = APIRouter(prefix="/orderables", tags=["Orderables"])


def get_orderable_service(db: Session = Depends(get_db)) -> OrderableService:
    return OrderableService(db)


@router.get("", response_model=OrderableListResponse)
def search_orderables(
    code: Optional[str] = None,
    name: Optional[str] = None,
    program: Optional[str] = Query(None, description="Program code"),
    id: Optional[List[UUID]] = Query(None),
    page_request: PageRequest = Depends(get_page_request),
    service: OrderableService = Depends(get_orderable_service),
):
    params = OrderableSearchParams(code=code, name=name, program_code=program, ids=tuple(id or ()))
    return service.search(params, page_request)


@router.get("/{orderable_id}", response_model=OrderableResponse)
def get_orderable(
    orderable_id: UUID,
    version_id: Optional[int] = Query(None, alias="versionId", ge=1),
    service: OrderableService = Depends(get_orderable_service),
):
    return service.get(orderable_id, version_id)


@router.get("/{orderable_id}/packs-to-order", response_model=PacksToOrderResponse)
def packs_to_order(
    orderable_id: UUID,
    dispensing_units: int = Query(..., alias="dispensingUnits"),
    version_id: Optional[int] = Query(None, alias="versionId", ge=1),
    service: OrderableService = Depends(get_orderable_service),
):
    return service.packs_to_order(orderable_id, dispensing_units, version_id)


@router.post("", response_model=OrderableResponse, status_code=201)
def create_orderable(
    body: OrderableCreate,
    service: OrderableService = Depends(get_orderable_service),
):
    return service.create(body)


@router.put("/{orderable_id}", response_model=OrderableResponse)
def update_orderable(
    orderable_id: UUID,
    body: OrderableUpdate,
    service: OrderableService = Depends(get_orderable_service),
):
    return service.update(orderable_id, body)
