"""
Facility Type Approved Product Service — Service Layer (SRP / DIP)
"""
import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from referencedata.core.exceptions import ErrorKind, NotFoundException
from referencedata.models.facility_type_approved_product import FacilityTypeApprovedProduct
from referencedata.repositories.facility_repository import FacilityTypeRepository, ProgramRepository
from referencedata.repositories.facility_type_approved_product_repository import (
    FacilityTypeApprovedProductRepository,
    FacilityTypeApprovedProductSearchParams,
)
from referencedata.repositories.orderable_repository import OrderableRepository
from referencedata.repositories.versioned import PageRequest
from referencedata.schemas.facility_type_approved_product import (
    FacilityTypeApprovedProductCreate,
    FacilityTypeApprovedProductListResponse,
    FacilityTypeApprovedProductUpdate,
)

logger = logging.getLogger(__name__)

VERSIONED_FIELDS = (
    "orderable_id",
    "program_id",
    "facility_type_id",
    "max_periods_of_stock",
    "min_periods_of_stock",
    "emergency_order_point",
    "active",
)


class FacilityTypeApprovedProductService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = FacilityTypeApprovedProductRepository(db)
        self._orderable_repo = OrderableRepository(db)
        self._program_repo = ProgramRepository(db)
        self._facility_type_repo = FacilityTypeRepository(db)

    def search(
        self,
        params: FacilityTypeApprovedProductSearchParams,
        page_request: PageRequest,
    ) -> FacilityTypeApprovedProductListResponse:
        page = self._repo.search(params, page_request)
        return FacilityTypeApprovedProductListResponse(
            items=page.items, total=page.total, page=page.page,
            page_size=page.page_size, total_pages=page.total_pages,
        )

    def get(self, ftap_id: UUID, version_id: Optional[int] = None) -> FacilityTypeApprovedProduct:
        if version_id is None:
            ftap = self._repo.get_latest(ftap_id)
        else:
            ftap = self._repo.get_version(ftap_id, version_id)
        if not ftap:
            raise NotFoundException(ErrorKind.FTAP_NOT_FOUND, "FacilityTypeApprovedProduct", ftap_id)
        return ftap

    def create(self, body: FacilityTypeApprovedProductCreate) -> FacilityTypeApprovedProduct:
        values = body.model_dump()
        self._check_references(values)
        ftap = FacilityTypeApprovedProduct(id=uuid4(), version_id=1, **values)
        result = self._repo.create(ftap)
        logger.info("ftap_created id=%s", result.id)
        return result

    def update(self, ftap_id: UUID, body: FacilityTypeApprovedProductUpdate) -> FacilityTypeApprovedProduct:
        return self._new_version(ftap_id, body.model_dump(exclude_unset=True))

    def deactivate(self, ftap_id: UUID) -> FacilityTypeApprovedProduct:
        return self._new_version(ftap_id, {"active": False})

    def _new_version(self, ftap_id: UUID, updates: dict) -> FacilityTypeApprovedProduct:
        current = self.get(ftap_id)
        values = {field: getattr(current, field) for field in VERSIONED_FIELDS}
        values.update(updates)
        self._check_references(values)

        next_version = FacilityTypeApprovedProduct(
            id=current.id,
            version_id=self._repo.next_version_id(current.id),
            last_updated=datetime.now(timezone.utc),
            **values,
        )
        result = self._repo.create(next_version)
        logger.info("ftap_versioned id=%s version_id=%s", result.id, result.version_id)
        return result

    def _check_references(self, values: dict) -> None:
        if not self._orderable_repo.get_latest(values["orderable_id"]):
            raise NotFoundException(ErrorKind.ORDERABLE_NOT_FOUND, "Orderable", values["orderable_id"])
        if not self._program_repo.get_by_id(values["program_id"]):
            raise NotFoundException(ErrorKind.PROGRAM_NOT_FOUND, "Program", values["program_id"])
        if not self._facility_type_repo.get_by_id(values["facility_type_id"]):
            raise NotFoundException(ErrorKind.FACILITY_TYPE_NOT_FOUND, "FacilityType", values["facility_type_id"])
