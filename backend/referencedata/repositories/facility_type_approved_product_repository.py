"""
Facility Type Approved Product Repository: versioned search
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from referencedata.core.exceptions import (
    DataAccessException,
    ErrorKind,
    NotFoundException,
    ValidationException,
)
from referencedata.models.facility import Facility, FacilityType
from referencedata.models.facility_type_approved_product import FacilityTypeApprovedProduct
from referencedata.models.orderable import Orderable, ProgramOrderable
from referencedata.models.program import Program
from referencedata.repositories.query_builder import Eq, In, IsTrue, QueryBuilder
from referencedata.repositories.versioned import (
    Page,
    PageRequest,
    VersionedRepository,
    VersionIdentity,
    latest_versions,
    paginate,
)
from referencedata.utils.profiler import StepProfiler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FacilityTypeApprovedProductSearchParams:
    facility_id: Optional[UUID] = None
    facility_type_codes: Sequence[str] = ()
    program_id: Optional[UUID] = None
    program_code: Optional[str] = None
    full_supply: Optional[bool] = None
    orderable_ids: Sequence[UUID] = ()
    active: Optional[bool] = None

    def validate(self) -> None:
        if self.facility_id is not None and self.facility_type_codes:
            raise ValidationException(
                "Search by facility id and facility type codes at the same time is not supported",
                kind=ErrorKind.SEARCH_FACILITY_FILTER_CONFLICT,
                details={"facility_id": str(self.facility_id), "facility_type_codes": list(self.facility_type_codes)},
            )


class FacilityTypeApprovedProductRepository(VersionedRepository[FacilityTypeApprovedProduct]):

    def __init__(self, db: Session):
        super().__init__(FacilityTypeApprovedProduct, db)

    def search(
        self,
        params: FacilityTypeApprovedProductSearchParams,
        page_request: PageRequest,
    ) -> Page[FacilityTypeApprovedProduct]:
        params.validate()

        profiler = StepProfiler("FTAP_REPOSITORY_SEARCH", logger)
        try:
            identities = self.resolve_identities(params, profiler)

            profiler.start("PAGINATE")
            identity_page = paginate(identities, page_request)

            items: List[FacilityTypeApprovedProduct] = []
            if identity_page.total:
                profiler.start("HYDRATE")
                items = self.hydrate(identity_page.window)
        finally:
            profiler.stop()

        return Page.of(items, identity_page.total, page_request)

    def resolve_identities(
        self,
        params: FacilityTypeApprovedProductSearchParams,
        profiler: Optional[StepProfiler] = None,
    ) -> List[VersionIdentity]:
        facility_type_id = None
        if params.facility_id is not None:
            if profiler:
                profiler.start("SEARCH_FACILITY_TYPE_ID")
            facility_type_id = self.get_facility_type_id(params.facility_id)

        if profiler:
            profiler.start("RESOLVE_IDENTITIES")
        return self.execute_identity_query(self._identity_query(params, facility_type_id))

    def get_facility_type_id(self, facility_id: UUID) -> UUID:
        stmt = (
            select(FacilityType.id)
            .join(Facility, Facility.type_id == FacilityType.id)
            .where(Facility.id == facility_id)
        )
        try:
            type_id = self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise DataAccessException(
                "Unable to resolve facility type",
                details={"facility_id": str(facility_id)},
            ) from exc

        if type_id is None:
            logger.info("facility_not_found facility_id=%s", facility_id)
            raise NotFoundException(ErrorKind.FACILITY_NOT_FOUND, "Facility", facility_id)
        return type_id

    def _identity_query(
        self,
        params: FacilityTypeApprovedProductSearchParams,
        facility_type_id: Optional[UUID],
    ):
        ftap = FacilityTypeApprovedProduct
        latest_ftap = latest_versions(ftap, "latest_ftap")
        latest_orderable = latest_versions(Orderable, "latest_orderable")
        po = ProgramOrderable

        builder = (
            QueryBuilder(select(ftap.id, ftap.version_id).distinct())
            .join(
                latest_ftap,
                Eq(ftap.id, latest_ftap.c.id),
                Eq(ftap.version_id, latest_ftap.c.version_id),
            )
            .join(
                Program,
                Eq(Program.id, ftap.program_id),
                Eq(Program.id, params.program_id),
                Eq(Program.code, params.program_code or None),
            )
            .join(
                latest_orderable,
                Eq(latest_orderable.c.id, ftap.orderable_id),
                In(latest_orderable.c.id, params.orderable_ids),
            )
            .join(
                po,
                Eq(po.orderable_id, latest_orderable.c.id),
                Eq(po.orderable_version_id, latest_orderable.c.version_id),
                Eq(po.program_id, Program.id),
                IsTrue(po.active),
                Eq(po.full_supply, params.full_supply),
            )
            .join(
                FacilityType,
                Eq(FacilityType.id, ftap.facility_type_id),
                Eq(FacilityType.id, facility_type_id),
                In(FacilityType.code, params.facility_type_codes),
            )
            .where(Eq(ftap.active, True if params.active is None else params.active))
            .order_by(ftap.id, ftap.version_id)
        )
        return builder.build()
