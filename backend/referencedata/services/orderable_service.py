"""
Orderable Service — Service Layer (SRP / DIP)

Orderables are never updated in place: an update writes the next version
and re-attaches the program associations to it.
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from referencedata.core.exceptions import ConflictException, ErrorKind, NotFoundException
from referencedata.models.orderable import Dispensable, Orderable, ProgramOrderable
from referencedata.repositories.facility_repository import ProgramRepository
from referencedata.repositories.orderable_repository import OrderableRepository, OrderableSearchParams
from referencedata.repositories.product_category_repository import ProductCategoryRepository
from referencedata.repositories.versioned import PageRequest
from referencedata.schemas.orderable import (
    DispensableSchema,
    OrderableCreate,
    OrderableListResponse,
    OrderableUpdate,
    PacksToOrderResponse,
    ProgramOrderableSchema,
)

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    "product_code",
    "full_product_name",
    "description",
    "net_content",
    "pack_rounding_threshold",
    "round_to_zero",
    "identifiers",
    "extra_data",
)


class OrderableService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = OrderableRepository(db)
        self._program_repo = ProgramRepository(db)
        self._category_repo = ProductCategoryRepository(db)

    def search(self, params: OrderableSearchParams, page_request: PageRequest) -> OrderableListResponse:
        page = self._repo.search(params, page_request)
        return OrderableListResponse(
            items=page.items, total=page.total, page=page.page,
            page_size=page.page_size, total_pages=page.total_pages,
        )

    def get(self, orderable_id: UUID, version_id: Optional[int] = None) -> Orderable:
        if version_id is None:
            orderable = self._repo.get_latest(orderable_id)
        else:
            orderable = self._repo.get_version(orderable_id, version_id)
        if not orderable:
            raise NotFoundException(ErrorKind.ORDERABLE_NOT_FOUND, "Orderable", orderable_id)
        return orderable

    def create(self, body: OrderableCreate) -> Orderable:
        if self._repo.code_taken_by_other(body.product_code):
            raise self._duplicated_code(body.product_code)

        orderable = Orderable(
            id=uuid4(),
            version_id=1,
            dispensable=self._resolve_dispensable(body.dispensable),
            last_updated=datetime.now(timezone.utc),
            **body.model_dump(include=set(SCALAR_FIELDS)),
        )
        orderable.program_orderables = self._build_program_orderables(body.programs)
        result = self._repo.create(orderable)
        logger.info("orderable_created id=%s code=%s", result.id, result.product_code)
        return result

    def update(self, orderable_id: UUID, body: OrderableUpdate) -> Orderable:
        current = self.get(orderable_id)
        updates = body.model_dump(exclude_unset=True, include=set(SCALAR_FIELDS))
        if "product_code" in updates and self._repo.code_taken_by_other(updates["product_code"], orderable_id):
            raise self._duplicated_code(updates["product_code"])

        values = {field: getattr(current, field) for field in SCALAR_FIELDS}
        values.update(updates)

        dispensable = current.dispensable
        if body.dispensable is not None:
            dispensable = self._resolve_dispensable(body.dispensable)

        if body.programs is not None:
            programs = body.programs
        else:
            programs = [ProgramOrderableSchema.model_validate(po) for po in current.program_orderables]

        next_version = Orderable(
            id=current.id,
            version_id=self._repo.next_version_id(current.id),
            dispensable=dispensable,
            last_updated=datetime.now(timezone.utc),
            **values,
        )
        next_version.program_orderables = self._build_program_orderables(programs)
        result = self._repo.create(next_version)
        logger.info("orderable_versioned id=%s version_id=%s", result.id, result.version_id)
        return result

    def packs_to_order(
        self,
        orderable_id: UUID,
        dispensing_units: int,
        version_id: Optional[int] = None,
    ) -> PacksToOrderResponse:
        orderable = self.get(orderable_id, version_id)
        return PacksToOrderResponse(
            orderable_id=orderable.id,
            version_id=orderable.version_id,
            dispensing_units=dispensing_units,
            packs_to_order=orderable.packs_to_order(dispensing_units),
        )

    def _resolve_dispensable(self, schema: DispensableSchema) -> Dispensable:
        existing = self._repo.find_dispensable(
            schema.dispensing_unit, schema.size_code, schema.route_of_administration
        )
        return existing or Dispensable(id=uuid4(), **schema.model_dump())

    def _build_program_orderables(self, programs: Iterable[ProgramOrderableSchema]) -> List[ProgramOrderable]:
        result = []
        for program in programs:
            if not self._program_repo.get_by_id(program.program_id):
                raise NotFoundException(ErrorKind.PROGRAM_NOT_FOUND, "Program", program.program_id)
            if program.category_id is not None and not self._category_repo.get_by_id(program.category_id):
                raise NotFoundException(ErrorKind.PRODUCT_CATEGORY_NOT_FOUND, "ProductCategory", program.category_id)
            result.append(ProgramOrderable(id=uuid4(), **program.model_dump()))
        return result

    @staticmethod
    def _duplicated_code(product_code: str) -> ConflictException:
        return ConflictException(
            f"Orderable with product code '{product_code}' already exists",
            kind=ErrorKind.ORDERABLE_CODE_DUPLICATED,
            details={"product_code": product_code},
        )
