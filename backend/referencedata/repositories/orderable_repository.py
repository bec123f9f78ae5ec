"""
Orderable Repository: versioned search
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from referencedata.models.orderable import Dispensable, Orderable, ProgramOrderable
from referencedata.models.program import Program
from referencedata.repositories.query_builder import Contains, Eq, In, QueryBuilder
from referencedata.repositories.versioned import (
    Page,
    PageRequest,
    VersionedRepository,
    VersionIdentity,
    latest_versions,
    paginate,
)


@dataclass(frozen=True)
class OrderableSearchParams:
    code: Optional[str] = None
    name: Optional[str] = None
    program_code: Optional[str] = None
    ids: Sequence[UUID] = ()


class OrderableRepository(VersionedRepository[Orderable]):

    def __init__(self, db: Session):
        super().__init__(Orderable, db)

    def search(self, params: OrderableSearchParams, page_request: PageRequest) -> Page[Orderable]:
        identity_page = paginate(self.resolve_identities(params), page_request)
        items = self.hydrate(identity_page.window) if identity_page.total else []
        return Page.of(items, identity_page.total, page_request)

    def resolve_identities(self, params: OrderableSearchParams) -> List[VersionIdentity]:
        latest = latest_versions(Orderable, "latest_orderable")
        builder = QueryBuilder(select(Orderable.id, Orderable.version_id).distinct()).join(
            latest,
            Eq(Orderable.id, latest.c.id),
            Eq(Orderable.version_id, latest.c.version_id),
        )
        if params.program_code:
            builder.join(
                ProgramOrderable,
                Eq(ProgramOrderable.orderable_id, Orderable.id),
                Eq(ProgramOrderable.orderable_version_id, Orderable.version_id),
            ).join(
                Program,
                Eq(Program.id, ProgramOrderable.program_id),
                Eq(Program.code, params.program_code),
            )
        builder.where(
            Contains(Orderable.product_code, params.code),
            Contains(Orderable.full_product_name, params.name),
            In(Orderable.id, params.ids),
        ).order_by(Orderable.id, Orderable.version_id)
        return self.execute_identity_query(builder.build())

    def list_latest(self) -> List[Orderable]:
        return self.hydrate(self.resolve_identities(OrderableSearchParams()))

    def code_taken_by_other(self, product_code: str, orderable_id: Optional[UUID] = None) -> bool:
        q = self.db.query(Orderable.id).filter(Orderable.product_code == product_code)
        if orderable_id is not None:
            q = q.filter(Orderable.id != orderable_id)
        return q.first() is not None

    def find_dispensable(self, dispensing_unit: Optional[str], size_code: Optional[str],
                         route_of_administration: Optional[str]) -> Optional[Dispensable]:
        return (
            self.db.query(Dispensable)
            .filter(
                Dispensable.dispensing_unit == dispensing_unit,
                Dispensable.size_code == size_code,
                Dispensable.route_of_administration == route_of_administration,
            )
            .first()
        )
