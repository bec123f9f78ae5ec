"""
Versioned entities: lookup and paging by (id, version_id).

A search over a versioned model runs in two explicit phases:

1. resolve: a projection query returns the matching identities only
   (one VersionIdentity per row, deduplicated, ordered by id then version);
2. hydrate: the entities for one page of identities are fetched with an
   exact (id, version_id) row-value match, in chunks of HYDRATION_CHUNK_SIZE.

paginate() sits between the two and works on the identity list alone, so the
total is known without materialising rows and historical versions can never
leak into a page.
"""
import logging
from dataclasses import dataclass, field
from math import ceil
from typing import Any, Generic, Iterable, List, NamedTuple, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select, tuple_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select, Subquery

from referencedata.core.exceptions import DataAccessException
from referencedata.repositories.base import BaseRepository, ModelT

logger = logging.getLogger(__name__)

T = TypeVar("T")

# bound parameters per hydration query stay well under SQLite's variable limit
HYDRATION_CHUNK_SIZE = 500


class VersionIdentity(NamedTuple):
    id: UUID
    version_id: int


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index; size None or 0 means everything on one page."""

    page: int = 0
    size: Optional[int] = None

    def __post_init__(self):
        if self.page < 0:
            raise ValueError("page must not be negative")
        if self.size is not None and self.size < 0:
            raise ValueError("size must not be negative")

    @property
    def unpaged(self) -> bool:
        return not self.size

    @property
    def offset(self) -> int:
        return 0 if self.unpaged else self.page * self.size


@dataclass(frozen=True)
class IdentityPage:
    window: List[VersionIdentity]
    total: int


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 0
    page_size: int = 0
    total_pages: int = 0

    @classmethod
    def of(cls, items: List[T], total: int, page_request: PageRequest) -> "Page[T]":
        page_size = total if page_request.unpaged else page_request.size
        if page_request.unpaged:
            total_pages = 1 if total else 0
        else:
            total_pages = ceil(total / page_size) if total else 0
        return cls(
            items=items,
            total=total,
            page=page_request.page,
            page_size=page_size,
            total_pages=total_pages,
        )


def paginate(identities: List[VersionIdentity], page_request: PageRequest) -> IdentityPage:
    total = len(identities)
    if page_request.unpaged:
        window = [] if page_request.page > 0 else list(identities)
    else:
        start = page_request.offset
        window = identities[start:start + page_request.size]
    return IdentityPage(window=window, total=total)


def latest_versions(model: Type[Any], name: str) -> Subquery:
    """(id, version_id) of the newest version of every entity of `model`."""
    return (
        select(model.id.label("id"), func.max(model.version_id).label("version_id"))
        .group_by(model.id)
        .subquery(name)
    )


class VersionedRepository(BaseRepository[ModelT]):

    def __init__(self, model: Type[ModelT], db: Session):
        super().__init__(model, db)

    def get_version(self, entity_id: UUID, version_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, (entity_id, version_id))

    def get_latest(self, entity_id: UUID) -> Optional[ModelT]:
        return (
            self.db.query(self.model)
            .filter(self.model.id == entity_id)
            .order_by(self.model.version_id.desc())
            .first()
        )

    def next_version_id(self, entity_id: UUID) -> int:
        current = self.db.execute(
            select(func.max(self.model.version_id)).where(self.model.id == entity_id)
        ).scalar()
        return (current or 0) + 1

    def execute_identity_query(self, stmt: Select) -> List[VersionIdentity]:
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError as exc:
            logger.error("identity_query_failed model=%s error=%s", self.model.__name__, exc)
            raise DataAccessException(
                f"Unable to resolve {self.model.__name__} identities",
                details={"model": self.model.__name__},
            ) from exc

        seen = set()
        identities: List[VersionIdentity] = []
        for row in rows:
            identity = VersionIdentity(row[0], int(row[1]))
            if identity not in seen:
                seen.add(identity)
                identities.append(identity)
        return identities

    def hydrate(self, window: Iterable[VersionIdentity]) -> List[ModelT]:
        window = list(window)
        if not window:
            return []

        key = tuple_(self.model.id, self.model.version_id)
        rows: List[ModelT] = []
        try:
            for start in range(0, len(window), HYDRATION_CHUNK_SIZE):
                chunk = [tuple(identity) for identity in window[start:start + HYDRATION_CHUNK_SIZE]]
                rows.extend(self.db.query(self.model).filter(key.in_(chunk)).all())
        except SQLAlchemyError as exc:
            logger.error("hydration_failed model=%s size=%s error=%s", self.model.__name__, len(window), exc)
            raise DataAccessException(
                f"Unable to fetch {self.model.__name__} rows",
                details={"model": self.model.__name__, "requested": len(window)},
            ) from exc

        by_identity = {VersionIdentity(row.id, int(row.version_id)): row for row in rows}
        return [by_identity[identity] for identity in window if identity in by_identity]
