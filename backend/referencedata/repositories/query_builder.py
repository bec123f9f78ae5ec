"""
Composable predicates for dynamically filtered queries.

Filters are expressed as typed predicate objects and rendered into bound
SQLAlchemy expressions. A predicate built from a missing value (None or an
empty collection) is not applicable and is dropped, so callers can pass
every optional filter unconditionally:

    builder = QueryBuilder(select(Program.id))
    builder.where(Eq(Program.code, code), In(Program.id, ids))
    stmt = builder.build()
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from sqlalchemy import and_, true
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement


class Predicate(ABC):

    @abstractmethod
    def is_applicable(self) -> bool:
        ...

    @abstractmethod
    def to_clause(self) -> ColumnElement:
        ...


@dataclass(frozen=True, eq=False)
class Eq(Predicate):
    """column = value. The value may be a literal or another column."""

    column: Any
    value: Any

    def is_applicable(self) -> bool:
        return self.value is not None

    def to_clause(self) -> ColumnElement:
        return self.column == self.value


@dataclass(frozen=True, eq=False)
class In(Predicate):
    column: Any
    values: Optional[Sequence[Any]]

    def is_applicable(self) -> bool:
        return bool(self.values)

    def to_clause(self) -> ColumnElement:
        return self.column.in_(list(self.values))


@dataclass(frozen=True, eq=False)
class Range(Predicate):
    """Inclusive bounds; either side may be open."""

    column: Any
    lower: Any = None
    upper: Any = None

    def is_applicable(self) -> bool:
        return self.lower is not None or self.upper is not None

    def to_clause(self) -> ColumnElement:
        clauses = []
        if self.lower is not None:
            clauses.append(self.column >= self.lower)
        if self.upper is not None:
            clauses.append(self.column <= self.upper)
        return and_(*clauses)


@dataclass(frozen=True, eq=False)
class Contains(Predicate):
    """Case-insensitive substring match."""

    column: Any
    value: Optional[str]

    def is_applicable(self) -> bool:
        return bool(self.value)

    def to_clause(self) -> ColumnElement:
        return self.column.icontains(self.value, autoescape=True)


@dataclass(frozen=True, eq=False)
class IsTrue(Predicate):
    column: Any

    def is_applicable(self) -> bool:
        return True

    def to_clause(self) -> ColumnElement:
        return self.column.is_(True)


def render(*predicates: Predicate) -> ColumnElement:
    clauses = [p.to_clause() for p in predicates if p.is_applicable()]
    if not clauses:
        return true()
    return and_(*clauses)


class QueryBuilder:

    def __init__(self, stmt: Select):
        self._stmt = stmt

    def join(self, target: Any, *on: Predicate) -> "QueryBuilder":
        self._stmt = self._stmt.join(target, render(*on))
        return self

    def where(self, *predicates: Predicate) -> "QueryBuilder":
        if any(p.is_applicable() for p in predicates):
            self._stmt = self._stmt.where(render(*predicates))
        return self

    def order_by(self, *columns: Union[ColumnElement, Any]) -> "QueryBuilder":
        self._stmt = self._stmt.order_by(*columns)
        return self

    def build(self) -> Select:
        return self._stmt
