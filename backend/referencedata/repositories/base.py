"""
Base Repository — Repository Pattern (GoF)
"""
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy.orm import Session

from referencedata.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):

    def __init__(self, model: Type[ModelT], db: Session):
        self.model = model
        self.db = db

    def get_by_id(self, entity_id: Any) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def list_paginated(self, page: int = 0, page_size: int = 20, order_by=None) -> Tuple[List[ModelT], int]:
        q = self.db.query(self.model)
        total = q.count()
        if order_by is not None:
            q = q.order_by(order_by)
        items = q.offset(page * page_size).limit(page_size).all()
        return items, total

    def create(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelT, updates: Dict[str, Any]) -> ModelT:
        for field, value in updates.items():
            setattr(entity, field, value)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.commit()
