from typing import List, Optional

from sqlalchemy.orm import Session

from referencedata.models.product_category import ProductCategory
from referencedata.repositories.base import BaseRepository


class ProductCategoryRepository(BaseRepository[ProductCategory]):
    def __init__(self, db: Session):
        super().__init__(ProductCategory, db)

    def get_by_code(self, code: str) -> Optional[ProductCategory]:
        return self.db.query(ProductCategory).filter(ProductCategory.code == code).first()

    def list_ordered(self) -> List[ProductCategory]:
        return (
            self.db.query(ProductCategory)
            .order_by(ProductCategory.display_order, ProductCategory.code)
            .all()
        )
