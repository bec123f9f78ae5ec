"""
Product Category Service — Service Layer (SRP / DIP)
"""
from math import ceil
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from referencedata.core.exceptions import ConflictException, ErrorKind, NotFoundException
from referencedata.models.product_category import ProductCategory
from referencedata.repositories.product_category_repository import ProductCategoryRepository
from referencedata.schemas.product_category import (
    ProductCategoryCreate,
    ProductCategoryListResponse,
    ProductCategoryUpdate,
)


class ProductCategoryService:

    def __init__(self, db: Session):
        self._repo = ProductCategoryRepository(db)

    def list_categories(self, page: int = 0, page_size: int = 20) -> ProductCategoryListResponse:
        items, total = self._repo.list_paginated(
            page=page,
            page_size=page_size,
            order_by=ProductCategory.display_order,
        )
        return ProductCategoryListResponse(
            items=items, total=total, page=page, page_size=page_size,
            total_pages=ceil(total / page_size) if total else 0,
        )

    def get_category(self, category_id: UUID) -> ProductCategory:
        category = self._repo.get_by_id(category_id)
        if not category:
            raise NotFoundException(ErrorKind.PRODUCT_CATEGORY_NOT_FOUND, "ProductCategory", category_id)
        return category

    def create_category(self, data: ProductCategoryCreate) -> ProductCategory:
        if self._repo.get_by_code(data.code):
            raise ConflictException(
                f"Product category with code '{data.code}' already exists",
                kind=ErrorKind.PRODUCT_CATEGORY_CODE_DUPLICATED,
                details={"code": data.code},
            )
        return self._repo.create(ProductCategory(id=uuid4(), **data.model_dump()))

    def update_category(self, category_id: UUID, data: ProductCategoryUpdate) -> ProductCategory:
        category = self.get_category(category_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        return self._repo.update(category, updates)

    def delete_category(self, category_id: UUID) -> None:
        self._repo.delete(self.get_category(category_id))
