"""
Product Categories Router — Thin Controller (SRP / DIP)
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from referencedata.config import settings
from referencedata.database import get_db
from referencedata.schemas.product_category import (
    ProductCategoryCreate,
    ProductCategoryListResponse,
    ProductCategoryResponse,
    ProductCategoryUpdate,
)
from referencedata.services.product_category_service import ProductCategoryService

router = APIRouter(prefix="/product-categories", tags=["Product Categories"])


def get_category_service(db: Session = Depends(get_db)) -> ProductCategoryService:
    return ProductCategoryService(db)


@router.get("", response_model=ProductCategoryListResponse)
def list_product_categories(
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: ProductCategoryService = Depends(get_category_service),
):
    return service.list_categories(page=page, page_size=size)


@router.get("/{category_id}", response_model=ProductCategoryResponse)
def get_product_category(
    category_id: UUID,
    service: ProductCategoryService = Depends(get_category_service),
):
    return service.get_category(category_id)


@router.post("", response_model=ProductCategoryResponse, status_code=201)
def create_product_category(
    body: ProductCategoryCreate,
    service: ProductCategoryService = Depends(get_category_service),
):
    return service.create_category(body)


@router.put("/{category_id}", response_model=ProductCategoryResponse)
def update_product_category(
    category_id: UUID,
    body: ProductCategoryUpdate,
    service: ProductCategoryService = Depends(get_category_service),
):
    return service.update_category(category_id, body)


@router.delete("/{category_id}", status_code=204)
def delete_product_category(
    category_id: UUID,
    service: ProductCategoryService = Depends(get_category_service),
):
    service.delete_category(category_id)
    return Response(status_code=204)
