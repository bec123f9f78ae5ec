# Thin HTTP layer: each module exposes `router` and a service factory
from referencedata.routers import (
    data_transfer,
    facility_type_approved_products,
    health,
    orderables,
    product_categories,
    supported_programs,
)

__all__ = [
    "data_transfer",
    "facility_type_approved_products",
    "health",
    "orderables",
    "product_categories",
    "supported_programs",
]
