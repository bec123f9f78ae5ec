# Repository Layer — Data Access (Repository Pattern, GoF)
from referencedata.repositories.base import BaseRepository
from referencedata.repositories.versioned import (
    IdentityPage,
    Page,
    PageRequest,
    VersionedRepository,
    VersionIdentity,
    paginate,
)
from referencedata.repositories.facility_repository import (
    FacilityRepository,
    FacilityTypeRepository,
    ProgramRepository,
    SupportedProgramRepository,
)
from referencedata.repositories.product_category_repository import ProductCategoryRepository
from referencedata.repositories.orderable_repository import OrderableRepository, OrderableSearchParams
from referencedata.repositories.facility_type_approved_product_repository import (
    FacilityTypeApprovedProductRepository,
    FacilityTypeApprovedProductSearchParams,
)

__all__ = [
    "BaseRepository",
    "IdentityPage",
    "Page",
    "PageRequest",
    "VersionedRepository",
    "VersionIdentity",
    "paginate",
    "FacilityRepository",
    "FacilityTypeRepository",
    "ProgramRepository",
    "SupportedProgramRepository",
    "ProductCategoryRepository",
    "OrderableRepository",
    "OrderableSearchParams",
    "FacilityTypeApprovedProductRepository",
    "FacilityTypeApprovedProductSearchParams",
]
