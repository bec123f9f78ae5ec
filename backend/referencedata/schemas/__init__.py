from referencedata.schemas.orderable import (
    DispensableSchema,
    ProgramOrderableSchema,
    OrderableCreate,
    OrderableUpdate,
    OrderableResponse,
    OrderableListResponse,
    PacksToOrderResponse,
)
from referencedata.schemas.product_category import (
    ProductCategoryCreate,
    ProductCategoryUpdate,
    ProductCategoryResponse,
    ProductCategoryListResponse,
)
from referencedata.schemas.facility_type_approved_product import (
    FacilityTypeApprovedProductCreate,
    FacilityTypeApprovedProductUpdate,
    FacilityTypeApprovedProductResponse,
    FacilityTypeApprovedProductListResponse,
)
from referencedata.schemas.supported_program import SupportedProgramCreate, SupportedProgramResponse
from referencedata.schemas.data_transfer import ImportedFileResult, DataImportResponse
