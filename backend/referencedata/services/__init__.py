# Service Layer — Business Logic (SRP / DIP)
from referencedata.services.orderable_service import OrderableService
from referencedata.services.product_category_service import ProductCategoryService
from referencedata.services.facility_type_approved_product_service import FacilityTypeApprovedProductService
from referencedata.services.supported_program_service import SupportedProgramService
from referencedata.services.data_export_service import DataExportService
from referencedata.services.data_import_service import DataImportService

__all__ = [
    "OrderableService",
    "ProductCategoryService",
    "FacilityTypeApprovedProductService",
    "SupportedProgramService",
    "DataExportService",
    "DataImportService",
]
