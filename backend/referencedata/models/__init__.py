from referencedata.models.facility import Facility, FacilityType
from referencedata.models.program import Program, SupportedProgram
from referencedata.models.product_category import ProductCategory
from referencedata.models.orderable import Dispensable, Orderable, ProgramOrderable
from referencedata.models.facility_type_approved_product import FacilityTypeApprovedProduct

__all__ = [
    "Facility",
    "FacilityType",
    "Program",
    "SupportedProgram",
    "ProductCategory",
    "Dispensable",
    "Orderable",
    "ProgramOrderable",
    "FacilityTypeApprovedProduct",
]
