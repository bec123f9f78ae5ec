"""
Data Export Service: configuration data as CSV files inside a ZIP archive
"""
import logging
from typing import Callable, Dict, List, Mapping

import pandas as pd
from sqlalchemy.orm import Session

from referencedata.core.exceptions import ErrorKind, ValidationException
from referencedata.repositories.facility_repository import SupportedProgramRepository
from referencedata.repositories.facility_type_approved_product_repository import (
    FacilityTypeApprovedProductRepository,
    FacilityTypeApprovedProductSearchParams,
)
from referencedata.repositories.orderable_repository import OrderableRepository
from referencedata.repositories.product_category_repository import ProductCategoryRepository
from referencedata.repositories.versioned import PageRequest
from referencedata.utils.file_helper import file_map_to_zip

logger = logging.getLogger(__name__)

FORMAT = "format"
DATA = "data"
SUPPORTED_FORMATS = {"csv"}

ORDERABLE_COLUMNS = [
    "id", "versionId", "productCode", "fullProductName", "description", "netContent",
    "packRoundingThreshold", "roundToZero", "dispensingUnit", "tradeItemId", "commodityTypeId",
]
PROGRAM_ORDERABLE_COLUMNS = [
    "orderableCode", "programCode", "categoryCode", "active", "fullSupply", "displayOrder",
    "dosesPerPatient", "pricePerPack",
]
PRODUCT_CATEGORY_COLUMNS = ["code", "displayName", "displayOrder"]
FTAP_COLUMNS = [
    "id", "versionId", "orderableCode", "programCode", "facilityTypeCode", "maxPeriodsOfStock",
    "minPeriodsOfStock", "emergencyOrderPoint", "active",
]
SUPPORTED_PROGRAM_COLUMNS = ["facilityCode", "programCode", "active", "locallyActive", "startDate"]


def check_required_params(params: Mapping[str, str]) -> List[str]:
    """Validate the export request and return the requested data set names."""
    if not params:
        raise ValidationException("Export parameters are missing", kind=ErrorKind.EXPORT_LACK_PARAMS)
    if DATA not in params:
        raise ValidationException("Parameter 'data' is required", kind=ErrorKind.EXPORT_MISSING_DATA_PARAMETER)
    if FORMAT not in params:
        raise ValidationException(
            "Parameter 'format' is required", kind=ErrorKind.EXPORT_MISSING_FORMAT_PARAMETER
        )

    export_format = params[FORMAT].strip().lower()
    if export_format not in SUPPORTED_FORMATS:
        raise ValidationException(
            f"Unsupported export format '{params[FORMAT]}'",
            kind=ErrorKind.EXPORT_INVALID_FORMAT,
            details={"format": params[FORMAT], "supported": sorted(SUPPORTED_FORMATS)},
        )

    names = [name.strip() for name in params[DATA].split(",") if name.strip()]
    unknown = [name for name in names if name not in DataExportService.EXPORTERS]
    if not names or unknown:
        raise ValidationException(
            "Unknown data set requested for export",
            kind=ErrorKind.EXPORT_INVALID_DATA,
            details={"unknown": unknown, "supported": sorted(DataExportService.EXPORTERS)},
        )
    return list(dict.fromkeys(names))


class DataExportService:

    EXPORTERS: Dict[str, str] = {
        "orderable": "_orderable_rows",
        "programOrderable": "_program_orderable_rows",
        "productCategory": "_product_category_rows",
        "facilityTypeApprovedProduct": "_ftap_rows",
        "supportedProgram": "_supported_program_rows",
    }

    COLUMNS: Dict[str, List[str]] = {
        "orderable": ORDERABLE_COLUMNS,
        "programOrderable": PROGRAM_ORDERABLE_COLUMNS,
        "productCategory": PRODUCT_CATEGORY_COLUMNS,
        "facilityTypeApprovedProduct": FTAP_COLUMNS,
        "supportedProgram": SUPPORTED_PROGRAM_COLUMNS,
    }

    def __init__(self, db: Session):
        self._orderable_repo = OrderableRepository(db)
        self._category_repo = ProductCategoryRepository(db)
        self._ftap_repo = FacilityTypeApprovedProductRepository(db)
        self._supported_program_repo = SupportedProgramRepository(db)

    def export_data(self, params: Mapping[str, str]) -> bytes:
        names = check_required_params(params)
        files: Dict[str, bytes] = {}
        for name in names:
            rows_for: Callable[[], List[dict]] = getattr(self, self.EXPORTERS[name])
            frame = pd.DataFrame(rows_for(), columns=self.COLUMNS[name])
            files[f"{name}.csv"] = frame.to_csv(index=False).encode("utf-8")
            logger.info("export_file_built name=%s rows=%s", name, len(frame))
        return file_map_to_zip(files)

    def _orderable_rows(self) -> List[dict]:
        return [
            {
                "id": str(o.id),
                "versionId": o.version_id,
                "productCode": o.product_code,
                "fullProductName": o.full_product_name,
                "description": o.description,
                "netContent": o.net_content,
                "packRoundingThreshold": o.pack_rounding_threshold,
                "roundToZero": o.round_to_zero,
                "dispensingUnit": o.dispensable.dispensing_unit if o.dispensable else None,
                "tradeItemId": o.trade_item_identifier,
                "commodityTypeId": o.commodity_type_identifier,
            }
            for o in self._orderable_repo.list_latest()
        ]

    def _program_orderable_rows(self) -> List[dict]:
        rows = []
        for o in self._orderable_repo.list_latest():
            for po in o.program_orderables:
                rows.append({
                    "orderableCode": o.product_code,
                    "programCode": po.program.code,
                    "categoryCode": po.category.code if po.category else None,
                    "active": po.active,
                    "fullSupply": po.full_supply,
                    "displayOrder": po.display_order,
                    "dosesPerPatient": po.doses_per_patient,
                    "pricePerPack": po.price_per_pack,
                })
        return rows

    def _product_category_rows(self) -> List[dict]:
        return [
            {"code": c.code, "displayName": c.display_name, "displayOrder": c.display_order}
            for c in self._category_repo.list_ordered()
        ]

    def _ftap_rows(self) -> List[dict]:
        page = self._ftap_repo.search(FacilityTypeApprovedProductSearchParams(), PageRequest())
        orderables = {o.id: o for o in self._orderable_repo.list_latest()}
        return [
            {
                "id": str(f.id),
                "versionId": f.version_id,
                "orderableCode": orderables[f.orderable_id].product_code if f.orderable_id in orderables else None,
                "programCode": f.program_code,
                "facilityTypeCode": f.facility_type_code,
                "maxPeriodsOfStock": f.max_periods_of_stock,
                "minPeriodsOfStock": f.min_periods_of_stock,
                "emergencyOrderPoint": f.emergency_order_point,
                "active": f.active,
            }
            for f in page.items
        ]

    def _supported_program_rows(self) -> List[dict]:
        return [
            {
                "facilityCode": sp.facility_code,
                "programCode": sp.program_code,
                "active": sp.active,
                "locallyActive": sp.locally_active,
                "startDate": sp.start_date.isoformat() if sp.start_date else None,
            }
            for sp in self._supported_program_repo.list_ordered()
        ]
