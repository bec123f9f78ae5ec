"""
Domain exceptions.

Every exception carries an ErrorKind. The kind knows the HTTP status and the
localisation message key; both are only looked at by the API layer
(see referencedata.main and to_http_exception).
"""
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class ErrorKind(Enum):
    FACILITY_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "referenceData.error.facility.notFound")
    PROGRAM_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "referenceData.error.program.notFound")
    ORDERABLE_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "referenceData.error.orderable.notFound")
    PRODUCT_CATEGORY_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "referenceData.error.productCategory.notFound")
    FACILITY_TYPE_NOT_FOUND = (status.HTTP_404_NOT_FOUND, "referenceData.error.facilityType.notFound")
    FTAP_NOT_FOUND = (
        status.HTTP_404_NOT_FOUND,
        "referenceData.error.facilityTypeApprovedProduct.notFound",
    )
    ORDERABLE_CODE_DUPLICATED = (status.HTTP_409_CONFLICT, "referenceData.error.orderable.productCode.duplicated")
    PRODUCT_CATEGORY_CODE_DUPLICATED = (
        status.HTTP_409_CONFLICT,
        "referenceData.error.productCategory.code.duplicated",
    )
    SUPPORTED_PROGRAM_DUPLICATED = (
        status.HTTP_409_CONFLICT,
        "referenceData.error.facility.supportedProgram.duplicated",
    )
    SEARCH_FACILITY_FILTER_CONFLICT = (
        status.HTTP_400_BAD_REQUEST,
        "referenceData.error.facilityTypeApprovedProduct.search.facilityAndTypeCodes",
    )
    EXPORT_LACK_PARAMS = (status.HTTP_400_BAD_REQUEST, "referenceData.error.export.lackParameters")
    EXPORT_MISSING_DATA_PARAMETER = (status.HTTP_400_BAD_REQUEST, "referenceData.error.export.missingDataParameter")
    EXPORT_MISSING_FORMAT_PARAMETER = (
        status.HTTP_400_BAD_REQUEST,
        "referenceData.error.export.missingFormatParameter",
    )
    EXPORT_INVALID_FORMAT = (status.HTTP_400_BAD_REQUEST, "referenceData.error.export.invalidFormat")
    EXPORT_INVALID_DATA = (status.HTTP_400_BAD_REQUEST, "referenceData.error.export.invalidData")
    IMPORT_INVALID_FILE = (status.HTTP_400_BAD_REQUEST, "referenceData.error.import.invalidFile")
    IMPORT_UNSUPPORTED_FILE = (status.HTTP_400_BAD_REQUEST, "referenceData.error.import.unsupportedFile")
    IMPORT_INVALID_ROW = (status.HTTP_400_BAD_REQUEST, "referenceData.error.import.invalidRow")
    DATA_ACCESS = (status.HTTP_503_SERVICE_UNAVAILABLE, "referenceData.error.dataAccess")

    def __init__(self, http_status: int, message_key: str):
        self.http_status = http_status
        self.message_key = message_key


class ReferenceDataException(Exception):
    """Base class for all domain exceptions raised by this service."""

    default_kind: Optional[ErrorKind] = None

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.kind = kind or self.default_kind
        self.details = details or {}
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.kind.name if self.kind else type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message_key": self.kind.message_key if self.kind else None,
            "message": self.message,
            "details": self.details,
        }


class NotFoundException(ReferenceDataException):
    def __init__(self, kind: ErrorKind, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} with id '{entity_id}' not found",
            kind=kind,
            details={"entity": entity, "id": str(entity_id)},
        )


class ValidationException(ReferenceDataException):
    pass


class ConflictException(ReferenceDataException):
    pass


class DataAccessException(ReferenceDataException):
    default_kind = ErrorKind.DATA_ACCESS

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


def to_http_exception(exc: ReferenceDataException) -> HTTPException:
    status_code = exc.kind.http_status if exc.kind else status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=status_code, detail=exc.to_dict())
