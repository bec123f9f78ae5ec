"""
Data export / import Router: ZIP archives of CSV files
"""
from fastapi import APIRouter, Depends, File, Request, Response, UploadFile
from sqlalchemy.orm import Session

from referencedata.config import settings
from referencedata.database import get_db
from referencedata.schemas.data_transfer import DataImportResponse
from referencedata.services.data_export_service import DataExportService
from referencedata.services.data_import_service import DataImportService

router = APIRouter(tags=["Data Export / Import"])

ZIP_MEDIA_TYPE = "application/zip"


def get_export_service(db: Session = Depends(get_db)) -> DataExportService:
    return DataExportService(db)


def get_import_service(db: Session = Depends(get_db)) -> DataImportService:
    return DataImportService(db)


@router.get("/export-data", response_class=Response)
def export_data(
    request: Request,
    service: DataExportService = Depends(get_export_service),
):
    content = service.export_data(dict(request.query_params))
    return Response(
        content=content,
        media_type=ZIP_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment;filename={settings.EXPORT_FILE_NAME}"},
    )


@router.post("/import-data", response_model=DataImportResponse)
def import_data(
    file: UploadFile = File(...),
    service: DataImportService = Depends(get_import_service),
):
    return service.import_data(file.file.read())
