from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from referencedata.database import get_db
from referencedata.schemas.supported_program import SupportedProgramCreate, SupportedProgramResponse
from referencedata.services.supported_program_service import SupportedProgramService

router = APIRouter(prefix="/facilities/{facility_id}/supported-programs", tags=["Supported Programs"])


def get_supported_program_service(db: Session = Depends(get_db)) -> SupportedProgramService:
    return SupportedProgramService(db)


@router.get("", response_model=List[SupportedProgramResponse])
def list_supported_programs(
    facility_id: UUID,
    service: SupportedProgramService = Depends(get_supported_program_service),
):
    return service.list_supported_programs(facility_id)


@router.post("", response_model=SupportedProgramResponse, status_code=201)
def add_supported_program(
    facility_id: UUID,
    body: SupportedProgramCreate,
    service: SupportedProgramService = Depends(get_supported_program_service),
):
    return service.add_supported_program(facility_id, body)
