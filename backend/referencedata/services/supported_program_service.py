"""
Supported Program Service: programs run at a facility
"""
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from referencedata.core.exceptions import ConflictException, ErrorKind, NotFoundException
from referencedata.models.facility import Facility
from referencedata.models.program import SupportedProgram
from referencedata.repositories.facility_repository import (
    FacilityRepository,
    ProgramRepository,
    SupportedProgramRepository,
)
from referencedata.schemas.supported_program import SupportedProgramCreate


class SupportedProgramService:

    def __init__(self, db: Session):
        self._repo = SupportedProgramRepository(db)
        self._facility_repo = FacilityRepository(db)
        self._program_repo = ProgramRepository(db)

    def list_supported_programs(self, facility_id: UUID) -> List[SupportedProgram]:
        self._get_facility(facility_id)
        return self._repo.list_for_facility(facility_id)

    def add_supported_program(self, facility_id: UUID, data: SupportedProgramCreate) -> SupportedProgram:
        self._get_facility(facility_id)
        if not self._program_repo.get_by_id(data.program_id):
            raise NotFoundException(ErrorKind.PROGRAM_NOT_FOUND, "Program", data.program_id)
        if self._repo.get(facility_id, data.program_id):
            raise ConflictException(
                "Program is already supported by the facility",
                kind=ErrorKind.SUPPORTED_PROGRAM_DUPLICATED,
                details={"facility_id": str(facility_id), "program_id": str(data.program_id)},
            )
        return self._repo.create(SupportedProgram(facility_id=facility_id, **data.model_dump()))

    def _get_facility(self, facility_id: UUID) -> Facility:
        facility = self._facility_repo.get_by_id(facility_id)
        if not facility:
            raise NotFoundException(ErrorKind.FACILITY_NOT_FOUND, "Facility", facility_id)
        return facility
