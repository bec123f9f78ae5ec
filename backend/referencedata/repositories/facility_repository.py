from typing import List, Optional

from sqlalchemy.orm import Session

from referencedata.models.facility import Facility, FacilityType
from referencedata.models.program import Program, SupportedProgram
from referencedata.repositories.base import BaseRepository


class FacilityRepository(BaseRepository[Facility]):
    def __init__(self, db: Session):
        super().__init__(Facility, db)

    def get_by_code(self, code: str) -> Optional[Facility]:
        return self.db.query(Facility).filter(Facility.code == code).first()


class FacilityTypeRepository(BaseRepository[FacilityType]):
    def __init__(self, db: Session):
        super().__init__(FacilityType, db)


class ProgramRepository(BaseRepository[Program]):
    def __init__(self, db: Session):
        super().__init__(Program, db)

    def get_by_code(self, code: str) -> Optional[Program]:
        return self.db.query(Program).filter(Program.code == code).first()


class SupportedProgramRepository(BaseRepository[SupportedProgram]):
    def __init__(self, db: Session):
        super().__init__(SupportedProgram, db)

    def get(self, facility_id, program_id) -> Optional[SupportedProgram]:
        return self.db.get(SupportedProgram, (facility_id, program_id))

    def list_for_facility(self, facility_id) -> List[SupportedProgram]:
        return (
            self.db.query(SupportedProgram)
            .join(Program, Program.id == SupportedProgram.program_id)
            .filter(SupportedProgram.facility_id == facility_id)
            .order_by(Program.code)
            .all()
        )

    def list_ordered(self) -> List[SupportedProgram]:
        return (
            self.db.query(SupportedProgram)
            .join(Facility, Facility.id == SupportedProgram.facility_id)
            .join(Program, Program.id == SupportedProgram.program_id)
            .order_by(Facility.code, Program.code)
            .all()
        )
