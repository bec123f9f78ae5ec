import uuid

from sqlalchemy import Boolean, Column, Date, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from referencedata.database import Base


class Program(Base):
    __tablename__ = "programs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    periods_skippable = Column(Boolean, nullable=False, default=False)
    show_non_full_supply_tab = Column(Boolean, nullable=False, default=False)


class SupportedProgram(Base):
    """A program run at a facility."""

    __tablename__ = "supported_programs"

    facility_id = Column(Uuid, ForeignKey("facilities.id", ondelete="CASCADE"), primary_key=True)
    program_id = Column(Uuid, ForeignKey("programs.id"), primary_key=True)
    active = Column(Boolean, nullable=False, default=True)
    locally_active = Column(Boolean, nullable=False, default=True)
    start_date = Column(Date, nullable=True)

    facility = relationship("Facility", back_populates="supported_programs")
    program = relationship("Program")

    @property
    def facility_code(self) -> str:
        return self.facility.code

    @property
    def program_code(self) -> str:
        return self.program.code
