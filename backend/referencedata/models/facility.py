import uuid

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from referencedata.database import Base


class FacilityType(Base):
    __tablename__ = "facility_types"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    display_order = Column(Integer, nullable=True)
    active = Column(Boolean, nullable=False, default=True)


class Facility(Base):
    __tablename__ = "facilities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    type_id = Column(Uuid, ForeignKey("facility_types.id"), nullable=False, index=True)
    active = Column(Boolean, nullable=False, default=True)
    enabled = Column(Boolean, nullable=False, default=True)

    type = relationship("FacilityType")
    supported_programs = relationship(
        "SupportedProgram",
        back_populates="facility",
        cascade="all, delete-orphan",
    )
