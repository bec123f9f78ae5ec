import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Uuid,
)
from sqlalchemy.orm import relationship

from referencedata.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FacilityTypeApprovedProduct(Base):
    """
    Approval of an orderable for a facility type within a program.

    Versioned like Orderable: the primary key is (id, version_id). The
    orderable is referenced by id only; searches join it on its latest version.
    """

    __tablename__ = "facility_type_approved_products"
    __table_args__ = (
        CheckConstraint("version_id >= 1", name="ck_ftap_version_min_1"),
        CheckConstraint("max_periods_of_stock >= 0", name="ck_ftap_max_periods_non_negative"),
        Index("ix_ftap_facility_type_program", "facility_type_id", "program_id"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    version_id = Column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=False, default=1
    )
    orderable_id = Column(Uuid, nullable=False, index=True)
    program_id = Column(Uuid, ForeignKey("programs.id"), nullable=False)
    facility_type_id = Column(Uuid, ForeignKey("facility_types.id"), nullable=False)
    max_periods_of_stock = Column(Float, nullable=False)
    min_periods_of_stock = Column(Float, nullable=True)
    emergency_order_point = Column(Float, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    program = relationship("Program", lazy="joined")
    facility_type = relationship("FacilityType", lazy="joined")

    @property
    def program_code(self) -> str:
        return self.program.code

    @property
    def facility_type_code(self) -> str:
        return self.facility_type.code
