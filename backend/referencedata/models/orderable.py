import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from referencedata.database import Base

TRADE_ITEM = "tradeItem"
COMMODITY_TYPE = "commodityType"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Dispensable(Base):
    __tablename__ = "dispensables"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    dispensing_unit = Column(String(255), nullable=True)
    size_code = Column(String(255), nullable=True)
    route_of_administration = Column(String(255), nullable=True)

    def same_as(self, other: Optional["Dispensable"]) -> bool:
        return other is not None and (
            self.dispensing_unit,
            self.size_code,
            self.route_of_administration,
        ) == (
            other.dispensing_unit,
            other.size_code,
            other.route_of_administration,
        )


class Orderable(Base):
    """
    A commodity that can be ordered, usually through a Program.

    Orderables are versioned: the primary key is (id, version_id) and every
    update is written as a new row with version_id + 1. Two orderables are
    equal when they share a product code, regardless of version.
    """

    __tablename__ = "orderables"
    __table_args__ = (
        UniqueConstraint("product_code", "version_id", name="unq_productcode_versionid"),
        CheckConstraint("version_id >= 1", name="ck_orderables_version_min_1"),
        CheckConstraint("net_content >= 0", name="ck_orderables_net_content_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    version_id = Column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=False, default=1
    )
    product_code = Column(String(255), nullable=False, index=True)
    full_product_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    dispensable_id = Column(Uuid, ForeignKey("dispensables.id"), nullable=False)
    net_content = Column(BigInteger, nullable=False, default=0)
    pack_rounding_threshold = Column(BigInteger, nullable=False, default=0)
    round_to_zero = Column(Boolean, nullable=False, default=False)
    identifiers = Column(JSON, nullable=False, default=dict)
    extra_data = Column(JSON, nullable=False, default=dict)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    dispensable = relationship("Dispensable", cascade="save-update, merge")
    program_orderables = relationship(
        "ProgramOrderable",
        back_populates="orderable",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Orderable) and self.product_code == other.product_code

    def __hash__(self) -> int:
        return hash(self.product_code)

    @property
    def trade_item_identifier(self) -> Optional[str]:
        return (self.identifiers or {}).get(TRADE_ITEM)

    @property
    def commodity_type_identifier(self) -> Optional[str]:
        return (self.identifiers or {}).get(COMMODITY_TYPE)

    def get_program_orderable(self, program_id: uuid.UUID) -> Optional["ProgramOrderable"]:
        for program_orderable in self.program_orderables:
            if program_orderable.program_id == program_id and program_orderable.active:
                return program_orderable
        return None

    def has_dispensable(self, dispensable: Dispensable) -> bool:
        return self.dispensable is not None and self.dispensable.same_as(dispensable)

    def packs_to_order(self, dispensing_units: int) -> int:
        """Number of packs to order to cover the given dispensing units."""
        net_content = self.net_content or 0
        if dispensing_units <= 0 or net_content == 0:
            return 0

        packs, remainder = divmod(dispensing_units, net_content)
        if remainder > 0 and remainder > (self.pack_rounding_threshold or 0):
            packs += 1

        if packs == 0 and not self.round_to_zero:
            packs = 1

        return packs


class ProgramOrderable(Base):
    """Association between one orderable version and a program."""

    __tablename__ = "program_orderables"
    __table_args__ = (
        ForeignKeyConstraint(
            ["orderable_id", "orderable_version_id"],
            ["orderables.id", "orderables.version_id"],
            ondelete="CASCADE",
        ),
        UniqueConstraint(
            "orderable_id",
            "orderable_version_id",
            "program_id",
            name="uq_program_orderables_orderable_program",
        ),
        Index("ix_program_orderables_orderable", "orderable_id", "orderable_version_id"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    orderable_id = Column(Uuid, nullable=False)
    orderable_version_id = Column(BigInteger().with_variant(Integer, "sqlite"), nullable=False)
    program_id = Column(Uuid, ForeignKey("programs.id"), nullable=False, index=True)
    category_id = Column(Uuid, ForeignKey("product_categories.id"), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    full_supply = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0)
    doses_per_patient = Column(Integer, nullable=True)
    price_per_pack = Column(Numeric(19, 2), nullable=True)
    valid_from = Column(Date, nullable=True)
    valid_to = Column(Date, nullable=True)

    orderable = relationship("Orderable", back_populates="program_orderables")
    program = relationship("Program")
    category = relationship("ProductCategory")
