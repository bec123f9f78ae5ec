"""
Pytest configuration and fixtures for reference data tests.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "standard")

from types import SimpleNamespace
from typing import List, Optional
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from referencedata.database import Base, get_db
from referencedata.main import app
from referencedata.models import (
    Dispensable,
    Facility,
    FacilityType,
    FacilityTypeApprovedProduct,
    Orderable,
    ProductCategory,
    Program,
    ProgramOrderable,
)

engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Fresh in-memory database per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def statements():
    """SQL statements sent to the test database while the fixture is active."""
    captured: List[str] = []

    def _capture(conn, cursor, statement, parameters, context, executemany):
        captured.append(statement)

    event.listen(engine, "before_cursor_execute", _capture)
    yield captured
    event.remove(engine, "before_cursor_execute", _capture)


# ── Seed helpers ──────────────────────────────────────────────────────────────

def make_orderable(
    db,
    code: str,
    programs=(),
    category: Optional[ProductCategory] = None,
    version_id: int = 1,
    orderable_id: Optional[UUID] = None,
    full_supply: bool = True,
    program_active: bool = True,
    net_content: int = 10,
) -> Orderable:
    orderable = Orderable(
        id=orderable_id or uuid4(),
        version_id=version_id,
        product_code=code,
        full_product_name=f"Product {code}",
        dispensable=Dispensable(id=uuid4(), dispensing_unit="each"),
        net_content=net_content,
        pack_rounding_threshold=0,
        round_to_zero=False,
    )
    orderable.program_orderables = [
        ProgramOrderable(
            id=uuid4(),
            program_id=program.id,
            category_id=category.id if category else None,
            active=program_active,
            full_supply=full_supply,
        )
        for program in programs
    ]
    db.add(orderable)
    db.commit()
    return orderable


def make_ftap(
    db,
    orderable: Orderable,
    program: Program,
    facility_type: FacilityType,
    version_id: int = 1,
    ftap_id: Optional[UUID] = None,
    active: bool = True,
    max_periods_of_stock: float = 3.0,
) -> FacilityTypeApprovedProduct:
    ftap = FacilityTypeApprovedProduct(
        id=ftap_id or uuid4(),
        version_id=version_id,
        orderable_id=orderable.id,
        program_id=program.id,
        facility_type_id=facility_type.id,
        max_periods_of_stock=max_periods_of_stock,
        active=active,
    )
    db.add(ftap)
    db.commit()
    return ftap


@pytest.fixture
def reference_data(db):
    health_center = FacilityType(id=uuid4(), code="health_center", name="Health Center")
    district_hospital = FacilityType(id=uuid4(), code="district_hospital", name="District Hospital")
    epi = Program(id=uuid4(), code="EPI", name="Expanded Program on Immunization")
    family_planning = Program(id=uuid4(), code="FP", name="Family Planning")
    db.add_all([health_center, district_hospital, epi, family_planning])
    db.flush()

    facility = Facility(id=uuid4(), code="HC01", name="Comfort Health Clinic", type_id=health_center.id)
    hospital = Facility(id=uuid4(), code="DH01", name="Balaka District Hospital", type_id=district_hospital.id)
    category = ProductCategory(id=uuid4(), code="vaccines", display_name="Vaccines", display_order=1)
    db.add_all([facility, hospital, category])
    db.commit()

    return SimpleNamespace(
        health_center=health_center,
        district_hospital=district_hospital,
        epi=epi,
        family_planning=family_planning,
        facility=facility,
        hospital=hospital,
        category=category,
    )


@pytest.fixture
def epi_ftaps(db, reference_data) -> List[FacilityTypeApprovedProduct]:
    """Fifteen active EPI approvals for health centers, one per orderable."""
    ftaps = []
    for index in range(15):
        orderable = make_orderable(
            db, f"EPI{index:03d}", programs=[reference_data.epi], category=reference_data.category
        )
        ftaps.append(make_ftap(db, orderable, reference_data.epi, reference_data.health_center))
    return ftaps


@pytest.fixture
def many_epi_ftaps(db, reference_data) -> int:
    """More approvals than SQLite allows terms in one expression; committed in one go."""
    count = 1200
    rd = reference_data
    for index in range(count):
        orderable = Orderable(
            id=uuid4(),
            version_id=1,
            product_code=f"BULK{index:04d}",
            full_product_name=f"Product BULK{index:04d}",
            dispensable=Dispensable(id=uuid4(), dispensing_unit="each"),
            net_content=10,
            pack_rounding_threshold=0,
            round_to_zero=False,
        )
        orderable.program_orderables = [
            ProgramOrderable(id=uuid4(), program_id=rd.epi.id, category_id=rd.category.id, active=True, full_supply=True)
        ]
        db.add(orderable)
        db.add(FacilityTypeApprovedProduct(
            id=uuid4(),
            version_id=1,
            orderable_id=orderable.id,
            program_id=rd.epi.id,
            facility_type_id=rd.health_center.id,
            max_periods_of_stock=3.0,
            active=True,
        ))
    db.commit()
    return count
