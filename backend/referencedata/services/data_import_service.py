"""
Data Import Service: configuration data uploaded as CSV files inside a ZIP archive

Each supported file name maps to a persister that parses the CSV with pandas
and creates or updates rows. All files of one upload are committed together.
"""
import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import IO, Dict, List, Optional, Tuple, Type
from uuid import uuid4

import pandas as pd
from sqlalchemy.orm import Session

from referencedata.core.exceptions import ErrorKind, ValidationException
from referencedata.models.product_category import ProductCategory
from referencedata.models.program import SupportedProgram
from referencedata.repositories.facility_repository import (
    FacilityRepository,
    ProgramRepository,
    SupportedProgramRepository,
)
from referencedata.repositories.product_category_repository import ProductCategoryRepository
from referencedata.schemas.data_transfer import DataImportResponse, ImportedFileResult
from referencedata.utils.file_helper import zip_to_file_map

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "t", "1", "yes", "y"}
FALSE_VALUES = {"false", "f", "0", "no", "n"}


def _parse_bool(value: str, default: bool) -> bool:
    normalized = (value or "").strip().lower()
    if not normalized:
        return default
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"'{value}' is not a boolean")


class DataImportPersister(ABC):
    """Turns one CSV file into persisted rows."""

    file_name: str = ""
    required_columns: Tuple[str, ...] = ()

    def __init__(self, db: Session):
        self._db = db

    def process_and_persist(self, stream: IO[bytes]) -> ImportedFileResult:
        try:
            frame = pd.read_csv(stream, dtype=str, keep_default_na=False)
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise ValidationException(
                f"File '{self.file_name}' is not a readable CSV file",
                kind=ErrorKind.IMPORT_INVALID_FILE,
                details={"file": self.file_name},
            ) from exc

        missing = [c for c in self.required_columns if c not in frame.columns]
        if missing:
            raise ValidationException(
                f"File '{self.file_name}' is missing required columns",
                kind=ErrorKind.IMPORT_INVALID_ROW,
                details={"file": self.file_name, "missing_columns": missing},
            )

        created = updated = 0
        for index, row in enumerate(frame.to_dict(orient="records"), start=2):
            try:
                was_created = self.create_or_update(row)
            except ValueError as exc:
                raise ValidationException(
                    f"Invalid row in '{self.file_name}': {exc}",
                    kind=ErrorKind.IMPORT_INVALID_ROW,
                    details={"file": self.file_name, "line": index},
                ) from exc
            if was_created:
                created += 1
            else:
                updated += 1

        return ImportedFileResult(
            file_name=self.file_name,
            processed=created + updated,
            created=created,
            updated=updated,
        )

    @abstractmethod
    def create_or_update(self, row: Dict[str, str]) -> bool:
        """Persist one row; True when a new row was created."""


class ProductCategoryPersister(DataImportPersister):
    file_name = "productCategory.csv"
    required_columns = ("code", "displayName")

    def __init__(self, db: Session):
        super().__init__(db)
        self._repo = ProductCategoryRepository(db)

    def create_or_update(self, row: Dict[str, str]) -> bool:
        code = row["code"].strip()
        if not code:
            raise ValueError("code is required")
        incoming = ProductCategory(
            code=code,
            display_name=row["displayName"].strip(),
            display_order=int(row.get("displayOrder") or 0),
        )
        existing = self._repo.get_by_code(code)
        if existing:
            existing.update_from(incoming)
            return False
        incoming.id = uuid4()
        self._db.add(incoming)
        self._db.flush()
        return True


class SupportedProgramPersister(DataImportPersister):
    file_name = "supportedProgram.csv"
    required_columns = ("facilityCode", "programCode")

    def __init__(self, db: Session):
        super().__init__(db)
        self._repo = SupportedProgramRepository(db)
        self._facility_repo = FacilityRepository(db)
        self._program_repo = ProgramRepository(db)

    def create_or_update(self, row: Dict[str, str]) -> bool:
        facility = self._facility_repo.get_by_code(row["facilityCode"].strip())
        if not facility:
            raise ValueError(f"unknown facility code '{row['facilityCode']}'")
        program = self._program_repo.get_by_code(row["programCode"].strip())
        if not program:
            raise ValueError(f"unknown program code '{row['programCode']}'")

        values = {
            "active": _parse_bool(row.get("active", ""), True),
            "locally_active": _parse_bool(row.get("locallyActive", ""), True),
            "start_date": self._parse_date(row.get("startDate", "")),
        }
        existing = self._repo.get(facility.id, program.id)
        if existing:
            for field, value in values.items():
                setattr(existing, field, value)
            return False
        self._db.add(SupportedProgram(facility_id=facility.id, program_id=program.id, **values))
        self._db.flush()
        return True

    @staticmethod
    def _parse_date(value: str) -> Optional[date]:
        value = (value or "").strip()
        return date.fromisoformat(value) if value else None


class DataImportService:

    PERSISTERS: Dict[str, Type[DataImportPersister]] = {
        ProductCategoryPersister.file_name: ProductCategoryPersister,
        SupportedProgramPersister.file_name: SupportedProgramPersister,
    }

    def __init__(self, db: Session):
        self._db = db

    def import_data(self, content: bytes) -> DataImportResponse:
        files = zip_to_file_map(content)
        unsupported = sorted(name for name in files if name not in self.PERSISTERS)
        if not files or unsupported:
            raise ValidationException(
                "Archive contains unsupported files",
                kind=ErrorKind.IMPORT_UNSUPPORTED_FILE,
                details={"unsupported": unsupported, "supported": sorted(self.PERSISTERS)},
            )

        results: List[ImportedFileResult] = []
        try:
            for name in sorted(files, key=list(self.PERSISTERS).index):
                persister = self.PERSISTERS[name](self._db)
                results.append(persister.process_and_persist(files[name]))
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

        logger.info("data_import_completed files=%s", [r.file_name for r in results])
        return DataImportResponse(files=results)
