from typing import List

from pydantic import BaseModel


class ImportedFileResult(BaseModel):
    file_name: str
    processed: int
    created: int
    updated: int


class DataImportResponse(BaseModel):
    success: bool = True
    files: List[ImportedFileResult]
