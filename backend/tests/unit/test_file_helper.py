import io
import zipfile

import pytest

from referencedata.core.exceptions import ErrorKind, ValidationException
from referencedata.utils.file_helper import file_map_to_zip, zip_to_file_map


def test_zip_to_file_map_reads_every_file():
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("productCategory.csv", "code,displayName\nvac,Vaccines\n")
        archive.writestr("supportedProgram.csv", "facilityCode,programCode\nHC01,EPI\n")
        archive.writestr("nested/", "")

    files = zip_to_file_map(buffer.getvalue())

    assert sorted(files) == ["productCategory.csv", "supportedProgram.csv"]
    assert files["productCategory.csv"].read().startswith(b"code,displayName")


def test_zip_to_file_map_rejects_non_zip_content():
    with pytest.raises(ValidationException) as exc_info:
        zip_to_file_map(b"code,displayName\n")
    assert exc_info.value.kind is ErrorKind.IMPORT_INVALID_FILE


def test_file_map_to_zip_is_readable_back():
    content = file_map_to_zip({"a.csv": b"x\n1\n", "b.csv": b"y\n2\n"})
    with zipfile.ZipFile(io.BytesIO(content)) as archive:
        assert archive.namelist() == ["a.csv", "b.csv"]
        assert archive.read("b.csv") == b"y\n2\n"
