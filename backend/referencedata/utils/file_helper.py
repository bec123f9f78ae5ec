import io
import zipfile
from typing import Dict, Mapping

from referencedata.core.exceptions import ErrorKind, ValidationException


def zip_to_file_map(content: bytes) -> Dict[str, io.BytesIO]:
    """Expand a ZIP archive into {entry name: stream}. Directories are skipped."""
    try:
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            return {
                info.filename: io.BytesIO(archive.read(info))
                for info in archive.infolist()
                if not info.is_dir()
            }
    except zipfile.BadZipFile as exc:
        raise ValidationException(
            "Uploaded file is not a valid ZIP archive",
            kind=ErrorKind.IMPORT_INVALID_FILE,
        ) from exc


def file_map_to_zip(files: Mapping[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, payload in files.items():
            archive.writestr(name, payload)
    return buffer.getvalue()
