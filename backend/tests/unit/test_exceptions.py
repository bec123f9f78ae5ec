from uuid import uuid4

from referencedata.core.exceptions import (
    ConflictException,
    DataAccessException,
    ErrorKind,
    NotFoundException,
    ValidationException,
    to_http_exception,
)


def test_not_found_maps_to_404_with_message_key():
    facility_id = uuid4()
    exc = NotFoundException(ErrorKind.FACILITY_NOT_FOUND, "Facility", facility_id)

    http_exc = to_http_exception(exc)

    assert http_exc.status_code == 404
    assert http_exc.detail["code"] == "FACILITY_NOT_FOUND"
    assert http_exc.detail["message_key"] == "referenceData.error.facility.notFound"
    assert http_exc.detail["details"] == {"entity": "Facility", "id": str(facility_id)}


def test_data_access_defaults_to_503():
    exc = DataAccessException("database unavailable")
    assert exc.kind is ErrorKind.DATA_ACCESS
    assert to_http_exception(exc).status_code == 503


def test_validation_and_conflict_statuses():
    assert to_http_exception(ValidationException("bad", kind=ErrorKind.EXPORT_INVALID_FORMAT)).status_code == 400
    assert to_http_exception(ConflictException("dup", kind=ErrorKind.ORDERABLE_CODE_DUPLICATED)).status_code == 409


def test_exception_without_kind_is_500():
    exc = ValidationException("unexpected")
    assert exc.code == "ValidationException"
    assert to_http_exception(exc).status_code == 500


def test_every_kind_has_a_distinct_message_key():
    keys = [kind.message_key for kind in ErrorKind]
    assert len(keys) == len(set(keys))
    assert all(key.startswith("referenceData.error.") for key in keys)
