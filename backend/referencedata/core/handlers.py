"""
Translation of domain exceptions into JSON error bodies:

    {"success": false, "error": {"code", "message_key", "message", "details"}}
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from referencedata.core.exceptions import ReferenceDataException, to_http_exception

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


async def reference_data_exception_handler(request: Request, exc: ReferenceDataException) -> JSONResponse:
    http_exc = to_http_exception(exc)
    if http_exc.status_code >= 500:
        logger.error("request_failed path=%s code=%s message=%s", request.url.path, exc.code, exc.message)
    else:
        logger.info("request_rejected path=%s code=%s", request.url.path, exc.code)
    return _error_response(http_exc.status_code, http_exc.detail)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return _error_response(
        400,
        {"code": "VALIDATION_ERROR", "message_key": None, "message": str(exc), "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReferenceDataException, reference_data_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
