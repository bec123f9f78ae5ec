"""
Liveness and readiness probes.
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from referencedata.config import settings
from referencedata.database import engine

router = APIRouter(tags=["Health"])


def _database_check() -> dict:
    if not settings.READINESS_CHECK_DATABASE:
        return {"enabled": False, "ok": True, "error": None}
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        return {"enabled": True, "ok": False, "error": str(exc)}
    return {"enabled": True, "ok": True, "error": None}


@router.get("/health")
def health_check():
    return {"status": "healthy", "app": settings.APP_NAME}


@router.get("/ready")
def readiness_check(request: Request):
    database = _database_check()
    return JSONResponse(
        status_code=200 if database["ok"] else 503,
        content={
            "status": "ready" if database["ok"] else "not_ready",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "request_id": getattr(request.state, "request_id", None),
            "checks": {"database": database},
        },
    )
