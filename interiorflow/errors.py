# INTERIORFLOW/backend/interiorflow/errors.py

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger(__name__)


# ---------- ERREURS MÉTIER (levées par les services) ----------

class ServiceError(Exception):
    """Erreur métier, traduite en réponse HTTP par la route appelante"""


class EstimateNotFound(ServiceError):
    def __init__(self, estimate_id: str):
        super().__init__("Estimate not found")
        self.estimate_id = estimate_id


class EstimateAlreadyApproved(ServiceError):
    def __init__(self, estimate_id: str, status: str):
        super().__init__(f"Estimate is already {status}")
        self.estimate_id = estimate_id
        self.status = status


class InvalidStatusTransition(ServiceError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move estimate from '{current}' to '{target}'")
        self.current = current
        self.target = target


# ---------- HANDLERS GLOBAUX ----------
# Toutes les erreurs sortent sous la forme {"success": false, "error": "..."}

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", []) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": message}
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Erreur non gérée sur {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"}
    )


def register_exception_handlers(app):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
