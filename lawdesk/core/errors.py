import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lawdesk.config import settings

logger = logging.getLogger(__name__)

# first path segment after the API prefix -> resource name used in messages
RESOURCE_NAMES = {
    "auth": "authentication",
    "clients": "client",
    "cases": "case",
    "consultations": "consultation",
    "invoices": "invoice",
    "communications": "communication",
    "documents": "document",
    "client-portal": "access request",
    "ai": "chat",
    "search": "search",
    "admin": "admin",
}


def resource_for_path(path: str) -> str:
    if path.startswith(settings.API_PREFIX):
        path = path[len(settings.API_PREFIX):]
    segment = path.strip("/").split("/", 1)[0]
    return RESOURCE_NAMES.get(segment, "")


def validation_message(path: str) -> str:
    resource = resource_for_path(path)
    return f"Invalid {resource} data" if resource else "Invalid data"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": validation_message(request.url.path)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    content = {"detail": "Internal server error"}
    if not settings.is_production:
        content["error"] = type(exc).__name__
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
