# streamhub/core/errors.py
"""
Manejadores de error globales.

Todas las respuestas de error salen con la forma `{"message": "..."}`:
los routers siguen lanzando HTTPException(detail=...) como siempre y aquí
se traduce `detail` → `message`.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from streamhub.core.json import message_response

log = logging.getLogger("uvicorn")

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def _first_error(errors: list[dict]) -> str:
    if not errors:
        return "Invalid request"
    err = errors[0]
    # quitamos "body"/"query"/"form" del loc, al front le basta el campo
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form")]
    msg = err.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return message_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return message_response(status.HTTP_400_BAD_REQUEST, _first_error(exc.errors()))


async def pydantic_validation_handler(request: Request, exc: ValidationError):
    return message_response(status.HTTP_400_BAD_REQUEST, _first_error(exc.errors()))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    log.warning(f"⚠️ IntegrityError en {request.url.path}: {exc.orig!r}")
    return message_response(status.HTTP_400_BAD_REQUEST, "Duplicate or invalid value")


async def unhandled_exception_handler(request: Request, exc: Exception):
    # el detalle se queda en el log, nunca va al cliente
    log.exception(f"❌ Error no controlado en {request.method} {request.url.path}")
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
