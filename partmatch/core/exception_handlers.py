"""
Exception handlers - every failure is rendered as {"error": kind, "message": text}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from partmatch.core.errors import PartmatchError, StorageError, ValidationError

logger = logging.getLogger(__name__)

HTTP_ERROR_KINDS = {
    status.HTTP_401_UNAUTHORIZED: "auth_error",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "duplicate",
}


def error_response(status_code: int, kind: str, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "message": message}, headers=headers)


async def partmatch_error_handler(request: Request, exc: PartmatchError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return error_response(exc.status_code, exc.kind, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    fields = [".".join(str(p) for p in err.get("loc", ())[1:]) for err in errors]
    message = "Invalid input: " + ", ".join(f for f in fields if f) if any(fields) else "Invalid input"
    return error_response(ValidationError.status_code, ValidationError.kind, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = HTTP_ERROR_KINDS.get(exc.status_code, "http_error")
    return error_response(exc.status_code, kind, str(exc.detail), getattr(exc, "headers", None))


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Raised outside a repository, e.g. while committing the request session
    logger.exception("Unhandled storage failure on %s %s", request.method, request.url.path)
    return error_response(StorageError.status_code, StorageError.kind, StorageError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PartmatchError, partmatch_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
