from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    """HTTPException com um `kind` estável para o cliente."""

    kind = "error"
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Erro"

    def __init__(
        self,
        message: str | None = None,
        *,
        kind: str | None = None,
        errors: Iterable[Mapping[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.message_default
        if kind is not None:
            self.kind = kind
        self.errors = [dict(item) for item in errors or []]
        super().__init__(status_code=self.status_code_default, detail=self.message, headers=headers)

    def to_payload(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "errors": self.errors}


class ValidationError(AppError):
    kind = "validation_error"
    status_code_default = status.HTTP_422_UNPROCESSABLE_ENTITY
    message_default = "Dados inválidos"


class AuthenticationError(AppError):
    kind = "authentication_error"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    message_default = "Não autenticado"


class AuthorizationError(AppError):
    kind = "authorization_error"
    status_code_default = status.HTTP_403_FORBIDDEN
    message_default = "Permissão insuficiente"


class NotFoundError(AppError):
    kind = "not_found"
    status_code_default = status.HTTP_404_NOT_FOUND
    message_default = "Registro não encontrado"


class ConflictError(AppError):
    kind = "conflict"
    status_code_default = status.HTTP_409_CONFLICT
    message_default = "Registro duplicado"


class IntegrityFailure(AppError):
    kind = "integrity_failure"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_default = "Falha ao gravar os dados"


def _field_path(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part not in {"body", "query", "path"}]
    return ".".join(to_camel(part) if "_" in part else part for part in parts)


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload(), headers=exc.headers)


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = {
        status.HTTP_401_UNAUTHORIZED: AuthenticationError.kind,
        status.HTTP_403_FORBIDDEN: AuthorizationError.kind,
        status.HTTP_404_NOT_FOUND: NotFoundError.kind,
        status.HTTP_409_CONFLICT: ConflictError.kind,
    }.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content={"kind": kind, "message": str(exc.detail), "errors": []},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_path(error.get("loc", ())), "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    payload = ValidationError(errors=errors).to_payload()
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=payload)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"kind": "internal_error", "message": "Erro interno", "errors": []},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
