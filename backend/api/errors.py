"""Translate domain error kinds into HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from services.errors import (
    ConflictError,
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    InvalidArgumentError: status.HTTP_422_UNPROCESSABLE_CONTENT,
}


def status_for(error: DomainError) -> int:
    for error_type in type(error).__mro__:
        status_code = STATUS_BY_ERROR.get(error_type)  # type: ignore[arg-type]
        if status_code is not None:
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, DomainError):  # pragma: no cover - registered for DomainError only
        raise exc
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": exc.detail, "reason": exc.reason},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
