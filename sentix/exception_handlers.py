from fastapi import Request
from fastapi.responses import JSONResponse

from sentix.exceptions import (
    AppError,
    EmptyResponseError,
    InvalidCredentialFormatError,
    LoadInProgressError,
    MissingCredentialError,
    NotFoundError,
    SchemaViolationError,
    TransportError,
)


def _error_response(status_code: int, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "credential_required": exc.credential_required,
        },
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(500, exc)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(404, exc)


async def credential_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(401, exc)


async def provider_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.credential_required:
        return _error_response(401, exc)
    return _error_response(502, exc)


async def conflict_handler(request: Request, exc: LoadInProgressError) -> JSONResponse:
    return _error_response(409, exc)


def register_exception_handlers(app):
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(MissingCredentialError, credential_error_handler)
    app.add_exception_handler(InvalidCredentialFormatError, credential_error_handler)
    app.add_exception_handler(TransportError, provider_error_handler)
    app.add_exception_handler(EmptyResponseError, provider_error_handler)
    app.add_exception_handler(SchemaViolationError, provider_error_handler)
    app.add_exception_handler(LoadInProgressError, conflict_handler)
    app.add_exception_handler(AppError, app_error_handler)
