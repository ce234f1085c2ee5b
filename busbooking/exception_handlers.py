"""Centralized exception handlers for FastAPI."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from busbooking.exceptions import DomainError, ValidationError
from busbooking.logger_config import custom_logger


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Handle domain errors."""
    if exc.status_code >= 500:
        custom_logger.exception(f'Domain error: {exc.message}')
    else:
        custom_logger.warning(f'{request.method} {request.url.path} -> {exc.status_code}: {exc.message}')

    content = {'detail': exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        content['errors'] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and query strings as 400 with field detail."""
    errors = [
        {'loc': [str(part) for part in error.get('loc', ())], 'msg': error.get('msg'), 'type': error.get('type')}
        for error in exc.errors()
    ]
    custom_logger.warning(f'{request.method} {request.url.path} -> 400: {len(errors)} validation error(s)')
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': 'Validation failed', 'errors': errors},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    custom_logger.exception(f'Unhandled exception: {str(exc)}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


EXCEPTION_HANDLERS = {
    DomainError: domain_error_handler,
    RequestValidationError: request_validation_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app):
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
