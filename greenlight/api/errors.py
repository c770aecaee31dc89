"""Exception handlers mapping domain errors to HTTP responses.

Client errors (decoding, validation, missing records, edit conflicts)
become 4xx responses with a specific message. Store failures and
anything unexpected become a generic 500; their cause is logged and
never sent to the client.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from greenlight.api.decoding import DecodeError
from greenlight.api.responses import (
    EDIT_CONFLICT_MESSAGE,
    NOT_FOUND_MESSAGE,
    SERVER_ERROR_MESSAGE,
    error_response,
    method_not_allowed_message,
)
from greenlight.core.validator import FailedValidationError
from greenlight.database.errors import EditConflictError, RecordNotFoundError, StoreError
from greenlight.utils.logger import get_logger

logger = get_logger("greenlight.api")


# =============================================================================
# HANDLERS
# =============================================================================


async def decode_error_handler(_request: Request, exc: DecodeError) -> JSONResponse:
    """Malformed request body."""
    return error_response(exc.status_code, str(exc))


async def failed_validation_handler(
    _request: Request,
    exc: FailedValidationError,
) -> JSONResponse:
    """Payload decoded but broke field rules."""
    return error_response(422, exc.errors)


async def not_found_handler(_request: Request, _exc: RecordNotFoundError) -> JSONResponse:
    """No record for the requested id."""
    return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)


async def edit_conflict_handler(_request: Request, _exc: EditConflictError) -> JSONResponse:
    """Record changed between read and write."""
    return error_response(status.HTTP_409_CONFLICT, EDIT_CONFLICT_MESSAGE)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Database failure, including timeouts."""
    _log_server_error(request, exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Routing errors (unknown path, unsupported method) in the error envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = NOT_FOUND_MESSAGE
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = method_not_allowed_message(request.method)
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for programming errors."""
    _log_server_error(request, exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        SERVER_ERROR_MESSAGE,
        headers={"Connection": "close"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on ``app``.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(DecodeError, decode_error_handler)
    app.add_exception_handler(FailedValidationError, failed_validation_handler)
    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(EditConflictError, edit_conflict_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def _log_server_error(request: Request, exc: Exception) -> None:
    """Log a server-side failure with the request line."""
    logger.error(
        "%s %s failed: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
