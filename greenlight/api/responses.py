"""Response envelope helpers."""

from collections.abc import Mapping
from typing import Any

from fastapi.responses import JSONResponse

NOT_FOUND_MESSAGE = "the requested resource could not be found"
EDIT_CONFLICT_MESSAGE = "unable to update the record due to an edit conflict, please try again"
SERVER_ERROR_MESSAGE = "the server encountered a problem and could not process your request"


def envelope(key: str, payload: Any) -> dict[str, Any]:
    """Wrap ``payload`` under ``key``."""
    return {key: payload}


def error_response(
    status_code: int,
    message: str | Mapping[str, str],
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Build an ``{"error": ...}`` JSON response.

    Args:
        status_code: HTTP status.
        message: Single message, or field to message map.
        headers: Extra response headers.

    Returns:
        JSONResponse carrying the error envelope.
    """
    if not isinstance(message, str):
        message = dict(message)
    return JSONResponse(
        status_code=status_code,
        content=envelope("error", message),
        headers=dict(headers) if headers else None,
    )


def method_not_allowed_message(method: str) -> str:
    """Message for a method the resource does not support."""
    return f"the {method} method is not supported for this resource"
