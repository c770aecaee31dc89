"""Strict JSON request decoding.

Decodes exactly one JSON value of bounded size into a pydantic model
that forbids unknown keys, and reports every failure as one member of
a closed set of DecodeError subclasses. Each subclass carries the
user-facing message and HTTP status of its case.
"""

import json
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError
from starlette.requests import Request

DEFAULT_MAX_BYTES = 1_048_576

ModelT = TypeVar("ModelT", bound=BaseModel)

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_STRING_OR_CONSTANT = re.compile(r"\"(?:[^\"\\]|\\.)*\"|-?Infinity|NaN")


# =============================================================================
# ERROR TAXONOMY
# =============================================================================


class DecodeError(Exception):
    """Base class for request body decoding failures."""

    status_code: int = 400


class PayloadTooLargeError(DecodeError):
    """Body is larger than the configured limit."""

    status_code = 413

    def __init__(self, limit: int) -> None:
        super().__init__(f"body must not be larger than {limit} bytes")
        self.limit = limit


class JSONSyntaxError(DecodeError):
    """Body is not well-formed JSON."""

    def __init__(self, offset: int) -> None:
        super().__init__(f"body contains badly-formed JSON (at character {offset})")
        self.offset = offset


class UnexpectedEndError(DecodeError):
    """Body ends in the middle of a JSON value."""

    def __init__(self) -> None:
        super().__init__("body contains badly-formed JSON")


class EmptyBodyError(DecodeError):
    """Body is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("body must not be empty")


class TypeMismatchError(DecodeError):
    """A JSON value does not have the type the target expects."""

    def __init__(self, field: str | None, offset: int) -> None:
        if field:
            message = f'body contains incorrect JSON type for field "{field}"'
        else:
            message = f"body contains incorrect JSON type (at character {offset})"
        super().__init__(message)
        self.field = field
        self.offset = offset


class UnknownFieldError(DecodeError):
    """Body contains a key the target does not define."""

    def __init__(self, field: str) -> None:
        super().__init__(f'body contains unknown key "{field}"')
        self.field = field


class MultipleValuesError(DecodeError):
    """Body holds more content after the first JSON value."""

    def __init__(self) -> None:
        super().__init__("body must only contain a single JSON value")


class UnknownDecodeError(DecodeError):
    """Any decoding failure outside the other cases."""

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause


class InvalidDecodeTargetError(TypeError):
    """Decoding was asked to produce something that is not a model class.

    This is a programming error, not bad input, and is never turned
    into a client error response.
    """


# =============================================================================
# DECODING
# =============================================================================


class _NonStandardConstant(ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name


def _reject_constant(name: str) -> float:
    raise _NonStandardConstant(name)


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


def decode_json(
    body: bytes,
    target: type[ModelT],
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> ModelT:
    """Decode a request body into ``target``.

    Checks run in a fixed order so that a body with several problems
    always reports the same one: size, syntax, truncation, emptiness,
    field types, unknown keys, trailing content.

    Args:
        body: Raw request body.
        target: Pydantic model class to validate into.
        max_bytes: Largest accepted body size.

    Returns:
        Validated model instance.

    Raises:
        InvalidDecodeTargetError: If ``target`` is not a pydantic model class.
        DecodeError: One subclass per failure kind.
    """
    if not (isinstance(target, type) and issubclass(target, BaseModel)):
        raise InvalidDecodeTargetError(f"cannot decode JSON into {target!r}")

    if len(body) > max_bytes:
        raise PayloadTooLargeError(max_bytes)

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise JSONSyntaxError(exc.start) from exc

    start = _WHITESPACE.match(text, 0).end()
    if start == len(text):
        raise EmptyBodyError()

    try:
        value, end = _DECODER.raw_decode(text, start)
    except json.JSONDecodeError as exc:
        if _is_truncated(text, exc):
            raise UnexpectedEndError() from exc
        raise JSONSyntaxError(_byte_offset(text, exc.pos)) from exc
    except _NonStandardConstant as exc:
        raise JSONSyntaxError(_byte_offset(text, _constant_position(text, start))) from exc
    except RecursionError as exc:
        raise UnknownDecodeError("body is nested too deeply") from exc

    try:
        result = target.model_validate(value)
    except ValidationError as exc:
        raise _classify_validation_error(exc, _byte_offset(text, start)) from exc

    if _WHITESPACE.match(text, end).end() != len(text):
        raise MultipleValuesError()

    return result


async def read_json(
    request: Request,
    target: type[ModelT],
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> ModelT:
    """Read a bounded request body and decode it into ``target``.

    Stops reading as soon as the body grows past ``max_bytes``.

    Args:
        request: Incoming request.
        target: Pydantic model class to validate into.
        max_bytes: Largest accepted body size.

    Returns:
        Validated model instance.

    Raises:
        DecodeError: One subclass per failure kind.
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(max_bytes)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise PayloadTooLargeError(max_bytes)

    return decode_json(bytes(body), target, max_bytes)


# =============================================================================
# PRIVATE HELPERS
# =============================================================================


def _is_truncated(text: str, exc: json.JSONDecodeError) -> bool:
    """Tell whether the parser failed because the input ran out."""
    if exc.msg.startswith("Unterminated string"):
        return True
    return _WHITESPACE.match(text, exc.pos).end() >= len(text)


def _constant_position(text: str, start: int) -> int:
    """Index of the first NaN or Infinity token outside a string literal."""
    for match in _STRING_OR_CONSTANT.finditer(text, start):
        if not match.group().startswith('"'):
            return match.start()
    return start


def _byte_offset(text: str, pos: int) -> int:
    """Convert a character index into a UTF-8 byte offset."""
    return len(text[: max(pos, 0)].encode("utf-8"))


def _classify_validation_error(exc: ValidationError, offset: int) -> DecodeError:
    """Map pydantic errors to the decode taxonomy.

    Type mismatches win over unknown keys; anything else is unknown.
    """
    errors = exc.errors()

    for error in errors:
        if _is_type_error(error["type"]):
            loc = error["loc"]
            field = str(loc[0]) if loc else None
            return TypeMismatchError(field, offset)

    for error in errors:
        if error["type"] == "extra_forbidden":
            return UnknownFieldError(str(error["loc"][-1]))

    return UnknownDecodeError(errors[0]["msg"] if errors else str(exc))


def _is_type_error(error_type: str) -> bool:
    return error_type.endswith("_type") or error_type.endswith("_parsing")
