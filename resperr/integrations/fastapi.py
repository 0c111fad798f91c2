"""FastAPI exception handlers that render errors through resperr lookups."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resperr.core.config import ErrorResponseSettings
from resperr.core.config import get_error_response_settings
from resperr.core.errors import APIError
from resperr.core.errors import not_found
from resperr.core.resolve import status_code
from resperr.core.resolve import status_text
from resperr.core.resolve import user_message
from resperr.core.validator import Validator
from resperr.core.validator import ValidatorError
from resperr.core.validator import validation_errors
from resperr.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


def build_error_response(
    err: BaseException,
    settings: ErrorResponseSettings | None = None,
) -> JSONResponse:
    """Render err as a JSON error envelope with its resolved status code."""
    settings = settings or get_error_response_settings()
    code = status_code(err)
    details: dict[str, list[str]] | None = None
    if settings.include_details:
        details = {field: list(messages) for field, messages in validation_errors(err).items()} or None

    payload = ErrorResponse(status=code, error=user_message(err) or None, details=details)
    return JSONResponse(status_code=code, content=payload.model_dump(exclude_none=True))


def not_found_for(request: Request) -> APIError:
    """Return a 404 error naming the path of request."""
    return not_found(request.url.path)


def _log_error(request: Request, err: BaseException, code: int, settings: ErrorResponseSettings) -> None:
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, err, exc_info=err)
    elif settings.log_client_errors:
        logger.info("%s %s rejected with %d: %s", request.method, request.url.path, code, err)


def _reply(request: Request, err: BaseException) -> JSONResponse:
    settings = get_error_response_settings()
    _log_error(request, err, status_code(err), settings)
    return build_error_response(err, settings)


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str:
    if not isinstance(location, (tuple, list)):
        return str(location)

    filtered = [str(part) for part in location if part not in _LOCATION_PREFIXES]
    if filtered:
        return ".".join(filtered)

    if not location:
        return "request"

    return str(location[0])


def request_validation_error(exc: RequestValidationError) -> ValidatorError | None:
    """Collect FastAPI request validation issues into a validator error."""
    validator = Validator()
    for issue in exc.errors():
        field = _format_location(issue.get("loc", ()))
        validator.add(field, str(issue.get("msg", "Invalid value")))
    return validator.err()


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report FastAPI validation failures as field-level 400 errors."""
    err = request_validation_error(exc)
    if err is None:
        err = APIError(status=400, cause=exc)
    return _reply(request, err)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Translate starlette HTTP exceptions, naming the path on unknown routes."""
    detail = exc.detail if isinstance(exc.detail, str) else ""
    if exc.status_code == 404 and detail in ("", status_text(404)):
        return _reply(request, not_found_for(request))

    message = "" if detail == status_text(exc.status_code) else detail
    return _reply(request, APIError(status=exc.status_code, message=message, cause=exc))


async def resperr_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any exception from its annotated status and user message."""
    return _reply(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the resperr error handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(APIError, resperr_exception_handler)
    app.add_exception_handler(ValidatorError, resperr_exception_handler)
    app.add_exception_handler(Exception, resperr_exception_handler)
