"""Global exception handlers that map every failure to a JSON error response.

Client failures (the ``DomainError`` taxonomy, framework HTTP errors and
request validation errors) are returned verbatim and never logged.
Anything else becomes a generic 500; the original error is handed to the
recorder in a background task so the response is never delayed or changed.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask
from starlette.exceptions import HTTPException as StarletteHTTPException

from metricmeta.core.config import settings
from metricmeta.core.logging import get_log_context, record_error
from metricmeta.errors import BadRequestError, ClientFailure, DomainError, classify
from metricmeta.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = "Internal Server Error"

ErrorRecorder = Callable[[BaseException, logging.LoggerAdapter], Awaitable[None] | None]


def _error_response(
    status_code: int,
    error: str,
    message: str,
    headers: dict[str, str] | None = None,
    background: BackgroundTask | None = None,
) -> JSONResponse:
    """Return a standardized error response."""
    body = ErrorResponse(status_code=status_code, error=error, message=message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=headers,
        background=background,
    )


async def _record_safely(
    recorder: ErrorRecorder, error: BaseException, log_context: logging.LoggerAdapter
) -> None:
    # Runs after the response is sent; a failing recorder must not surface.
    try:
        result = recorder(error, log_context)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception(
            "Error recorder failed while recording %s", type(error).__name__
        )


def handle(
    error: BaseException, request: Request, recorder: ErrorRecorder = record_error
) -> JSONResponse:
    """Convert any failure raised while serving ``request`` into one response."""
    failure = classify(error)
    if isinstance(failure, ClientFailure):
        return _error_response(failure.code, failure.name, failure.message)

    headers = None
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers = {settings.request_id_header: request_id}

    task = BackgroundTask(
        _record_safely, recorder, failure.underlying, get_log_context(request)
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_SERVER_ERROR,
        INTERNAL_SERVER_ERROR,
        headers=headers,
        background=task,
    )


def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    try:
        phrase = HTTPStatus(exc.status_code).phrase
    except ValueError:
        phrase = "Error"
    return _error_response(
        exc.status_code,
        phrase,
        exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _validation_message(exc: RequestValidationError) -> str:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location} {err.get('msg', '')}".strip())
    return "; ".join(problems) or "Invalid request"


def register_exception_handlers(app: FastAPI, recorder: ErrorRecorder = record_error):
    """Register the terminal failure handlers on the FastAPI app.

    Args:
        app: The FastAPI application instance.
        recorder: Called as ``recorder(error, log_context)`` for unexpected
            failures only. May be sync or async.
    """

    def failure_handler(request: Request, exc: Exception) -> JSONResponse:
        return handle(exc, request, recorder)

    def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return handle(BadRequestError(_validation_message(exc)), request, recorder)

    app.state.error_recorder = recorder
    app.add_exception_handler(DomainError, failure_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, failure_handler)
