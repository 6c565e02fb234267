"""
Logging configuration and request-scoped log context.

Every request carries a ``RequestLoggerAdapter`` bound to its request id;
it is the log context handed to the error recorder for unexpected failures.
Never logs request bodies.
"""

import logging
import sys
import uuid

from starlette.requests import Request

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

request_logger = logging.getLogger("metricmeta.request")


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Access lines duplicate the request logger
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the request id, method and path."""

    def process(self, msg, kwargs):
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        prefix = f"[{self.extra['request_id']}] {self.extra['method']} {self.extra['path']}"
        # msg is %-formatted later; the path may carry a literal "%"
        return f"{prefix.replace('%', '%%')} {msg}", kwargs


def new_request_id() -> str:
    return uuid.uuid4().hex


def bind_request_logger(request: Request, request_id: str) -> RequestLoggerAdapter:
    return RequestLoggerAdapter(
        request_logger,
        {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        },
    )


def get_log_context(request: Request) -> RequestLoggerAdapter:
    """Return the request's log context, binding one if the middleware did not."""
    log = getattr(request.state, "log", None)
    if log is None:
        request_id = getattr(request.state, "request_id", None) or new_request_id()
        log = bind_request_logger(request, request_id)
    return log


def record_error(error: BaseException, log_context: logging.LoggerAdapter) -> None:
    """Default recorder for unexpected failures: log at ERROR with traceback."""
    log_context.error(
        "Unhandled %s while processing request",
        type(error).__name__,
        exc_info=(type(error), error, error.__traceback__),
    )
