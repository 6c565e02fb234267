"""Request context middleware: request id and request-scoped logger."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from metricmeta.core.logging import bind_request_logger, new_request_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a request id and logger to ``request.state`` and echoes the id."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(self.header_name) or new_request_id()
        request.state.request_id = request_id
        request.state.log = bind_request_logger(request, request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
