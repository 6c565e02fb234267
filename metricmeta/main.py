from urllib.parse import urlparse

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from metricmeta.api.exception_handlers import ErrorRecorder, register_exception_handlers
from metricmeta.api.middleware import RequestContextMiddleware
from metricmeta.api.v1.router import api_router
from metricmeta.core.config import settings
from metricmeta.core.logging import configure_logging, record_error


def create_app(recorder: ErrorRecorder = record_error) -> FastAPI:
    """Build the application; ``recorder`` receives unexpected failures."""
    configure_logging(level=settings.log_level)

    app = FastAPI(title=settings.project_name)

    if settings.frontend_url:
        parsed = urlparse(settings.frontend_url)
        origin = f"{parsed.scheme}://{parsed.netloc}"
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[origin],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestContextMiddleware, header_name=settings.request_id_header)

    register_exception_handlers(app, recorder=recorder)
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
