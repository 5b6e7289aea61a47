"""FastAPI application entry point for post tag search.

Wiring only. Lifespan lives in app.core.lifespan, error mapping in
app.core.exception_handlers, endpoints under app.api.v1.

Run: uv run uvicorn app.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1 import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.middleware import (
    CorrelationIDMiddleware,
    RequestIDMiddleware,
    TimeoutMiddleware,
)


def _cors_origins(settings: Settings) -> list[str]:
    return [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    """Install middleware. Last added runs outermost: timeout, request ID, correlation ID, CORS."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header, settings.correlation_id_header],
    )
    app.add_middleware(CorrelationIDMiddleware, header_name=settings.correlation_id_header)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)


def create_app() -> FastAPI:
    """Build the app. Settings are read here, not at import of the submodules."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Search posts by tag set (OR: any tag, AND: every tag).",
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)
    _add_middleware(app, settings)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
