from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foh.api.error_handling import register_exception_handlers
from foh.api.middleware.access_log import AccessLogMiddleware
from foh.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from foh.api.routes.actions import router as actions_router
from foh.api.routes.health import router as health_router
from foh.api.routes.metrics import router as metrics_router
from foh.infrastructure.observability.logging_config import configure_logging
from foh.infrastructure.observability.otel import configure_otel

_OPEN_ENVIRONMENTS = {"dev", "test"}


def _cors_allow_origins() -> list[str]:
    """Origins allowed to call the action endpoint with fetch/XHR.

    JSONP callers load the endpoint through a script tag and are not subject
    to CORS at all; this list only matters for the embeddable widgets that use
    fetch. Dev and test accept any origin.
    """
    if os.getenv("APP_ENV", "dev").lower() in _OPEN_ENVIRONMENTS:
        return ["*"]
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Front-of-House Backend", version="0.1.0")
    register_exception_handlers(app)
    for router in (health_router, metrics_router, actions_router):
        app.include_router(router)

    # outermost last: CORS wraps request ids, which wrap the access log
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    configure_otel(app)
    return app


app = create_app()
