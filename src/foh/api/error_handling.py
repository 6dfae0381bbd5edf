from __future__ import annotations

import logging
from typing import cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from foh.api.envelope import render_envelope
from foh.api.middleware.request_id import get_request_id
from foh.application.dto.responses import Envelope

logger = logging.getLogger(__name__)


def _error_response(request: Request, *, status_code: int, error: str) -> Response:
    response = render_envelope(Envelope.fail(error), request.query_params.get("callback"))
    response.status_code = status_code
    request_id = get_request_id()
    if request_id:
        response.headers["X-Request-Id"] = request_id
    return response


async def _http_exception_handler(request: Request, exc: Exception) -> Response:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    return _error_response(request, status_code=http_exc.status_code, error=message)


async def _validation_exception_handler(request: Request, exc: Exception) -> Response:
    validation_exc = cast(RequestValidationError, exc)
    logger.info("request_validation_failed", extra={"errors": validation_exc.errors()})
    return _error_response(request, status_code=400, error="request validation failed")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
