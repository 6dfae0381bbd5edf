from __future__ import annotations

import logging
import os
from datetime import tzinfo
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Request
from fastapi.responses import Response

from foh.api.envelope import render_envelope
from foh.api.middleware.request_id import get_request_id
from foh.application.dto.responses import Envelope
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.dispatcher import ActionDispatcher
from foh.infrastructure.messaging.redis_publisher import get_event_publisher
from foh.infrastructure.observability.otel import current_trace_id, dispatch_span
from foh.infrastructure.store.factory import get_tabular_store

logger = logging.getLogger(__name__)

router = APIRouter()


def _restaurant_timezone() -> tzinfo:
    return ZoneInfo(os.getenv("RESTAURANT_TIMEZONE", "UTC"))


def _dispatcher() -> ActionDispatcher:
    return ActionDispatcher(
        store=get_tabular_store(),
        publisher=get_event_publisher(),
        trace_ctx=TraceContext(trace_id=current_trace_id(), request_id=get_request_id()),
        restaurant_tz=_restaurant_timezone(),
    )


def _flat_params(request: Request) -> dict[str, str]:
    # repeated keys keep their first value
    params: dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        params.setdefault(key, value)
    return params


@router.get("/exec")
@router.get("/")
def run_action(request: Request) -> Response:
    """Every operation is a GET; failures answer 200 with success=false."""
    params = _flat_params(request)
    callback = params.get("callback")
    try:
        dispatcher = _dispatcher()
    except Exception as exc:
        logger.exception("dispatcher_setup_failed")
        return render_envelope(Envelope.fail(str(exc)), callback)

    with dispatch_span(params.get("action", "")) as span:
        envelope = dispatcher.dispatch(params)
        span.set_attribute("foh.success", envelope.success)
    return render_envelope(envelope, callback)
