from __future__ import annotations

import os

from fastapi import APIRouter, Response, status

from foh.infrastructure.messaging.redis_client import ping_redis
from foh.infrastructure.store.factory import get_tabular_store

router = APIRouter()


def ping_store() -> bool:
    try:
        return get_tabular_store().ping()
    except Exception:
        return False


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response) -> dict[str, object]:
    store_ready = ping_store()
    # events are optional; only a configured Redis has to answer
    redis_ready = ping_redis(timeout_seconds=1.0) if os.getenv("REDIS_URL") else True

    if store_ready and redis_ready:
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {"store": store_ready, "redis": redis_ready},
    }
