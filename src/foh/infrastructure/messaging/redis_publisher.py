from __future__ import annotations

import logging
import os

from foh.application.ports.publisher import EventPublisher, NullEventPublisher
from foh.infrastructure.messaging.redis_client import get_redis_client

logger = logging.getLogger(__name__)


class RedisEventPublisher(EventPublisher):
    def __init__(self, timeout_seconds: float = 1.0) -> None:
        self._timeout_seconds = timeout_seconds

    def publish(self, channel: str, message: str) -> None:
        get_redis_client(timeout_seconds=self._timeout_seconds).publish(channel, message)


def get_event_publisher() -> EventPublisher:
    if not os.getenv("REDIS_URL"):
        logger.debug("event_publishing_disabled", extra={"reason": "REDIS_URL missing"})
        return NullEventPublisher()
    return RedisEventPublisher()
