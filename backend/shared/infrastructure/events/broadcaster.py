"""
Notification broadcaster port.

Order logic depends on the EventPublisher protocol only. The Redis adapter
is the production implementation; the null adapter is used when publishing
is disabled. Tests substitute their own recording implementation through
the get_event_publisher dependency.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from shared.config.settings import settings
from shared.config.logging import get_logger
from .event_schema import Event
from .publisher import publish_event
from .redis_pool import get_redis_pool

logger = get_logger(__name__)


@runtime_checkable
class EventPublisher(Protocol):
    """Best-effort, at-most-once fan-out to a subscriber group."""

    async def publish(self, group_key: str, event_name: str, payload: dict[str, Any]) -> None:
        ...


class RedisEventPublisher:
    """Publishes the event envelope on the Redis channel named by the group key."""

    def __init__(self, redis_client: Any = None):
        # None means resolve the shared pool on first publish
        self._redis = redis_client

    async def _client(self) -> Any:
        if self._redis is None:
            self._redis = await get_redis_pool()
        return self._redis

    async def publish(self, group_key: str, event_name: str, payload: dict[str, Any]) -> None:
        event = Event(type=event_name, group=group_key, payload=payload)
        client = await self._client()
        receivers = await publish_event(client, group_key, event)
        logger.debug(
            "Event published",
            channel=group_key,
            event_type=event_name,
            receivers=receivers,
        )


class NullEventPublisher:
    """Discards every event."""

    async def publish(self, group_key: str, event_name: str, payload: dict[str, Any]) -> None:
        logger.debug("Event discarded", channel=group_key, event_type=event_name)


_default_publisher: EventPublisher | None = None


def get_event_publisher() -> EventPublisher:
    """
    FastAPI dependency returning the process-wide publisher.

    Override in tests:
        app.dependency_overrides[get_event_publisher] = lambda: recorder
    """
    global _default_publisher
    if _default_publisher is None:
        if settings.event_publishing_enabled:
            _default_publisher = RedisEventPublisher()
        else:
            _default_publisher = NullEventPublisher()
    return _default_publisher


def reset_event_publisher() -> None:
    """Drop the cached publisher (after the Redis pool has been closed)."""
    global _default_publisher
    _default_publisher = None
