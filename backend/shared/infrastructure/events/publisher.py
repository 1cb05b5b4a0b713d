"""
Core event publishing with retry, size check and circuit breaker.
"""

from __future__ import annotations

import asyncio

import redis.asyncio as redis

from shared.config.settings import settings
from shared.config.logging import get_logger
from .event_types import MAX_EVENT_SIZE
from .event_schema import Event
from .circuit_breaker import get_event_circuit_breaker, calculate_retry_delay_with_jitter

logger = get_logger(__name__)


def _validate_event_size(event_json: str, event_type: str) -> None:
    """Raise ValueError if the serialized event is over MAX_EVENT_SIZE."""
    size = len(event_json.encode("utf-8"))
    if size > MAX_EVENT_SIZE:
        raise ValueError(
            f"Event {event_type} exceeds max size: {size} > {MAX_EVENT_SIZE} bytes"
        )


async def publish_event(
    redis_client: redis.Redis,
    channel: str,
    event: Event,
) -> int:
    """
    Publish an event to a Redis channel.

    Transient failures are retried with exponential backoff and jitter up to
    settings.redis_publish_max_retries attempts. When the circuit breaker is
    open the publish is skipped.

    Returns:
        Number of subscribers that received the message (0 when skipped).

    Raises:
        ValueError: If the event is too large.
        redis.RedisError: If every retry failed.
    """
    event_json = event.to_json()
    _validate_event_size(event_json, event.type)

    circuit_breaker = get_event_circuit_breaker()
    if not circuit_breaker.can_execute():
        logger.warning(
            "Event publish skipped - circuit breaker open",
            channel=channel,
            event_type=event.type,
        )
        return 0

    max_retries = max(1, settings.redis_publish_max_retries)
    last_error: Exception | None = None
    for attempt in range(max_retries):
        try:
            result = await redis_client.publish(channel, event_json)
            circuit_breaker.record_success()
            return result
        except (redis.RedisError, OSError) as e:
            last_error = e
            if attempt < max_retries - 1:
                delay = calculate_retry_delay_with_jitter(
                    attempt, settings.redis_publish_retry_delay
                )
                logger.warning(
                    "Redis publish failed, retrying",
                    channel=channel,
                    event_type=event.type,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    delay_seconds=round(delay, 2),
                    error=str(e),
                )
                await asyncio.sleep(delay)
            else:
                logger.error(
                    "Redis publish failed after all retries",
                    channel=channel,
                    event_type=event.type,
                    error=str(e),
                )

    circuit_breaker.record_failure()
    # max_retries >= 1, so the loop has set last_error
    raise last_error  # type: ignore[misc]
