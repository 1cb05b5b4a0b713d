"""
Event system for real-time notifications via Redis pub/sub.

Modules:
- event_types.py: event names
- event_schema.py: Event envelope with validation
- channels.py: subscriber group keys
- circuit_breaker.py: breaker and retry jitter
- redis_pool.py: connection pool management
- publisher.py: publish_event with retry
- broadcaster.py: EventPublisher port and adapters
- domain_publishers.py: order event routing
"""

from .circuit_breaker import (
    CircuitState,
    EventCircuitBreaker,
    get_event_circuit_breaker,
    calculate_retry_delay_with_jitter,
)
from .event_types import ORDER_NEW, ORDER_UPDATE, MAX_EVENT_SIZE
from .event_schema import Event
from .channels import (
    channel_cafe_admin,
    channel_cafe_kitchen,
    channel_cafe_delivery,
    channel_table,
)
from .redis_pool import get_redis_pool, close_redis_pool, check_redis_health
from .publisher import publish_event
from .broadcaster import (
    EventPublisher,
    RedisEventPublisher,
    NullEventPublisher,
    get_event_publisher,
    reset_event_publisher,
)
from .domain_publishers import (
    broadcast,
    transition_groups,
    new_order_groups,
    public_cancel_groups,
    payment_groups,
    publish_order_created,
    publish_order_transition,
    publish_order_cancelled_by_table,
    publish_payment_recorded,
)

__all__ = [
    "CircuitState",
    "EventCircuitBreaker",
    "get_event_circuit_breaker",
    "calculate_retry_delay_with_jitter",
    "ORDER_NEW",
    "ORDER_UPDATE",
    "MAX_EVENT_SIZE",
    "Event",
    "channel_cafe_admin",
    "channel_cafe_kitchen",
    "channel_cafe_delivery",
    "channel_table",
    "get_redis_pool",
    "close_redis_pool",
    "check_redis_health",
    "publish_event",
    "EventPublisher",
    "RedisEventPublisher",
    "NullEventPublisher",
    "get_event_publisher",
    "reset_event_publisher",
    "broadcast",
    "transition_groups",
    "new_order_groups",
    "public_cancel_groups",
    "payment_groups",
    "publish_order_created",
    "publish_order_transition",
    "publish_order_cancelled_by_table",
    "publish_payment_recorded",
]
