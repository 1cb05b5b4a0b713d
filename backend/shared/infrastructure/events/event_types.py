"""
Event Type Constants.

Event names published to subscriber groups over Redis pub/sub.
"""

from shared.config.settings import settings

# =============================================================================
# Order lifecycle events
# =============================================================================

ORDER_NEW = "orders:new"  # Customer submitted a cart against a table
ORDER_UPDATE = "orders:update"  # Status change, cancellation or payment

ALL_EVENT_TYPES = frozenset({ORDER_NEW, ORDER_UPDATE})

# =============================================================================
# Size limits
# =============================================================================

MAX_EVENT_SIZE = settings.event_max_size
