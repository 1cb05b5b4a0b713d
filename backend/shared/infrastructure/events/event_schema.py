"""
Event Schema.

Envelope published on every group channel.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class Event:
    """
    Unified envelope for notification events.

    'type' is the event name (orders:new, orders:update), 'group' the
    subscriber group key the event was published to, and 'payload' the
    event-specific data, normally an order snapshot.
    """

    type: str
    group: str
    payload: dict[str, Any] = field(default_factory=dict)
    actor: dict[str, Any] = field(default_factory=dict)
    ts: str | None = None
    v: int = 1  # Schema version

    def __post_init__(self) -> None:
        """Reject malformed events before they reach Redis."""
        if not self.type or not isinstance(self.type, str):
            raise ValueError("Event type must be a non-empty string")

        if not self.group or not isinstance(self.group, str):
            raise ValueError("Event group must be a non-empty string")

        if self.payload is not None and not isinstance(self.payload, dict):
            raise ValueError("Event payload must be a dict or None")

        if self.actor is not None and not isinstance(self.actor, dict):
            raise ValueError("Event actor must be a dict or None")

    def to_json(self) -> str:
        """Serialize event to JSON string."""
        data = asdict(self)
        data["payload"] = data["payload"] or {}
        data["actor"] = data["actor"] or {}
        data["ts"] = data["ts"] or datetime.now(timezone.utc).isoformat()
        return json.dumps(data, ensure_ascii=False, default=str)

    @classmethod
    def from_json(cls, json_str: str) -> "Event":
        """Deserialize event from JSON string; validation runs in __post_init__."""
        return cls(**json.loads(json_str))
