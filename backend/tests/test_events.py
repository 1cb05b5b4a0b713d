"""
Tests for event publishing: retry and circuit breaker, the Redis adapter
and the routing of order events to subscriber groups.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest
import redis.asyncio as redis

from shared.config.constants import OrderStatus
from shared.infrastructure.events import (
    ORDER_NEW,
    ORDER_UPDATE,
    CircuitState,
    Event,
    EventCircuitBreaker,
    NullEventPublisher,
    RedisEventPublisher,
    broadcast,
    calculate_retry_delay_with_jitter,
    channel_cafe_admin,
    channel_cafe_delivery,
    channel_cafe_kitchen,
    channel_table,
    get_event_circuit_breaker,
    publish_event,
    publish_order_transition,
    transition_groups,
)
from tests.conftest import FailingPublisher, RecordingPublisher


def make_event(**payload):
    return Event(type=ORDER_UPDATE, group="cafe:1:admin", payload=payload or {"id": 1})


class TestEventEnvelope:

    def test_json_round_trip(self):
        event = make_event(id=7, status="NEW")

        decoded = Event.from_json(event.to_json())

        assert decoded.type == ORDER_UPDATE
        assert decoded.payload == {"id": 7, "status": "NEW"}
        assert decoded.ts is not None

    @pytest.mark.parametrize("kwargs", [{"type": "", "group": "g"}, {"type": "t", "group": ""}])
    def test_rejects_blank_fields(self, kwargs):
        with pytest.raises(ValueError):
            Event(**kwargs)


class TestPublishEvent:

    @pytest.mark.asyncio
    async def test_publishes_json_on_group_channel(self):
        client = AsyncMock()
        client.publish.return_value = 2

        receivers = await publish_event(client, "cafe:1:admin", make_event(id=3))

        assert receivers == 2
        channel, body = client.publish.call_args.args
        assert channel == "cafe:1:admin"
        assert json.loads(body)["payload"] == {"id": 3}

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        client = AsyncMock()
        client.publish.side_effect = [redis.ConnectionError("down"), 1]

        with patch("shared.infrastructure.events.publisher.asyncio.sleep", new=AsyncMock()) as sleep:
            receivers = await publish_event(client, "cafe:1:admin", make_event())

        assert receivers == 1
        assert client.publish.await_count == 2
        sleep.assert_awaited_once()
        assert get_event_circuit_breaker().state == CircuitState.CLOSED

    @pytest.mark.asyncio
    async def test_raises_after_all_retries(self):
        client = AsyncMock()
        client.publish.side_effect = redis.ConnectionError("down")

        with patch("shared.infrastructure.events.publisher.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(redis.ConnectionError):
                await publish_event(client, "cafe:1:admin", make_event())

        assert client.publish.await_count == 3
        assert get_event_circuit_breaker().get_stats()["failure_count"] == 1

    @pytest.mark.asyncio
    async def test_reraises_error_of_final_attempt(self):
        final = redis.TimeoutError("slow")
        client = AsyncMock()
        client.publish.side_effect = [redis.ConnectionError("down"), OSError("reset"), final]

        with patch("shared.infrastructure.events.publisher.asyncio.sleep", new=AsyncMock()):
            with pytest.raises(redis.TimeoutError) as exc_info:
                await publish_event(client, "cafe:1:admin", make_event())

        assert exc_info.value is final

    @pytest.mark.asyncio
    async def test_open_breaker_skips_publish(self):
        breaker = get_event_circuit_breaker()
        for _ in range(5):
            breaker.record_failure()
        client = AsyncMock()

        receivers = await publish_event(client, "cafe:1:admin", make_event())

        assert breaker.state == CircuitState.OPEN
        assert receivers == 0
        client.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_oversized_event_rejected(self):
        client = AsyncMock()

        with pytest.raises(ValueError, match="exceeds max size"):
            await publish_event(client, "cafe:1:admin", make_event(blob="x" * 70_000))

        client.publish.assert_not_awaited()


class TestCircuitBreaker:

    def test_half_open_after_recovery_timeout(self):
        breaker = EventCircuitBreaker(failure_threshold=2, recovery_timeout=0.0)
        breaker.record_failure()
        breaker.record_failure()

        assert breaker.state == CircuitState.OPEN
        assert breaker.can_execute() is True
        assert breaker.state == CircuitState.HALF_OPEN

        breaker.record_success()
        assert breaker.state == CircuitState.CLOSED

    def test_failed_trial_call_reopens(self):
        breaker = EventCircuitBreaker(failure_threshold=1, recovery_timeout=0.0)
        breaker.record_failure()
        breaker.can_execute()

        breaker.record_failure()

        assert breaker.state == CircuitState.OPEN

    def test_rejects_while_open(self):
        breaker = EventCircuitBreaker(failure_threshold=1, recovery_timeout=60.0)
        breaker.record_failure()

        assert breaker.can_execute() is False
        assert breaker.get_stats()["rejected_count"] == 1

    def test_retry_delay_bounds(self):
        for attempt in range(6):
            delay = calculate_retry_delay_with_jitter(attempt, 0.5)
            assert 0.5 <= delay <= 10.0


class TestPublishers:

    @pytest.mark.asyncio
    async def test_redis_publisher_wraps_payload(self):
        client = AsyncMock()
        client.publish.return_value = 1
        publisher = RedisEventPublisher(client)

        await publisher.publish("table:table-1", ORDER_NEW, {"id": 9})

        body = json.loads(client.publish.call_args.args[1])
        assert body["type"] == ORDER_NEW
        assert body["group"] == "table:table-1"
        assert body["payload"] == {"id": 9}

    @pytest.mark.asyncio
    async def test_null_publisher_discards(self):
        assert await NullEventPublisher().publish("cafe:1:admin", ORDER_NEW, {"id": 1}) is None

    @pytest.mark.asyncio
    async def test_broadcast_continues_past_failures(self):
        failing = FailingPublisher()

        delivered = await broadcast(failing, ["a", "b", "c"], ORDER_UPDATE, {"id": 1})

        assert delivered == 0
        assert failing.attempts == 3

    @pytest.mark.asyncio
    async def test_broadcast_counts_deliveries(self):
        recorder = RecordingPublisher()

        delivered = await broadcast(recorder, ["a", "b"], ORDER_UPDATE, {"id": 1})

        assert delivered == 2
        assert recorder.groups() == ["a", "b"]

    @pytest.mark.asyncio
    async def test_transition_uses_payload_status(self):
        recorder = RecordingPublisher()

        await publish_order_transition(recorder, 4, "table-2", "COMPLETED", {"id": 1, "status": "DELIVERED"})

        assert recorder.groups(ORDER_UPDATE) == ["cafe:4:admin", "cafe:4:kitchen", "cafe:4:delivery", "table:table-2"]


class TestTransitionGroups:

    @pytest.mark.parametrize(
        "previous, new, expected",
        [
            ("NEW", "ACCEPTED", ["admin", "kitchen"]),
            ("IN_PROGRESS", "COMPLETED", ["admin", "kitchen", "delivery"]),
            ("COMPLETED", "DELIVERED", ["admin", "kitchen", "delivery"]),
            ("DELIVERED", "PAID", ["admin"]),
            ("COMPLETED", "CANCELLED", ["admin", "kitchen", "delivery"]),
            ("NEW", "CANCELLED", ["admin", "kitchen", "delivery"]),
        ],
    )
    def test_staff_groups(self, previous, new, expected):
        groups = transition_groups(1, None, previous, new)

        assert groups == [f"cafe:1:{name}" for name in expected]

    def test_table_group_appended(self):
        assert transition_groups(1, "table-5", "DELIVERED", "PAID") == ["cafe:1:admin", "table:table-5"]


class TestChannels:

    def test_cafe_groups(self):
        assert channel_cafe_admin(3) == "cafe:3:admin"
        assert channel_cafe_kitchen(3) == "cafe:3:kitchen"
        assert channel_cafe_delivery(3) == "cafe:3:delivery"

    @pytest.mark.parametrize("bad", [0, -1, True, "1"])
    def test_rejects_bad_cafe_id(self, bad):
        with pytest.raises(ValueError):
            channel_cafe_admin(bad)

    def test_rejects_blank_slug(self):
        with pytest.raises(ValueError):
            channel_table("")

    def test_every_group_receives_some_transition(self):
        routed = {
            group
            for previous in OrderStatus.ALL
            for new in OrderStatus.ALL
            for group in transition_groups(1, "t-1", previous, new)
        }

        assert routed == {
            channel_cafe_admin(1),
            channel_cafe_kitchen(1),
            channel_cafe_delivery(1),
            channel_table("t-1"),
        }
