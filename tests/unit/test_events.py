import asyncio
from typing import ClassVar, List, Optional

import pytest
from kombu import Connection

from app.modules.membership.domain.events import (
    ClubRequestApprovedEvent,
    ClubRequestApprovedPayload,
    Participant,
    RegistrationIntegrationEvent,
    RegistrationIntegrationPayload,
)
from app.shared.config.messaging import MessagingConfig
from app.shared.core.exceptions import (
    EntityNotFoundError,
    InvalidOperationError,
    MessagingError,
    RedundantOperationError,
)
from app.shared.events.base import DomainEvent, EventMetadata, EventPayload, EventRegistry
from app.shared.events.consumer import DeliveryOutcome, EventConsumer, QueueConsumer


class PingPayload(EventPayload):
    ping_id: str


class PingEvent(DomainEvent):
    event_type: ClassVar[str] = "Test.Ping"

    payload: PingPayload


class FakeMessage:
    """Stands in for a kombu message and records how it was settled."""

    def __init__(self, headers: Optional[dict] = None):
        self.headers = headers or {}
        self.acked = False
        self.rejected_with: Optional[bool] = None

    def ack(self):
        self.acked = True

    def reject(self, requeue: bool = False):
        self.rejected_with = requeue


@pytest.fixture
def registry() -> EventRegistry:
    registry = EventRegistry()
    registry.register(PingEvent)
    return registry


def ping(ping_id: str = "p-1") -> PingEvent:
    return PingEvent(payload=PingPayload(ping_id=ping_id))


def consumer_with(registry: EventRegistry, handler) -> EventConsumer:
    consumer = EventConsumer("Test", registry=registry)
    consumer.register(PingEvent.event_type, handler)
    return consumer


# =============================================================================
# ENVELOPE AND REGISTRY
# =============================================================================

def test_message_body_is_pattern_and_camel_case_data():
    event = ClubRequestApprovedEvent(
        payload=ClubRequestApprovedPayload(request_id="req-1", requester_id="user-1")
    )

    assert event.to_message() == {
        "pattern": "ClubRequest.Approved",
        "data": {"requestId": "req-1", "requesterId": "user-1"},
    }


def test_integration_event_lists_participants():
    event = RegistrationIntegrationEvent(
        payload=RegistrationIntegrationPayload(
            registration_id="reg-1",
            tournament_id="t-1",
            participants=[Participant(competitor_id="dep-1")],
        )
    )

    assert event.to_message()["data"] == {
        "registrationId": "reg-1",
        "tournamentId": "t-1",
        "isDuo": False,
        "participants": [{"competitorId": "dep-1"}],
    }


def test_metadata_survives_headers():
    metadata = EventMetadata(correlation_id="corr-1")

    restored = EventMetadata.from_headers(metadata.to_headers())

    assert restored.event_id == metadata.event_id
    assert restored.correlation_id == "corr-1"
    assert restored.timestamp == metadata.timestamp


def test_missing_headers_get_fresh_metadata():
    metadata = EventMetadata.from_headers(None)

    assert metadata.event_id
    assert metadata.correlation_id is None


def test_registry_parses_json_text(registry: EventRegistry):
    event = registry.parse(ping("p-9").to_json())

    assert isinstance(event, PingEvent)
    assert event.payload.ping_id == "p-9"


@pytest.mark.parametrize("body", ["not json", b"[1, 2]", {"data": {}}])
def test_registry_refuses_bodies_without_envelope(registry: EventRegistry, body):
    with pytest.raises(MessagingError):
        registry.parse(body)


def test_registry_refuses_unknown_pattern(registry: EventRegistry):
    with pytest.raises(MessagingError):
        registry.parse({"pattern": "Nobody.Listens", "data": {}})


def test_registering_a_second_class_for_a_pattern_fails(registry: EventRegistry):
    class OtherPing(DomainEvent):
        event_type: ClassVar[str] = "Test.Ping"

        payload: PingPayload

    with pytest.raises(ValueError):
        registry.register(OtherPing)


# =============================================================================
# EVENT CONSUMER OUTCOMES
# =============================================================================

async def test_successful_handler_acks(registry: EventRegistry):
    seen: List[str] = []

    async def handler(event: PingEvent):
        seen.append(event.payload.ping_id)

    consumer = consumer_with(registry, handler)
    event = ping()

    outcome = await consumer.process(event.to_message(), event.metadata.to_headers())

    assert outcome is DeliveryOutcome.ACK
    assert seen == ["p-1"]


@pytest.mark.parametrize(
    "error",
    [
        EntityNotFoundError("ClubRequest", "req-1"),
        RedundantOperationError("Club already created."),
    ],
)
async def test_stale_or_duplicate_messages_are_discarded(registry: EventRegistry, error):
    async def handler(event):
        raise error

    outcome = await consumer_with(registry, handler).process(ping().to_message())

    assert outcome is DeliveryOutcome.DISCARD


@pytest.mark.parametrize(
    "error",
    [InvalidOperationError("Family not affiliated."), RuntimeError("database down")],
)
async def test_other_failures_are_dead_lettered(registry: EventRegistry, error):
    async def handler(event):
        raise error

    outcome = await consumer_with(registry, handler).process(ping().to_message())

    assert outcome is DeliveryOutcome.DEAD_LETTER


async def test_invalid_payload_is_dead_lettered(registry: EventRegistry):
    async def handler(event):
        raise AssertionError("must not be called")

    outcome = await consumer_with(registry, handler).process({"pattern": "Test.Ping", "data": {}})

    assert outcome is DeliveryOutcome.DEAD_LETTER


async def test_unknown_pattern_is_dead_lettered(registry: EventRegistry):
    async def handler(event):
        return None

    outcome = await consumer_with(registry, handler).process({"pattern": "Other.Thing", "data": {}})

    assert outcome is DeliveryOutcome.DEAD_LETTER


async def test_registered_event_without_handler_is_dead_lettered(registry: EventRegistry):
    consumer = EventConsumer("Test", registry=registry)

    assert await consumer.process(ping().to_message()) is DeliveryOutcome.DEAD_LETTER


def test_duplicate_handler_registration_fails(registry: EventRegistry):
    async def handler(event):
        return None

    consumer = consumer_with(registry, handler)

    with pytest.raises(ValueError):
        consumer.register(PingEvent.event_type, handler)


@pytest.mark.parametrize(
    "outcome, acked, rejected_with",
    [
        (DeliveryOutcome.ACK, True, None),
        (DeliveryOutcome.DISCARD, True, None),
        (DeliveryOutcome.DEAD_LETTER, False, False),
    ],
)
def test_settle_maps_outcome_to_broker_call(outcome, acked, rejected_with):
    message = FakeMessage()

    EventConsumer.settle(message, outcome)

    assert message.acked is acked
    assert message.rejected_with is rejected_with


# =============================================================================
# QUEUE CONSUMER
# =============================================================================

def queue_consumer(settings, event_consumer: EventConsumer, runner) -> QueueConsumer:
    return QueueConsumer(
        MessagingConfig(settings),
        event_consumer,
        connection=Connection("memory://"),
        runner=runner,
    )


def test_on_message_runs_handler_and_acks(settings, registry: EventRegistry):
    seen: List[str] = []

    async def handler(event: PingEvent):
        seen.append(event.payload.ping_id)

    consumer = queue_consumer(settings, consumer_with(registry, handler), runner=asyncio.run)
    event = ping()
    message = FakeMessage(event.metadata.to_headers())

    consumer.on_message(event.to_message(), message)

    assert seen == ["p-1"]
    assert message.acked


def test_on_message_rejects_failed_handler_without_requeue(settings, registry: EventRegistry):
    async def handler(event):
        raise RuntimeError("boom")

    consumer = queue_consumer(settings, consumer_with(registry, handler), runner=asyncio.run)
    message = FakeMessage()

    consumer.on_message(ping().to_message(), message)

    assert not message.acked
    assert message.rejected_with is False


def test_on_message_dead_letters_when_dispatch_fails(settings, registry: EventRegistry):
    async def handler(event):
        return None

    def broken_runner(coro):
        coro.close()
        raise RuntimeError("event loop is closed")

    consumer = queue_consumer(settings, consumer_with(registry, handler), runner=broken_runner)
    message = FakeMessage()

    consumer.on_message(ping().to_message(), message)

    assert message.rejected_with is False


def test_consumer_without_loop_cannot_dispatch(settings, registry: EventRegistry):
    async def handler(event):
        return None

    consumer = QueueConsumer(
        MessagingConfig(settings), consumer_with(registry, handler), connection=Connection("memory://")
    )
    message = FakeMessage()

    consumer.on_message(ping().to_message(), message)

    assert message.rejected_with is False
    assert not consumer.is_running


def test_queues_dead_letter_into_dlq(settings):
    config = MessagingConfig(settings)

    queue = config.queue("ClubRequest")
    dead_letter = config.dead_letter_queue("ClubRequest")

    assert queue.durable
    assert queue.queue_arguments["x-dead-letter-routing-key"] == "ClubRequest-dlq"
    assert dead_letter.name == "ClubRequest-dlq"
