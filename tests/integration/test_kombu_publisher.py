from uuid import uuid4

import pytest
from kombu import Connection
from kombu.exceptions import OperationalError

from app.modules.membership.application.commands import ApproveClubRequestCommand
from app.modules.membership.application.queries import SearchClubsQuery
from app.modules.membership.domain.events import ClubRequestApprovedEvent, ClubRequestApprovedPayload
from app.modules.membership.domain.models import UserRole
from app.shared.config.messaging import MessagingConfig
from app.shared.core.exceptions import MessagingError
from app.shared.events.consumer import DeliveryOutcome
from app.shared.events.publisher import KombuEventPublisher


@pytest.fixture
def kombu_publisher(settings):
    publisher = KombuEventPublisher(MessagingConfig(settings))
    yield publisher
    publisher.close()


@pytest.fixture
def queue_name() -> str:
    # the memory transport keeps queues for the whole process
    return f"ClubRequest-{uuid4().hex[:8]}"


def receive(queue_name: str):
    with Connection("memory://") as connection:
        queue = connection.SimpleQueue(queue_name)
        try:
            message = queue.get(block=True, timeout=1)
            message.ack()
            return message
        finally:
            queue.close()


async def test_published_body_is_pattern_envelope(kombu_publisher, queue_name):
    event = ClubRequestApprovedEvent(
        payload=ClubRequestApprovedPayload(request_id="req-1", requester_id="user-1")
    )

    await kombu_publisher.publish(event, queue_name)

    message = receive(queue_name)
    assert message.payload == {
        "pattern": "ClubRequest.Approved",
        "data": {"requestId": "req-1", "requesterId": "user-1"},
    }
    assert message.headers["event_id"] == event.metadata.event_id


async def test_consumed_approval_creates_club(kombu_publisher, queue_name, scenario, container, publisher):
    user = await scenario.register_user()
    await scenario.affiliate(user.id)
    request = await scenario.request_club(user.id)
    await container.approve_club_request.handle(ApproveClubRequestCommand(club_request_id=request.id))
    approved = publisher.events_for(container.messaging.club_request_queue)[0]

    await kombu_publisher.publish(approved, queue_name)
    message = receive(queue_name)
    outcome = await container.club_request_consumer.process(message.payload, message.headers)

    assert outcome is DeliveryOutcome.ACK
    page = await container.search_clubs.handle(SearchClubsQuery())
    assert [club.principal_id for club in page.items] == [user.id]
    owner = await scenario.find_user(user.id)
    assert owner.has_role(UserRole.DONO_DE_CLUBE)


async def test_broker_failure_becomes_messaging_error(kombu_publisher, queue_name, monkeypatch):
    def broken(event, name):
        raise OperationalError("connection refused")

    monkeypatch.setattr(kombu_publisher, "_publish_sync", broken)
    event = ClubRequestApprovedEvent(
        payload=ClubRequestApprovedPayload(request_id="req-1", requester_id="user-1")
    )

    with pytest.raises(MessagingError) as exc_info:
        await kombu_publisher.publish(event, queue_name)

    assert exc_info.value.details["queue"] == queue_name
