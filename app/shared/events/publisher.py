# 📄 File: app/shared/events/publisher.py
# 🧭 Purpose (Layman Explanation):
# This file is like a postal service for the app - when something important happens (like
# an admin approving a club request), it drops a letter in the right mailbox (queue) so
# the background workers can act on it.
# 🧪 Purpose (Technical Summary):
# Event publishing port plus its kombu adapter. Events are serialized as
# ``{"pattern", "data"}`` JSON, sent persistently on the default exchange with the queue
# name as routing key; the queue and its dead-letter queue are declared on publish.
# Broker errors are surfaced as MessagingError so callers can decide what to roll back.
# 🔗 Dependencies:
# kombu (producer pool), asyncio, base.py, app.shared.config.messaging
# 🔄 Connected Modules / Calls From:
# Approve-club-request handler, registration sync handlers, container wiring, tests

import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from kombu import Connection
from kombu.exceptions import KombuError, OperationalError
from kombu.pools import producers

from app.shared.config.messaging import MessagingConfig
from app.shared.core.exceptions import MessagingError
from app.shared.utils.logging import get_logger

from .base import DomainEvent

logger = get_logger(__name__)


class EventPublisher(ABC):
    """Port used by application handlers to emit events to a named queue."""

    @abstractmethod
    async def publish(self, event: DomainEvent, queue_name: str) -> None:
        """
        Publish an event.

        Raises:
            MessagingError: If the broker did not accept the message
        """


class KombuEventPublisher(EventPublisher):
    """
    RabbitMQ publisher backed by a kombu producer pool.

    kombu is blocking, so each publish runs in a worker thread to keep the
    event loop free.
    """

    def __init__(self, config: MessagingConfig, connection: Optional[Connection] = None):
        self.config = config
        self.connection = connection or config.create_connection()

    def _publish_sync(self, event: DomainEvent, queue_name: str) -> None:
        queue = self.config.queue(queue_name)
        dead_letter = self.config.dead_letter_queue(queue_name)
        with producers[self.connection].acquire(block=True) as producer:
            producer.publish(
                event.to_message(),
                exchange="",
                routing_key=queue_name,
                serializer="json",
                delivery_mode=2,
                headers=event.metadata.to_headers(),
                declare=[queue, dead_letter],
                retry=True,
                retry_policy=self.config.publish_retry_policy,
            )

    async def publish(self, event: DomainEvent, queue_name: str) -> None:
        try:
            await asyncio.to_thread(self._publish_sync, event, queue_name)
        except (KombuError, OperationalError, OSError) as e:
            logger.error(f"Failed to publish {event.event_type} to {queue_name}: {e}")
            raise MessagingError(
                f"Failed to publish event {event.event_type}",
                queue=queue_name,
                event_type=event.event_type,
            ) from e

        logger.info(
            f"Published {event.event_type} to {queue_name}",
            extra={"event_id": event.metadata.event_id, "queue": queue_name},
        )

    def close(self) -> None:
        self.connection.release()


class RecordingEventPublisher(EventPublisher):
    """
    Publisher that keeps events in memory.

    Used when the broker is disabled (local runs, tests). ``fail_with`` makes
    every publish raise, to exercise rollback paths.
    """

    def __init__(self):
        self.published: List[Tuple[str, DomainEvent]] = []
        self.fail_with: Optional[Exception] = None

    async def publish(self, event: DomainEvent, queue_name: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.published.append((queue_name, event))
        logger.debug(f"Recorded {event.event_type} for {queue_name}")

    def events_for(self, queue_name: str) -> List[DomainEvent]:
        return [event for queue, event in self.published if queue == queue_name]

    def clear(self) -> None:
        self.published.clear()
