# 📄 File: app/shared/events/consumer.py
# 🧭 Purpose (Layman Explanation):
# The mail room for background work: it picks up letters (events) from a queue, hands
# each one to the person responsible for it, and then decides whether the letter is
# done, can be thrown away, or must be set aside for a human to inspect.
# 🧪 Purpose (Technical Summary):
# Queue consumption with explicit settlement. EventConsumer maps event patterns to async
# handlers and classifies the result: success -> ACK, missing entity or redundant
# operation -> DISCARD (acked, never retried), anything else -> DEAD_LETTER (rejected
# without requeue so the broker routes it to ``<queue>-dlq``). QueueConsumer binds it
# to a kombu ConsumerMixin running in a background thread.
# 🔗 Dependencies:
# kombu (ConsumerMixin), asyncio, threading, pydantic, base.py, app.shared.config.messaging
# 🔄 Connected Modules / Calls From:
# membership listeners, container wiring (startup/shutdown), tests

import asyncio
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Any, Awaitable, Callable, Coroutine, Dict, Mapping, Optional

from kombu import Connection
from kombu.mixins import ConsumerMixin
from pydantic import ValidationError

from app.shared.config.messaging import MessagingConfig
from app.shared.core.exceptions import EntityNotFoundError, MessagingError, RedundantOperationError
from app.shared.utils.logging import get_logger, log_context

from .base import DomainEvent, EventRegistry, event_registry

logger = get_logger(__name__)

EventHandlerFunc = Callable[[DomainEvent], Awaitable[None]]
CoroutineRunner = Callable[[Coroutine[Any, Any, "DeliveryOutcome"]], "DeliveryOutcome"]


class DeliveryOutcome(str, Enum):
    """How a consumed message is settled with the broker."""
    ACK = "ack"                  # Handled successfully
    DISCARD = "discard"          # Acked without effect (stale or duplicate message)
    DEAD_LETTER = "dead_letter"  # Rejected without requeue, routed to the DLQ


class EventConsumer:
    """
    Pattern-to-handler dispatch for one queue.

    Example:
        consumer = EventConsumer("ClubRequest")
        consumer.register("ClubRequest.Approved", listener.on_club_request_approved)
        outcome = await consumer.process(body, headers)
    """

    def __init__(self, queue_name: str, registry: Optional[EventRegistry] = None):
        self.queue_name = queue_name
        self.registry = registry or event_registry
        self._handlers: Dict[str, EventHandlerFunc] = {}

    def register(self, event_type: str, handler: EventHandlerFunc) -> None:
        if event_type in self._handlers:
            raise ValueError(f"Handler for {event_type} already registered on {self.queue_name}")
        self._handlers[event_type] = handler
        logger.debug(f"Registered handler for {event_type} on {self.queue_name}")

    def handles(self, event_type: str) -> bool:
        return event_type in self._handlers

    async def process(self, body: Any, headers: Optional[Mapping[str, Any]] = None) -> DeliveryOutcome:
        """
        Decode and dispatch one message body.

        Never raises: every failure is turned into a DeliveryOutcome.
        """
        try:
            event = self.registry.parse(body, headers)
        except (MessagingError, ValidationError) as e:
            logger.error(f"Unreadable message on {self.queue_name}: {e}")
            return DeliveryOutcome.DEAD_LETTER

        handler = self._handlers.get(event.event_type)
        if handler is None:
            logger.error(f"No handler for {event.event_type} on {self.queue_name}")
            return DeliveryOutcome.DEAD_LETTER

        metadata = event.metadata
        with log_context(correlation_id=metadata.correlation_id or metadata.event_id):
            try:
                await handler(event)
            except (EntityNotFoundError, RedundantOperationError) as e:
                logger.warning(
                    f"Discarding {event.event_type} ({metadata.event_id}): {e.message}",
                    extra={"error": e.to_dict()},
                )
                return DeliveryOutcome.DISCARD
            except Exception as e:
                logger.error(
                    f"Handler for {event.event_type} failed ({metadata.event_id}): {e}",
                    exc_info=True,
                )
                return DeliveryOutcome.DEAD_LETTER

            logger.info(f"Processed {event.event_type} ({metadata.event_id})")
            return DeliveryOutcome.ACK

    @staticmethod
    def settle(message: Any, outcome: DeliveryOutcome) -> None:
        """Ack or reject a kombu message according to ``outcome``."""
        if outcome is DeliveryOutcome.DEAD_LETTER:
            message.reject(requeue=False)
        else:
            message.ack()


class QueueConsumer(ConsumerMixin):
    """
    kombu consumer loop for one EventConsumer.

    The loop runs in its own thread; handlers are coroutines executed on the
    application's event loop through ``runner``.
    """

    def __init__(
        self,
        config: MessagingConfig,
        event_consumer: EventConsumer,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        connection: Optional[Connection] = None,
        runner: Optional[CoroutineRunner] = None,
    ):
        self.config = config
        self.event_consumer = event_consumer
        self.connection = connection or config.create_connection()
        self.loop = loop
        self.runner = runner or self._run_on_loop
        self._thread: Optional[threading.Thread] = None

    @property
    def queue_name(self) -> str:
        return self.event_consumer.queue_name

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run_on_loop(self, coro: Coroutine[Any, Any, DeliveryOutcome]) -> DeliveryOutcome:
        if self.loop is None:
            coro.close()
            raise MessagingError("Consumer has no event loop", queue=self.queue_name)
        return asyncio.run_coroutine_threadsafe(coro, self.loop).result()

    @contextmanager
    def establish_connection(self):
        # fixed interval between reconnect attempts
        interval = self.config.reconnect_interval
        with self.create_connection() as conn:
            conn.ensure_connection(
                self.on_connection_error,
                self.connect_max_retries,
                interval_start=interval,
                interval_step=0,
                interval_max=interval,
            )
            yield conn

    def get_consumers(self, Consumer, channel):
        self.config.dead_letter_queue(self.queue_name).bind(channel).declare()
        consumer = Consumer(
            queues=[self.config.queue(self.queue_name)],
            callbacks=[self.on_message],
            accept=["json"],
        )
        consumer.qos(prefetch_count=self.config.prefetch_count)
        return [consumer]

    def on_consume_ready(self, connection, channel, consumers, **kwargs):
        logger.info(f"Consuming from {self.queue_name}")

    def on_message(self, body: Any, message: Any) -> None:
        try:
            outcome = self.runner(self.event_consumer.process(body, message.headers))
        except Exception as e:
            logger.error(f"Message dispatch on {self.queue_name} failed: {e}", exc_info=True)
            outcome = DeliveryOutcome.DEAD_LETTER
        self.event_consumer.settle(message, outcome)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if loop is not None:
            self.loop = loop
        if self._thread is not None and self._thread.is_alive():
            return
        self.should_stop = False
        self._thread = threading.Thread(
            target=self.run, name=f"consumer-{self.queue_name}", daemon=True
        )
        self._thread.start()
        logger.info(f"Consumer thread for {self.queue_name} started")

    def stop(self, timeout: float = 5.0) -> None:
        self.should_stop = True
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        self.connection.release()
        logger.info(f"Consumer for {self.queue_name} stopped")
