# 📄 File: app/shared/config/messaging.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for the message broker (RabbitMQ) that carries events between the
# web API and the background listeners: which queues exist, where failed messages
# go, and how connections behave.
#
# 🧪 Purpose (Technical Summary):
# kombu topology and connection settings: durable queues on the default exchange,
# each dead-lettering into ``<queue><DEAD_LETTER_SUFFIX>``, connection heartbeat and
# publish retry policy derived from Settings.
#
# 🔗 Dependencies:
# - kombu (Connection, Exchange, Queue)
# - app.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - app.shared.events.publisher (declares queues on publish)
# - app.shared.events.consumer (queue to consume)
# - app.modules.membership.container

from typing import Any, Dict

from kombu import Connection, Exchange, Queue

from .settings import Settings

# RabbitMQ's nameless direct exchange: routing key == queue name
DEFAULT_EXCHANGE = Exchange("", type="direct")


class MessagingConfig:
    """
    Broker configuration class.

    Queue and dead-letter names, connection factory and publish retry
    policy all come from one Settings instance.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    # =========================================================================
    # CONNECTION SETTINGS
    # =========================================================================

    @property
    def broker_url(self) -> str:
        return self.settings.RABBITMQ_URL

    def create_connection(self) -> Connection:
        """New (lazy) broker connection with the configured heartbeat."""
        return Connection(
            self.broker_url,
            heartbeat=self.settings.BROKER_HEARTBEAT,
            connect_timeout=self.settings.BROKER_RECONNECT_INTERVAL,
        )

    @property
    def reconnect_interval(self) -> int:
        return self.settings.BROKER_RECONNECT_INTERVAL

    @property
    def prefetch_count(self) -> int:
        return self.settings.CONSUMER_PREFETCH_COUNT

    @property
    def publish_retry_policy(self) -> Dict[str, Any]:
        return {
            "max_retries": self.settings.BROKER_PUBLISH_MAX_RETRIES,
            "interval_start": 0,
            "interval_step": 1,
            "interval_max": self.settings.BROKER_RECONNECT_INTERVAL,
        }

    # =========================================================================
    # QUEUE DEFINITIONS
    # =========================================================================

    def dead_letter_name(self, queue_name: str) -> str:
        return f"{queue_name}{self.settings.DEAD_LETTER_SUFFIX}"

    def queue(self, queue_name: str) -> Queue:
        """Durable work queue that dead-letters rejected messages."""
        return Queue(
            queue_name,
            exchange=DEFAULT_EXCHANGE,
            routing_key=queue_name,
            durable=True,
            queue_arguments={
                "x-dead-letter-exchange": "",
                "x-dead-letter-routing-key": self.dead_letter_name(queue_name),
            },
        )

    def dead_letter_queue(self, queue_name: str) -> Queue:
        name = self.dead_letter_name(queue_name)
        return Queue(name, exchange=DEFAULT_EXCHANGE, routing_key=name, durable=True)

    @property
    def club_request_queue(self) -> str:
        return self.settings.CLUB_REQUEST_QUEUE

    @property
    def tournament_registration_queue(self) -> str:
        return self.settings.TOURNAMENT_REGISTRATION_QUEUE

    @property
    def tournament_integration_queue(self) -> str:
        return self.settings.TOURNAMENT_INTEGRATION_QUEUE
