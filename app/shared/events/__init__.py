# 📄 File: app/shared/events/__init__.py

# 🧭 Purpose (Layman Explanation):
# The messaging system that lets one part of the service hand work to another through a
# queue, like "this club request was approved, go create the club".

# 🧪 Purpose (Technical Summary):
# Integration event relay: pattern-envelope events with header metadata (base), kombu
# publishing (publisher) and consumption with ack/discard/dead-letter outcomes (consumer).

# 🔗 Dependencies:
# - base: Event, payload, metadata and registry classes
# - publisher: Kombu and recording publishers
# - consumer: Event dispatch and the kombu queue consumer

# 🔄 Connected Modules / Calls From:
# Used by: membership handlers (publishing), membership listeners (consuming),
# MembershipContainer (wiring and consumer threads)

from .base import DomainEvent, EventMetadata, EventPayload, EventRegistry, event_registry
from .consumer import DeliveryOutcome, EventConsumer, QueueConsumer
from .publisher import EventPublisher, KombuEventPublisher, RecordingEventPublisher

__all__ = [
    "DomainEvent",
    "EventMetadata",
    "EventPayload",
    "EventRegistry",
    "event_registry",
    "DeliveryOutcome",
    "EventConsumer",
    "QueueConsumer",
    "EventPublisher",
    "KombuEventPublisher",
    "RecordingEventPublisher",
]
