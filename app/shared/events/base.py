# 📄 File: app/shared/events/base.py

# 🧭 Purpose (Layman Explanation):
# This file defines the basic building blocks for events: templates describing what
# information a message carries when something important happens (a club request was
# approved, a tournament registration was confirmed) and how it travels over the queue.

# 🧪 Purpose (Technical Summary):
# Base classes for typed domain events. Each event class declares its ``event_type``
# tag and a pydantic payload; the wire body is ``{"pattern": ..., "data": ...}`` with a
# camelCase payload, metadata travels in message headers. The registry turns incoming
# bodies back into the matching event class, validating the payload at the boundary.

# 🔗 Dependencies:
# - pydantic: payload validation and camelCase aliases
# - dataclasses: Event metadata structure
# - uuid, datetime

# 🔄 Connected Modules / Calls From:
# Used by: app.modules.membership.domain.events (concrete events),
# app.shared.events.publisher (serialization), app.shared.events.consumer (parsing)

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Mapping, Optional, Type, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.shared.core.exceptions import MessagingError
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

SOURCE = "ncfca-membership-api"


@dataclass
class EventMetadata:
    """
    Metadata for domain events.

    Carried as AMQP headers so the message body stays a plain
    pattern/data envelope.
    """
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = "1.0"
    source: str = SOURCE
    correlation_id: Optional[str] = None

    def to_headers(self) -> Dict[str, str]:
        """Convert metadata to message headers."""
        headers = {k: v for k, v in asdict(self).items() if v is not None}
        headers["timestamp"] = self.timestamp.isoformat()
        return headers

    @classmethod
    def from_headers(cls, headers: Optional[Mapping[str, Any]]) -> "EventMetadata":
        """Create metadata from message headers, tolerating missing keys."""
        if not headers:
            return cls()
        data: Dict[str, Any] = {
            key: headers[key]
            for key in ("event_id", "version", "source", "correlation_id")
            if headers.get(key)
        }
        timestamp = headers.get("timestamp")
        if isinstance(timestamp, str):
            data["timestamp"] = datetime.fromisoformat(timestamp)
        return cls(**data)


class EventPayload(BaseModel):
    """Base payload: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DomainEvent(BaseModel):
    """
    Base class for all domain events.

    Subclasses set the ``event_type`` tag and narrow ``payload`` to their own
    payload model.
    """

    event_type: ClassVar[str]

    payload: EventPayload
    metadata: EventMetadata = Field(default_factory=EventMetadata)

    def to_message(self) -> Dict[str, Any]:
        """Wire body understood by pattern-based consumers."""
        return {
            "pattern": self.event_type,
            "data": self.payload.model_dump(mode="json", by_alias=True),
        }

    def to_json(self) -> str:
        """Convert event body to JSON string."""
        return json.dumps(self.to_message(), ensure_ascii=False)


E = TypeVar("E", bound=Type[DomainEvent])


class EventRegistry:
    """
    Maps ``event_type`` tags to event classes.

    Example:
        @event_registry.register
        class ClubRequestApprovedEvent(DomainEvent):
            event_type: ClassVar[str] = "ClubRequest.Approved"
            payload: ClubRequestApprovedPayload
    """

    def __init__(self):
        self._event_classes: Dict[str, Type[DomainEvent]] = {}

    def register(self, event_class: E) -> E:
        event_type = event_class.event_type
        existing = self._event_classes.get(event_type)
        if existing is not None and existing is not event_class:
            raise ValueError(f"Event type {event_type} already registered by {existing.__name__}")
        self._event_classes[event_type] = event_class
        return event_class

    def is_registered(self, event_type: str) -> bool:
        return event_type in self._event_classes

    def parse(self, body: Any, headers: Optional[Mapping[str, Any]] = None) -> DomainEvent:
        """
        Decode a queue message body into its event class.

        Args:
            body: Decoded JSON body (dict) or raw JSON string/bytes
            headers: Message headers holding the metadata

        Returns:
            DomainEvent: Instance of the registered class for the pattern

        Raises:
            MessagingError: If the body is not a pattern/data envelope or the
                pattern is unknown
            pydantic.ValidationError: If the payload does not match the event
        """
        if isinstance(body, (bytes, str)):
            try:
                body = json.loads(body)
            except ValueError as e:
                raise MessagingError("Message body is not valid JSON") from e

        if not isinstance(body, dict) or "pattern" not in body:
            raise MessagingError("Message body is not a pattern/data envelope")

        event_type = body["pattern"]
        event_class = self._event_classes.get(event_type)
        if event_class is None:
            raise MessagingError(f"Unknown event type {event_type}", event_type=str(event_type))

        return event_class(
            payload=body.get("data") or {},
            metadata=EventMetadata.from_headers(headers),
        )


event_registry = EventRegistry()
