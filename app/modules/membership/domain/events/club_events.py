# 📄 File: app/modules/membership/domain/events/club_events.py
# 🧭 Purpose (Layman Explanation):
# The messages sent when an admin approves or rejects a request to open a club.
# 🧪 Purpose (Technical Summary):
# Typed domain events published on the club request queue after the request state
# is committed. Pattern names are shared with other consumers of the queue.
# 🔗 Dependencies:
# app.shared.events.base
# 🔄 Connected Modules / Calls From:
# approve/reject club request handlers (publish), club events listener (consume)

from typing import ClassVar

from app.shared.events.base import DomainEvent, EventPayload, event_registry


class ClubRequestApprovedPayload(EventPayload):
    request_id: str
    requester_id: str


class ClubRequestRejectedPayload(EventPayload):
    request_id: str
    requester_id: str
    rejection_reason: str


@event_registry.register
class ClubRequestApprovedEvent(DomainEvent):
    """Emitted once a club request is durably APPROVED; triggers club creation."""

    event_type: ClassVar[str] = "ClubRequest.Approved"

    payload: ClubRequestApprovedPayload


@event_registry.register
class ClubRequestRejectedEvent(DomainEvent):
    event_type: ClassVar[str] = "ClubRequest.Rejected"

    payload: ClubRequestRejectedPayload
