# 📄 File: app/modules/membership/domain/events/tournament_events.py
# 🧭 Purpose (Layman Explanation):
# The messages exchanged when a dependant is registered in a tournament and when
# the external tournament system confirms it received the registration.
# 🧪 Purpose (Technical Summary):
# ``registration.confirmed`` is internal (triggers the sync record);
# ``Registration.Confirmed`` is the integration event sent to the tournament system,
# which echoes it back on the registration queue once consumed.
# 🔗 Dependencies:
# app.shared.events.base
# 🔄 Connected Modules / Calls From:
# tournament handlers (publish), tournament events listener (consume)

from typing import ClassVar, List

from app.shared.events.base import DomainEvent, EventPayload, event_registry


class RegistrationConfirmedPayload(EventPayload):
    registration_id: str
    tournament_id: str
    competitor_id: str
    is_duo: bool = False


class Participant(EventPayload):
    competitor_id: str


class RegistrationIntegrationPayload(EventPayload):
    registration_id: str
    tournament_id: str
    is_duo: bool = False
    participants: List[Participant]


@event_registry.register
class RegistrationConfirmedEvent(DomainEvent):
    event_type: ClassVar[str] = "registration.confirmed"

    payload: RegistrationConfirmedPayload


@event_registry.register
class RegistrationIntegrationEvent(DomainEvent):
    event_type: ClassVar[str] = "Registration.Confirmed"

    payload: RegistrationIntegrationPayload
