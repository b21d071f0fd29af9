from .club_events import (
    ClubRequestApprovedEvent,
    ClubRequestApprovedPayload,
    ClubRequestRejectedEvent,
    ClubRequestRejectedPayload,
)
from .tournament_events import (
    Participant,
    RegistrationConfirmedEvent,
    RegistrationConfirmedPayload,
    RegistrationIntegrationEvent,
    RegistrationIntegrationPayload,
)

__all__ = [
    "ClubRequestApprovedEvent",
    "ClubRequestApprovedPayload",
    "ClubRequestRejectedEvent",
    "ClubRequestRejectedPayload",
    "Participant",
    "RegistrationConfirmedEvent",
    "RegistrationConfirmedPayload",
    "RegistrationIntegrationEvent",
    "RegistrationIntegrationPayload",
]
