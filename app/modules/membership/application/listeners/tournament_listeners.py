# 📄 File: app/modules/membership/application/listeners/tournament_listeners.py
# 🧭 Purpose (Layman Explanation):
# The background worker that keeps the external tournament system up to date: it sends
# every confirmed sign-up over and notes when the other side says it got it.
#
# 🧪 Purpose (Technical Summary):
# Queue listener for the tournament registration queue. ``registration.confirmed``
# creates the sync record and forwards the integration event; ``Registration.Confirmed``
# (echoed by the downstream system) marks the sync as done.
#
# 🔗 Dependencies:
# - app.shared.events.consumer (EventConsumer)
# - app.modules.membership.domain.events
# - app.modules.membership.application.handlers
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.container (consumer wiring)

import logging

from app.shared.events.consumer import EventConsumer

from ...domain.events import RegistrationConfirmedEvent, RegistrationIntegrationEvent
from ..commands import CreateRegistrationSyncCommand, SyncRegistrationCommand
from ..handlers import CreateRegistrationSyncHandler, SyncRegistrationHandler

logger = logging.getLogger(__name__)


class TournamentRegistrationListener:
    def __init__(
        self,
        create_sync_handler: CreateRegistrationSyncHandler,
        sync_handler: SyncRegistrationHandler,
    ):
        self._create_sync = create_sync_handler
        self._sync = sync_handler

    def register(self, consumer: EventConsumer) -> EventConsumer:
        consumer.register(RegistrationConfirmedEvent.event_type, self.on_registration_confirmed)
        consumer.register(RegistrationIntegrationEvent.event_type, self.on_registration_synced)
        return consumer

    async def on_registration_confirmed(self, event: RegistrationConfirmedEvent) -> None:
        await self._create_sync.handle(
            CreateRegistrationSyncCommand(registration_id=event.payload.registration_id)
        )

    async def on_registration_synced(self, event: RegistrationIntegrationEvent) -> None:
        await self._sync.handle(SyncRegistrationCommand(registration_id=event.payload.registration_id))
