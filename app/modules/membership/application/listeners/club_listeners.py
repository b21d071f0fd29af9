# 📄 File: app/modules/membership/application/listeners/club_listeners.py
# 🧭 Purpose (Layman Explanation):
# The background worker that reacts when an admin decides on a club request: an approval
# turns into a real club, a rejection is simply noted.
#
# 🧪 Purpose (Technical Summary):
# Queue listener for the club request queue. Binds ``ClubRequest.Approved`` to the
# CreateClubHandler and ``ClubRequest.Rejected`` to a log-only handler. Exceptions are
# left to the EventConsumer, which maps them to ack/discard/dead-letter.
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

from ...domain.events import ClubRequestApprovedEvent, ClubRequestRejectedEvent
from ..commands import CreateClubCommand
from ..handlers import CreateClubHandler

logger = logging.getLogger(__name__)


class ClubRequestListener:
    def __init__(self, create_club_handler: CreateClubHandler):
        self._create_club = create_club_handler

    def register(self, consumer: EventConsumer) -> EventConsumer:
        consumer.register(ClubRequestApprovedEvent.event_type, self.on_club_request_approved)
        consumer.register(ClubRequestRejectedEvent.event_type, self.on_club_request_rejected)
        return consumer

    async def on_club_request_approved(self, event: ClubRequestApprovedEvent) -> None:
        logger.info(f"Creating club for approved request {event.payload.request_id}")
        result = await self._create_club.handle(CreateClubCommand(request_id=event.payload.request_id))
        logger.info(f"Club {result.club.id} ready for principal {result.club.principal_id}")

    async def on_club_request_rejected(self, event: ClubRequestRejectedEvent) -> None:
        logger.info(
            f"Club request {event.payload.request_id} of {event.payload.requester_id} "
            f"rejected: {event.payload.rejection_reason}"
        )
