# 📄 File: app/modules/membership/application/handlers/club_request_handlers.py
# 🧭 Purpose (Layman Explanation):
# The "action processors" for opening a club: they store a holder's request, record the
# admin's decision, tell the background workers about it, and finally create the club
# and make the holder its owner.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers for the ClubRequest lifecycle. Every state change runs inside
# one unit-of-work transaction; approval and rejection events are published only after
# the commit (persist-then-publish). CreateClubHandler is idempotent towards redelivery:
# a second run for an already processed request raises RedundantOperationError.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (aggregates, unit of work, events)
# - app.shared.events.publisher (EventPublisher port)
# - app.shared.core.security (TokenService)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1 (club request and admin endpoints)
# - app.modules.membership.application.listeners.club_listeners (CreateClubHandler)
# - app.modules.membership.container (handler wiring)

__all__ = [
    "CreateClubRequestHandler",
    "ApproveClubRequestHandler",
    "RejectClubRequestHandler",
    "CreateClubHandler",
    "CreateClubResult",
]

import logging

from pydantic import BaseModel

from app.shared.core.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InvalidOperationError,
    RedundantOperationError,
)
from app.shared.core.security import TokenPair, TokenService
from app.shared.events.publisher import EventPublisher
from app.shared.utils.helpers import IdGenerator

from ...domain.events import (
    ClubRequestApprovedEvent,
    ClubRequestApprovedPayload,
    ClubRequestRejectedEvent,
    ClubRequestRejectedPayload,
)
from ...domain.models import Address, Club, ClubRequest, UserRole
from ...domain.services import UnitOfWork
from ..commands import (
    ApproveClubRequestCommand,
    CreateClubCommand,
    CreateClubRequestCommand,
    RejectClubRequestCommand,
)

logger = logging.getLogger(__name__)

ONE_CLUB_PER_USER = "User can only own one club."


class CreateClubResult(BaseModel):
    club: Club
    tokens: TokenPair


class CreateClubRequestHandler:
    """
    Stores a new PENDING club request.

    Refused when the requester already owns a club or already has a request
    waiting for a decision.
    """

    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator):
        self._uow = uow
        self._id_generator = id_generator

    async def handle(self, command: CreateClubRequestCommand) -> ClubRequest:
        async def work() -> ClubRequest:
            user = await self._uow.user_repository.find(command.requester_id)
            if user is None:
                raise EntityNotFoundError("User", command.requester_id)

            if await self._uow.club_repository.find_by_principal_id(user.id) is not None:
                raise InvalidOperationError(ONE_CLUB_PER_USER)

            previous = await self._uow.club_request_repository.find_by_requester_id(user.id)
            if any(r.is_pending() for r in previous):
                raise ConflictError(
                    "User already has a pending club request.",
                    resource_type="ClubRequest",
                    conflict_field="requester_id",
                    existing_value=user.id,
                )

            request = ClubRequest.create(
                id=self._id_generator.generate(),
                club_name=command.club_name,
                requester_id=user.id,
                address=Address.create(**command.address.model_dump()),
                max_members=command.max_members,
            )
            return await self._uow.club_request_repository.save(request)

        request = await self._uow.execute_in_transaction(work)
        logger.info(f"Club request {request.id} created by {request.requester_id}")
        return request


class ApproveClubRequestHandler:
    """
    Approves a PENDING club request and announces it on the club request queue.

    The event is published after the commit, so a consumer never sees an
    approval the store of record does not hold yet.
    """

    def __init__(self, uow: UnitOfWork, publisher: EventPublisher, queue_name: str):
        self._uow = uow
        self._publisher = publisher
        self._queue_name = queue_name

    async def handle(self, command: ApproveClubRequestCommand) -> ClubRequest:
        async def work() -> ClubRequest:
            request = await self._uow.club_request_repository.find(command.club_request_id)
            if request is None:
                raise EntityNotFoundError("ClubRequest", command.club_request_id)
            request.approve()
            return await self._uow.club_request_repository.save(request)

        request = await self._uow.execute_in_transaction(work)
        logger.info(f"Club request {request.id} approved")

        event = ClubRequestApprovedEvent(
            payload=ClubRequestApprovedPayload(request_id=request.id, requester_id=request.requester_id)
        )
        await self._publisher.publish(event, self._queue_name)
        return request


class RejectClubRequestHandler:
    def __init__(self, uow: UnitOfWork, publisher: EventPublisher, queue_name: str):
        self._uow = uow
        self._publisher = publisher
        self._queue_name = queue_name

    async def handle(self, command: RejectClubRequestCommand) -> ClubRequest:
        async def work() -> ClubRequest:
            request = await self._uow.club_request_repository.find(command.club_request_id)
            if request is None:
                raise EntityNotFoundError("ClubRequest", command.club_request_id)
            request.reject(command.reason)
            return await self._uow.club_request_repository.save(request)

        request = await self._uow.execute_in_transaction(work)
        logger.info(f"Club request {request.id} rejected")

        event = ClubRequestRejectedEvent(
            payload=ClubRequestRejectedPayload(
                request_id=request.id,
                requester_id=request.requester_id,
                rejection_reason=request.rejection_reason,
            )
        )
        await self._publisher.publish(event, self._queue_name)
        return request


class CreateClubHandler:
    """
    Turns a club request into a club owned by the requester.

    Steps, all in one transaction:
    1. Load the request
    2. Refuse if the requester already owns a club (redelivery)
    3. Load the requester and their family; the family must be affiliated
    4. Grant the club owner role
    5. Create the club from the request

    A fresh token pair carrying the new role is signed after the commit.
    """

    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator, token_service: TokenService):
        self._uow = uow
        self._id_generator = id_generator
        self._token_service = token_service

    async def handle(self, command: CreateClubCommand) -> CreateClubResult:
        async def work():
            request = await self._uow.club_request_repository.find(command.request_id)
            if request is None:
                raise EntityNotFoundError("ClubRequest", command.request_id)

            existing = await self._uow.club_repository.find_by_principal_id(request.requester_id)
            if existing is not None:
                raise RedundantOperationError(
                    ONE_CLUB_PER_USER,
                    details={"club_request_id": request.id, "club_id": existing.id},
                )

            user = await self._uow.user_repository.find(request.requester_id)
            if user is None:
                raise EntityNotFoundError("User", request.requester_id)

            family = await self._uow.family_repository.find_by_holder_id(user.id)
            if family is None:
                raise EntityNotFoundError("Family", message=f"Family of user {user.id} not found")
            if not family.is_affiliated():
                raise InvalidOperationError(
                    "Family must be affiliated to own a club.",
                    details={"family_status": family.status.value},
                )

            user.assign_roles([UserRole.DONO_DE_CLUBE])
            await self._uow.user_repository.save(user)

            club = Club.from_request(self._id_generator.generate(), request)
            await self._uow.club_repository.save(club)
            return club, user, family

        club, user, family = await self._uow.execute_in_transaction(work)
        logger.info(f"Club {club.id} created for principal {club.principal_id}")

        tokens = self._token_service.issue_pair(user.token_payload(family.id))
        return CreateClubResult(club=club, tokens=tokens)
