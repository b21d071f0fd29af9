# 📄 File: app/modules/membership/application/handlers/tournament_handlers.py
# 🧭 Purpose (Layman Explanation):
# The "action processors" for tournaments: admins create and edit them, families sign a
# dependant up or drop out, and background workers keep the external tournament system
# informed about every confirmed sign-up.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers for the Tournament aggregate. Concurrent edits are detected by
# the repository's version check; OptimisticLockError is surfaced to HTTP callers as a
# ConflictError and never retried server-side. Registration events are published after
# the commit; the sync handlers are idempotent towards queue redelivery.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (Tournament, events, unit of work)
# - app.shared.events.publisher (EventPublisher port)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.tournaments
# - app.modules.membership.application.listeners.tournament_listeners
# - app.modules.membership.container (handler wiring)

__all__ = [
    "CreateTournamentHandler",
    "UpdateTournamentHandler",
    "DeleteTournamentHandler",
    "RequestIndividualRegistrationHandler",
    "CancelRegistrationHandler",
    "CreateRegistrationSyncHandler",
    "SyncRegistrationHandler",
]

import logging
from typing import Awaitable, Callable, Tuple, TypeVar

from app.shared.core.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForbiddenError,
    MessagingError,
    OptimisticLockError,
    RedundantOperationError,
)
from app.shared.events.publisher import EventPublisher
from app.shared.utils.helpers import IdGenerator

from ...domain.events import (
    Participant,
    RegistrationConfirmedEvent,
    RegistrationConfirmedPayload,
    RegistrationIntegrationEvent,
    RegistrationIntegrationPayload,
)
from ...domain.models import Registration, RegistrationSync, SyncStatus, Tournament, TournamentType
from ...domain.services import UnitOfWork
from ..commands import (
    CancelRegistrationCommand,
    CreateRegistrationSyncCommand,
    CreateTournamentCommand,
    DeleteTournamentCommand,
    RequestIndividualRegistrationCommand,
    SyncRegistrationCommand,
    UpdateTournamentCommand,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_versioned(uow: UnitOfWork, work: Callable[[], Awaitable[T]]) -> T:
    """Run ``work`` and report a lost optimistic-lock race as a conflict."""
    try:
        return await uow.execute_in_transaction(work)
    except OptimisticLockError as e:
        logger.warning(f"Concurrent tournament update: {e.message}")
        raise ConflictError(
            "The tournament was modified by another request. Refresh and retry.",
            resource_type="Tournament",
            details=e.details,
        ) from e


async def load_tournament(uow: UnitOfWork, tournament_id: str) -> Tournament:
    tournament = await uow.tournament_repository.find(tournament_id)
    if tournament is None:
        raise EntityNotFoundError("Tournament", tournament_id)
    return tournament


async def load_registration(uow: UnitOfWork, registration_id: str) -> Tuple[Tournament, Registration]:
    tournament = await uow.tournament_repository.find_by_registration_id(registration_id)
    registration = tournament.find_registration(registration_id) if tournament else None
    if tournament is None or registration is None:
        raise EntityNotFoundError("Registration", registration_id)
    return tournament, registration


async def ensure_competitor_of_caller(uow: UnitOfWork, user_id: str, competitor_id: str) -> None:
    family = await uow.family_repository.find_by_holder_id(user_id)
    if family is None:
        raise EntityNotFoundError("Family", message="Family of the logged in user not found")
    if not family.has_dependant(competitor_id):
        raise ForbiddenError(
            "Competitor is not a dependant of your family.",
            resource_type="Dependant",
            resource_id=competitor_id,
            user_id=user_id,
        )


# =============================================================================
# ADMINISTRATION
# =============================================================================

class CreateTournamentHandler:
    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator):
        self._uow = uow
        self._id_generator = id_generator

    async def handle(self, command: CreateTournamentCommand) -> Tournament:
        async def work() -> Tournament:
            tournament = Tournament.create(
                id=self._id_generator.generate(),
                name=command.name,
                description=command.description,
                type=command.type,
                registration_start_date=command.registration_start_date,
                registration_end_date=command.registration_end_date,
                start_date=command.start_date,
            )
            return await self._uow.tournament_repository.save(tournament)

        tournament = await self._uow.execute_in_transaction(work)
        logger.info(f"Tournament {tournament.id} created")
        return tournament


class UpdateTournamentHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: UpdateTournamentCommand) -> Tournament:
        async def work() -> Tournament:
            tournament = await load_tournament(self._uow, command.tournament_id)
            tournament.update(
                **command.model_dump(exclude={"tournament_id"}, exclude_none=True)
            )
            return await self._uow.tournament_repository.save(tournament)

        tournament = await run_versioned(self._uow, work)
        logger.info(f"Tournament {tournament.id} updated (version {tournament.version})")
        return tournament


class DeleteTournamentHandler:
    """Soft-deletes a tournament that has no registrations."""

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: DeleteTournamentCommand) -> Tournament:
        async def work() -> Tournament:
            tournament = await load_tournament(self._uow, command.tournament_id)
            tournament.soft_delete()
            return await self._uow.tournament_repository.save(tournament)

        tournament = await run_versioned(self._uow, work)
        logger.info(f"Tournament {tournament.id} deleted")
        return tournament


# =============================================================================
# REGISTRATIONS
# =============================================================================

class RequestIndividualRegistrationHandler:
    """
    Registers a dependant of the caller's family in an INDIVIDUAL tournament
    and announces the confirmed registration after the commit.
    """

    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator, publisher: EventPublisher, queue_name: str):
        self._uow = uow
        self._id_generator = id_generator
        self._publisher = publisher
        self._queue_name = queue_name

    async def handle(self, command: RequestIndividualRegistrationCommand) -> Registration:
        async def work() -> Registration:
            tournament = await load_tournament(self._uow, command.tournament_id)
            await ensure_competitor_of_caller(self._uow, command.logged_in_user_id, command.competitor_id)
            registration = tournament.request_individual_registration(
                registration_id=self._id_generator.generate(),
                competitor_id=command.competitor_id,
            )
            await self._uow.tournament_repository.save(tournament)
            return registration

        registration = await run_versioned(self._uow, work)
        logger.info(f"Registration {registration.id} confirmed for tournament {registration.tournament_id}")

        event = RegistrationConfirmedEvent(
            payload=RegistrationConfirmedPayload(
                registration_id=registration.id,
                tournament_id=registration.tournament_id,
                competitor_id=registration.competitor_id,
                is_duo=registration.type == TournamentType.DUO,
            )
        )
        await self._publisher.publish(event, self._queue_name)
        return registration


class CancelRegistrationHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: CancelRegistrationCommand) -> Registration:
        async def work() -> Registration:
            tournament, registration = await load_registration(self._uow, command.registration_id)
            await ensure_competitor_of_caller(self._uow, command.logged_in_user_id, registration.competitor_id)
            cancelled = tournament.cancel_registration(registration.id)
            await self._uow.tournament_repository.save(tournament)
            return cancelled

        registration = await run_versioned(self._uow, work)
        logger.info(f"Registration {registration.id} cancelled")
        return registration


class CreateRegistrationSyncHandler:
    """
    Attaches a PENDING sync record to a confirmed registration and forwards
    the registration to the tournament integration queue.

    A failed publish is recorded on the sync (attempt count and next attempt
    time) before the error propagates.
    """

    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator, publisher: EventPublisher, queue_name: str):
        self._uow = uow
        self._id_generator = id_generator
        self._publisher = publisher
        self._queue_name = queue_name

    async def handle(self, command: CreateRegistrationSyncCommand) -> RegistrationSync:
        async def work() -> Tuple[Registration, RegistrationSync]:
            tournament, registration = await load_registration(self._uow, command.registration_id)
            if registration.sync is not None and registration.sync.status == SyncStatus.SYNCED:
                raise RedundantOperationError(
                    "Registration already synced.", details={"registration_id": registration.id}
                )
            sync = registration.attach_sync(self._id_generator.generate())
            await self._uow.tournament_repository.save(tournament)
            return registration, sync

        registration, sync = await self._uow.execute_in_transaction(work)

        event = RegistrationIntegrationEvent(
            payload=RegistrationIntegrationPayload(
                registration_id=registration.id,
                tournament_id=registration.tournament_id,
                is_duo=registration.type == TournamentType.DUO,
                participants=[Participant(competitor_id=registration.competitor_id)],
            )
        )
        try:
            await self._publisher.publish(event, self._queue_name)
        except MessagingError:
            await self._record_failure(registration.id)
            raise

        logger.info(f"Registration {registration.id} forwarded for sync {sync.id}")
        return sync

    async def _record_failure(self, registration_id: str) -> None:
        async def work() -> None:
            tournament, registration = await load_registration(self._uow, registration_id)
            registration.sync.mark_as_failed()
            await self._uow.tournament_repository.save(tournament)
            logger.warning(
                f"Sync of registration {registration_id} failed "
                f"(attempt {registration.sync.attempts}, next {registration.sync.next_attempt_at})"
            )

        await self._uow.execute_in_transaction(work)


class SyncRegistrationHandler:
    """Marks a registration as synced once the tournament system confirms it."""

    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator):
        self._uow = uow
        self._id_generator = id_generator

    async def handle(self, command: SyncRegistrationCommand) -> RegistrationSync:
        async def work() -> RegistrationSync:
            tournament, registration = await load_registration(self._uow, command.registration_id)
            sync = registration.attach_sync(self._id_generator.generate())
            sync.mark_as_synced()
            await self._uow.tournament_repository.save(tournament)
            return sync

        sync = await self._uow.execute_in_transaction(work)
        logger.info(f"Registration {command.registration_id} synced")
        return sync
