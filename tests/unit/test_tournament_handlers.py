from datetime import timedelta

import pytest

from app.modules.membership.application.commands import (
    CancelRegistrationCommand,
    CreateRegistrationSyncCommand,
    CreateTournamentCommand,
    CreateTrainingCommand,
    DeleteTournamentCommand,
    DeleteTrainingCommand,
    RequestIndividualRegistrationCommand,
    SyncRegistrationCommand,
    UpdateTournamentCommand,
    UpdateTrainingCommand,
)
from app.modules.membership.application.handlers.tournament_handlers import run_versioned
from app.modules.membership.application.queries import ListTournamentsQuery, ListTrainingsQuery
from app.modules.membership.domain.events import RegistrationConfirmedEvent, RegistrationIntegrationEvent
from app.modules.membership.domain.models import RegistrationStatus, SyncStatus, TournamentType
from app.shared.core.exceptions import (
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
    ForbiddenError,
    InvalidOperationError,
    MessagingError,
    OptimisticLockError,
    RedundantOperationError,
)
from app.shared.utils.helpers import utc_now

REGISTRATION_QUEUE = "TournamentRegistration"
INTEGRATION_QUEUE = "TournamentIntegration"


def tournament_command(**overrides) -> CreateTournamentCommand:
    now = utc_now()
    fields = dict(
        name="Regional Open",
        description="Lincoln-Douglas regional qualifier",
        type=TournamentType.INDIVIDUAL,
        registration_start_date=now - timedelta(days=1),
        registration_end_date=now + timedelta(days=5),
        start_date=now + timedelta(days=10),
    )
    fields.update(overrides)
    return CreateTournamentCommand(**fields)


async def registered_competitor(scenario):
    """A tournament plus an affiliated holder with one dependant."""
    tournament = await scenario.container.create_tournament.handle(tournament_command())
    holder = await scenario.register_user()
    await scenario.affiliate(holder.id)
    dependant = await scenario.add_dependant(holder.id)
    return tournament, holder, dependant


async def register(container, holder_id, tournament_id, competitor_id):
    return await container.request_individual_registration.handle(
        RequestIndividualRegistrationCommand(
            logged_in_user_id=holder_id, tournament_id=tournament_id, competitor_id=competitor_id
        )
    )


class TestTournamentAdministration:
    async def test_create_and_list(self, container):
        created = await container.create_tournament.handle(tournament_command())

        listed = await container.list_tournaments.handle(ListTournamentsQuery())

        assert [t.id for t in listed] == [created.id]
        assert created.version == 1

    async def test_invalid_dates_are_refused(self, container):
        now = utc_now()
        with pytest.raises(InvalidOperationError):
            await container.create_tournament.handle(
                tournament_command(registration_end_date=now - timedelta(days=2))
            )

    async def test_update_changes_fields(self, container):
        created = await container.create_tournament.handle(tournament_command())

        updated = await container.update_tournament.handle(
            UpdateTournamentCommand(tournament_id=created.id, name="State Championship")
        )

        assert updated.name == "State Championship"
        assert updated.description == created.description

    async def test_delete_hides_tournament_from_default_listing(self, container):
        created = await container.create_tournament.handle(tournament_command())

        await container.delete_tournament.handle(DeleteTournamentCommand(tournament_id=created.id))

        assert await container.list_tournaments.handle(ListTournamentsQuery()) == []
        everything = await container.list_tournaments.handle(ListTournamentsQuery(include_deleted=True))
        assert everything[0].deleted_at is not None

    async def test_unknown_tournament(self, container):
        with pytest.raises(EntityNotFoundError):
            await container.delete_tournament.handle(DeleteTournamentCommand(tournament_id="missing"))

    async def test_lost_race_is_reported_as_conflict(self, container, uow):
        created = await container.create_tournament.handle(tournament_command())

        async def work():
            stale = await uow.tournament_repository.find(created.id)
            stale.version = 99
            await uow.tournament_repository.save(stale)

        with pytest.raises(ConflictError) as exc_info:
            await run_versioned(uow, work)
        assert isinstance(exc_info.value.__cause__, OptimisticLockError)


class TestRegistration:
    async def test_registration_is_confirmed_and_announced(self, scenario, container, publisher):
        tournament, holder, dependant = await registered_competitor(scenario)

        registration = await register(container, holder.id, tournament.id, dependant.id)

        assert registration.status == RegistrationStatus.CONFIRMED
        events = publisher.events_for(REGISTRATION_QUEUE)
        assert len(events) == 1
        assert isinstance(events[0], RegistrationConfirmedEvent)
        assert events[0].payload.competitor_id == dependant.id

    async def test_registered_tournament_cannot_be_edited(self, scenario, container):
        tournament, holder, dependant = await registered_competitor(scenario)
        await register(container, holder.id, tournament.id, dependant.id)

        with pytest.raises(InvalidOperationError):
            await container.update_tournament.handle(
                UpdateTournamentCommand(tournament_id=tournament.id, name="Renamed Open")
            )
        with pytest.raises(InvalidOperationError):
            await container.delete_tournament.handle(DeleteTournamentCommand(tournament_id=tournament.id))

    async def test_only_own_dependants_can_be_registered(self, scenario, container):
        tournament, _, dependant = await registered_competitor(scenario)
        stranger = await scenario.register_user(email="stranger@example.com")

        with pytest.raises(ForbiddenError):
            await register(container, stranger.id, tournament.id, dependant.id)

    async def test_duo_tournament_refuses_individual_registration(self, scenario, container, publisher):
        holder = await scenario.register_user()
        await scenario.affiliate(holder.id)
        dependant = await scenario.add_dependant(holder.id)
        duo = await container.create_tournament.handle(tournament_command(type=TournamentType.DUO))

        with pytest.raises(InvalidOperationError):
            await register(container, holder.id, duo.id, dependant.id)
        assert publisher.published == []

    async def test_cancel_registration(self, scenario, container):
        tournament, holder, dependant = await registered_competitor(scenario)
        registration = await register(container, holder.id, tournament.id, dependant.id)

        cancelled = await container.cancel_registration.handle(
            CancelRegistrationCommand(logged_in_user_id=holder.id, registration_id=registration.id)
        )

        assert cancelled.status == RegistrationStatus.CANCELLED
        again = await register(container, holder.id, tournament.id, dependant.id)
        assert again.id != registration.id


class TestRegistrationSync:
    async def test_sync_record_is_created_and_forwarded(self, scenario, container, publisher):
        tournament, holder, dependant = await registered_competitor(scenario)
        registration = await register(container, holder.id, tournament.id, dependant.id)

        sync = await container.create_registration_sync.handle(
            CreateRegistrationSyncCommand(registration_id=registration.id)
        )

        assert sync.status == SyncStatus.PENDING
        forwarded = publisher.events_for(INTEGRATION_QUEUE)
        assert isinstance(forwarded[0], RegistrationIntegrationEvent)
        assert [p.competitor_id for p in forwarded[0].payload.participants] == [dependant.id]

    async def test_publish_failure_schedules_retry(self, scenario, container, publisher):
        tournament, holder, dependant = await registered_competitor(scenario)
        registration = await register(container, holder.id, tournament.id, dependant.id)
        publisher.fail_with = MessagingError("broker down")
        started = utc_now()

        with pytest.raises(MessagingError):
            await container.create_registration_sync.handle(
                CreateRegistrationSyncCommand(registration_id=registration.id)
            )

        stored = (await container.list_tournaments.handle(ListTournamentsQuery()))[0]
        sync = stored.find_registration(registration.id).sync
        assert sync.status == SyncStatus.FAILED
        assert sync.attempts == 1
        assert sync.next_attempt_at >= started + timedelta(minutes=10)

    async def test_synced_registration_is_not_forwarded_twice(self, scenario, container, publisher):
        tournament, holder, dependant = await registered_competitor(scenario)
        registration = await register(container, holder.id, tournament.id, dependant.id)

        synced = await container.sync_registration.handle(SyncRegistrationCommand(registration_id=registration.id))
        assert synced.status == SyncStatus.SYNCED

        with pytest.raises(RedundantOperationError):
            await container.create_registration_sync.handle(
                CreateRegistrationSyncCommand(registration_id=registration.id)
            )
        assert publisher.events_for(INTEGRATION_QUEUE) == []

    async def test_unknown_registration(self, container):
        with pytest.raises(EntityNotFoundError):
            await container.sync_registration.handle(SyncRegistrationCommand(registration_id="missing"))


class TestTrainings:
    async def test_training_lifecycle(self, container):
        created = await container.create_training.handle(
            CreateTrainingCommand(
                title="Cross-examination",
                description="How to prepare good questions",
                youtube_url="https://www.youtube.com/watch?v=abc123",
            )
        )

        updated = await container.update_training.handle(
            UpdateTrainingCommand(
                training_id=created.id,
                title="Cross-examination 2",
                description="Answering hard questions",
                youtube_url="https://youtu.be/abc123",
            )
        )
        assert updated.title == "Cross-examination 2"

        await container.delete_training.handle(DeleteTrainingCommand(training_id=created.id))
        assert await container.list_trainings.handle(ListTrainingsQuery()) == []

    async def test_non_youtube_video_is_refused(self, container):
        with pytest.raises(DomainValidationError):
            await container.create_training.handle(
                CreateTrainingCommand(
                    title="Rebuttals",
                    description="Structuring a rebuttal",
                    youtube_url="https://vimeo.com/1",
                )
            )

    async def test_deleting_missing_training(self, container):
        with pytest.raises(EntityNotFoundError):
            await container.delete_training.handle(DeleteTrainingCommand(training_id="missing"))
