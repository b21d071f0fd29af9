from datetime import timedelta

import pytest

from app.modules.membership.application.commands import (
    CreateTournamentCommand,
    RequestEnrollmentCommand,
    UpdateTournamentCommand,
)
from app.modules.membership.application.handlers.tournament_handlers import run_versioned
from app.modules.membership.application.queries import SearchClubsQuery
from app.modules.membership.domain.models import EnrollmentRequest, TournamentType, User
from app.modules.membership.infrastructure.database import SqlAlchemyUnitOfWork
from app.shared.core.exceptions import (
    ConflictError,
    InvalidOperationError,
    OptimisticLockError,
    TransactionError,
    UnsupportedOperationError,
)
from app.shared.utils.helpers import utc_now


def make_user(hasher, user_id: str, email: str) -> User:
    return User.create(
        id=user_id, first_name="Maria", last_name="Silva",
        email=email, password="Secret123", hashing_service=hasher,
    )


def tournament_command() -> CreateTournamentCommand:
    now = utc_now()
    return CreateTournamentCommand(
        name="Regional Open",
        description="Lincoln-Douglas regional qualifier",
        type=TournamentType.INDIVIDUAL,
        registration_start_date=now - timedelta(days=1),
        registration_end_date=now + timedelta(days=5),
        start_date=now + timedelta(days=10),
    )


class TestTransactionBoundary:
    async def test_commit_is_visible_to_next_transaction(self, sql_uow: SqlAlchemyUnitOfWork, hasher):
        async def write():
            await sql_uow.user_repository.save(make_user(hasher, "user-1", "maria@example.com"))

        async def read():
            return await sql_uow.user_repository.find_by_email("MARIA@example.com")

        await sql_uow.execute_in_transaction(write)

        assert (await sql_uow.execute_in_transaction(read)).id == "user-1"

    async def test_error_rolls_back_and_keeps_its_type(self, sql_uow: SqlAlchemyUnitOfWork, hasher):
        async def write():
            await sql_uow.user_repository.save(make_user(hasher, "user-1", "maria@example.com"))
            raise InvalidOperationError("stop")

        async def read():
            return await sql_uow.user_repository.find("user-1")

        with pytest.raises(InvalidOperationError):
            await sql_uow.execute_in_transaction(write)

        assert await sql_uow.execute_in_transaction(read) is None

    async def test_unique_email_violation_is_a_conflict(self, sql_uow: SqlAlchemyUnitOfWork, hasher):
        async def first():
            await sql_uow.user_repository.save(make_user(hasher, "user-1", "maria@example.com"))

        async def second():
            await sql_uow.user_repository.save(make_user(hasher, "user-2", "maria@example.com"))

        await sql_uow.execute_in_transaction(first)

        with pytest.raises(ConflictError):
            await sql_uow.execute_in_transaction(second)

    async def test_nested_transaction_is_refused(self, sql_uow: SqlAlchemyUnitOfWork):
        async def inner():
            return None

        async def outer():
            await sql_uow.execute_in_transaction(inner)

        with pytest.raises(TransactionError):
            await sql_uow.execute_in_transaction(outer)

    async def test_repositories_need_a_transaction(self, sql_uow: SqlAlchemyUnitOfWork):
        with pytest.raises(TransactionError):
            await sql_uow.user_repository.find("user-1")

    async def test_manual_transaction_control_is_unsupported(self, sql_uow: SqlAlchemyUnitOfWork):
        with pytest.raises(UnsupportedOperationError):
            await sql_uow.begin_transaction()
        with pytest.raises(UnsupportedOperationError):
            await sql_uow.commit()
        with pytest.raises(UnsupportedOperationError):
            await sql_uow.rollback()


class TestTournamentVersioning:
    async def test_version_increases_on_update(self, sql_container):
        created = await sql_container.create_tournament.handle(tournament_command())

        updated = await sql_container.update_tournament.handle(
            UpdateTournamentCommand(tournament_id=created.id, name="State Championship")
        )

        assert updated.version == created.version + 1

    async def test_stale_copy_cannot_be_saved(self, sql_container, sql_uow: SqlAlchemyUnitOfWork):
        created = await sql_container.create_tournament.handle(tournament_command())

        async def load():
            return await sql_uow.tournament_repository.find(created.id)

        stale = await sql_uow.execute_in_transaction(load)
        await sql_container.update_tournament.handle(
            UpdateTournamentCommand(tournament_id=created.id, name="State Championship")
        )

        async def save_stale():
            stale.update(name="Lost Update")
            await sql_uow.tournament_repository.save(stale)

        with pytest.raises(OptimisticLockError):
            await sql_uow.execute_in_transaction(save_stale)

        stale = await sql_uow.execute_in_transaction(load)
        stale.version -= 1
        with pytest.raises(ConflictError):
            await run_versioned(sql_uow, save_stale)

        current = await sql_uow.execute_in_transaction(load)
        assert current.name == "State Championship"


class TestEnrollmentConstraints:
    async def test_one_pending_request_per_dependant_and_club(self, sql_scenario, sql_uow):
        owner = await sql_scenario.register_user(email="owner@example.com")
        await sql_scenario.affiliate(owner.id)
        club = await sql_scenario.open_club(owner.id)
        parent = await sql_scenario.register_user(email="parent@example.com")
        family = await sql_scenario.affiliate(parent.id)
        dependant = await sql_scenario.add_dependant(parent.id)

        async def duplicate_pending():
            for enrollment_id in ("e-1", "e-2"):
                await sql_uow.enrollment_request_repository.save(
                    EnrollmentRequest.create(
                        id=enrollment_id, family_id=family.id, dependant_id=dependant.id, club_id=club.id
                    )
                )

        with pytest.raises(ConflictError):
            await sql_uow.execute_in_transaction(duplicate_pending)

        enrollment = await sql_scenario.container.request_enrollment.handle(
            RequestEnrollmentCommand(logged_in_user_id=parent.id, dependant_id=dependant.id, club_id=club.id)
        )
        assert enrollment.family_id == family.id


class TestClubSearch:
    async def test_search_is_case_insensitive_and_paged(self, sql_scenario, sql_container):
        for index, name in enumerate(["Clube Alfa", "Clube Beta", "Clube Gama"]):
            user = await sql_scenario.register_user(email=f"owner{index}@example.com")
            await sql_scenario.affiliate(user.id)
            await sql_scenario.open_club(user.id, club_name=name)

        first_page = await sql_container.search_clubs.handle(SearchClubsQuery(city="CAMPINAS", limit=2))
        by_name = await sql_container.search_clubs.handle(SearchClubsQuery(name="gama"))

        assert first_page.total == 3
        assert [c.name for c in first_page.items] == ["Clube Alfa", "Clube Beta"]
        assert [c.name for c in by_name.items] == ["Clube Gama"]
        assert by_name.items[0].corum == 0
