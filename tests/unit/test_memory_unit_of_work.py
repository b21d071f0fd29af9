from datetime import timedelta

import pytest

from app.modules.membership.domain.models import (
    Address,
    Club,
    ClubMembership,
    EnrollmentRequest,
    Tournament,
    TournamentType,
    User,
)
from app.modules.membership.infrastructure.memory import InMemoryUnitOfWork
from app.shared.core.exceptions import (
    ConflictError,
    InvalidOperationError,
    OptimisticLockError,
    TransactionError,
)
from app.shared.utils.helpers import utc_now


def make_user(hasher, user_id="user-1", email="maria@example.com") -> User:
    return User.create(
        id=user_id, first_name="Maria", last_name="Silva",
        email=email, password="Secret123", hashing_service=hasher,
    )


def make_tournament() -> Tournament:
    now = utc_now()
    return Tournament.create(
        id="t-1",
        name="Regional Open",
        description="Lincoln-Douglas regional qualifier",
        type=TournamentType.INDIVIDUAL,
        registration_start_date=now - timedelta(days=1),
        registration_end_date=now + timedelta(days=5),
        start_date=now + timedelta(days=10),
    )


async def test_work_result_is_committed(uow: InMemoryUnitOfWork, hasher):
    async def work():
        return await uow.user_repository.save(make_user(hasher))

    saved = await uow.execute_in_transaction(work)

    async def read():
        return await uow.user_repository.find(saved.id)

    assert (await uow.execute_in_transaction(read)).email == "maria@example.com"


async def test_failed_work_is_rolled_back_and_error_kept(uow: InMemoryUnitOfWork, hasher):
    async def work():
        await uow.user_repository.save(make_user(hasher))
        raise InvalidOperationError("boom")

    with pytest.raises(InvalidOperationError):
        await uow.execute_in_transaction(work)

    async def read():
        return await uow.user_repository.find("user-1")

    assert await uow.execute_in_transaction(read) is None


async def test_nested_transaction_is_refused(uow: InMemoryUnitOfWork):
    async def inner():
        return None

    async def outer():
        await uow.execute_in_transaction(inner)

    with pytest.raises(TransactionError):
        await uow.execute_in_transaction(outer)


async def test_reads_return_copies(uow: InMemoryUnitOfWork, hasher):
    async def work():
        await uow.user_repository.save(make_user(hasher))
        user = await uow.user_repository.find("user-1")
        user.first_name = "Changed"
        return await uow.user_repository.find("user-1")

    assert (await uow.execute_in_transaction(work)).first_name == "Maria"


async def test_duplicate_email_conflicts(uow: InMemoryUnitOfWork, hasher):
    async def work():
        await uow.user_repository.save(make_user(hasher))
        await uow.user_repository.save(make_user(hasher, user_id="user-2", email="MARIA@example.com"))

    with pytest.raises(ConflictError):
        await uow.execute_in_transaction(work)


async def test_second_pending_enrollment_for_same_pair_conflicts(uow: InMemoryUnitOfWork):
    async def work():
        await uow.enrollment_request_repository.save(
            EnrollmentRequest.create(id="e-1", family_id="f-1", dependant_id="d-1", club_id="c-1")
        )
        await uow.enrollment_request_repository.save(
            EnrollmentRequest.create(id="e-2", family_id="f-1", dependant_id="d-1", club_id="c-1")
        )

    with pytest.raises(ConflictError):
        await uow.execute_in_transaction(work)


async def test_resolved_enrollment_allows_new_request(uow: InMemoryUnitOfWork):
    async def work():
        first = EnrollmentRequest.create(id="e-1", family_id="f-1", dependant_id="d-1", club_id="c-1")
        first.reject("Club is not accepting members")
        await uow.enrollment_request_repository.save(first)
        await uow.enrollment_request_repository.save(
            EnrollmentRequest.create(id="e-2", family_id="f-1", dependant_id="d-1", club_id="c-1")
        )
        return await uow.enrollment_request_repository.find_by_dependant_and_club("d-1", "c-1")

    assert len(await uow.execute_in_transaction(work)) == 2


async def test_stale_tournament_save_raises_optimistic_lock(uow: InMemoryUnitOfWork):
    async def seed():
        await uow.tournament_repository.save(make_tournament())

    await uow.execute_in_transaction(seed)

    async def race():
        first = await uow.tournament_repository.find("t-1")
        second = await uow.tournament_repository.find("t-1")
        first.update(name="First Edit")
        await uow.tournament_repository.save(first)
        second.update(name="Second Edit")
        await uow.tournament_repository.save(second)

    with pytest.raises(OptimisticLockError):
        await uow.execute_in_transaction(race)

    async def read():
        return await uow.tournament_repository.find("t-1")

    stored = await uow.execute_in_transaction(read)
    assert stored.name == "Regional Open"
    assert stored.version == 1


async def test_club_corum_counts_active_memberships(uow: InMemoryUnitOfWork):
    address = Address.create(street="Rua das Flores", city="Campinas", state="SP", zip_code="13010-100")

    async def work():
        await uow.club_repository.save(Club.create(id="c-1", name="Clube X", principal_id="u-1", address=address))
        await uow.club_membership_repository.save(
            ClubMembership.create(id="m-1", club_id="c-1", member_id="d-1", family_id="f-1")
        )
        revoked = ClubMembership.create(id="m-2", club_id="c-1", member_id="d-2", family_id="f-1")
        revoked.revoke()
        await uow.club_membership_repository.save(revoked)
        return await uow.club_repository.find("c-1")

    assert (await uow.execute_in_transaction(work)).corum == 1


async def test_manual_commit_and_rollback(uow: InMemoryUnitOfWork, hasher):
    await uow.begin_transaction()
    await uow.user_repository.save(make_user(hasher))
    await uow.rollback()

    await uow.begin_transaction()
    assert await uow.user_repository.find("user-1") is None
    await uow.user_repository.save(make_user(hasher))
    await uow.commit()

    assert await uow.user_repository.find("user-1") is not None

    with pytest.raises(TransactionError):
        await uow.commit()
