# 📄 File: app/modules/membership/infrastructure/memory/unit_of_work.py
# 🧭 Purpose (Layman Explanation):
# The all-or-nothing helper for the in-memory database: it runs a use-case and keeps its
# changes only if nothing went wrong.
# 🧪 Purpose (Technical Summary):
# UnitOfWork implementation over InMemoryDatabase. Repositories are bound once per unit
# of work and resolve the transaction's working copy through the database's ContextVar.
# Supports the manual begin/commit/rollback surface for tests.
# 🔗 Dependencies:
# InMemoryDatabase, memory repositories, domain UnitOfWork contract
# 🔄 Connected Modules / Calls From:
# container (PERSISTENCE_BACKEND=memory), unit and API tests

from typing import Awaitable, Callable, Optional, TypeVar

from app.shared.utils.logging import get_logger

from ...domain.services import UnitOfWork
from .database import InMemoryDatabase
from .repositories import (
    InMemoryClubMembershipRepository,
    InMemoryClubRepository,
    InMemoryClubRequestRepository,
    InMemoryEnrollmentRequestRepository,
    InMemoryFamilyRepository,
    InMemoryTournamentRepository,
    InMemoryTrainingRepository,
    InMemoryTransactionRepository,
    InMemoryUserRepository,
)

logger = get_logger(__name__)

T = TypeVar("T")


class InMemoryUnitOfWork(UnitOfWork):
    """Unit of work over one InMemoryDatabase instance."""

    def __init__(self, database: Optional[InMemoryDatabase] = None):
        self.database = database or InMemoryDatabase()
        self._users = InMemoryUserRepository(self.database)
        self._families = InMemoryFamilyRepository(self.database)
        self._clubs = InMemoryClubRepository(self.database)
        self._club_requests = InMemoryClubRequestRepository(self.database)
        self._enrollments = InMemoryEnrollmentRequestRepository(self.database)
        self._memberships = InMemoryClubMembershipRepository(self.database)
        self._transactions = InMemoryTransactionRepository(self.database)
        self._trainings = InMemoryTrainingRepository(self.database)
        self._tournaments = InMemoryTournamentRepository(self.database)

    @property
    def user_repository(self) -> InMemoryUserRepository:
        return self._users

    @property
    def family_repository(self) -> InMemoryFamilyRepository:
        return self._families

    @property
    def club_repository(self) -> InMemoryClubRepository:
        return self._clubs

    @property
    def club_request_repository(self) -> InMemoryClubRequestRepository:
        return self._club_requests

    @property
    def enrollment_request_repository(self) -> InMemoryEnrollmentRequestRepository:
        return self._enrollments

    @property
    def club_membership_repository(self) -> InMemoryClubMembershipRepository:
        return self._memberships

    @property
    def transaction_repository(self) -> InMemoryTransactionRepository:
        return self._transactions

    @property
    def training_repository(self) -> InMemoryTrainingRepository:
        return self._trainings

    @property
    def tournament_repository(self) -> InMemoryTournamentRepository:
        return self._tournaments

    async def execute_in_transaction(self, work: Callable[[], Awaitable[T]]) -> T:
        async with self.database.transaction():
            result = await work()
        logger.debug("In-memory transaction committed")
        return result

    async def begin_transaction(self) -> None:
        await self.database.begin()

    async def commit(self) -> None:
        await self.database.commit()

    async def rollback(self) -> None:
        await self.database.rollback()
