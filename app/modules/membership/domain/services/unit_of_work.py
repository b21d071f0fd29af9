# 📄 File: app/modules/membership/domain/services/unit_of_work.py
# 🧭 Purpose (Layman Explanation):
# Groups several saves into one all-or-nothing step: either every change made by a
# use-case is stored, or none of them is.
# 🧪 Purpose (Technical Summary):
# Unit of Work contract composing the nine repositories behind a single transaction
# boundary, ``execute_in_transaction(work)``, plus a legacy manual surface
# (begin/commit/rollback) that only test doubles honour.
# 🔗 Dependencies:
# abc, typing, domain repository interfaces
# 🔄 Connected Modules / Calls From:
# All command handlers; implemented by infrastructure.memory and infrastructure.database

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

from ..repositories import (
    ClubMembershipRepository,
    ClubRepository,
    ClubRequestRepository,
    EnrollmentRequestRepository,
    FamilyRepository,
    TournamentRepository,
    TrainingRepository,
    TransactionRepository,
    UserRepository,
)

T = TypeVar("T")


class UnitOfWork(ABC):
    """
    Transaction boundary shared by every repository.

    Guarantees of ``execute_in_transaction``:
    - every repository call made by ``work`` sees one transaction
    - if ``work`` raises, all its writes are rolled back and the original
      exception propagates unchanged (domain errors keep their type)
    - if ``work`` returns, all writes are committed before the call returns
    - nested calls raise TransactionError

    Persistence failures surface as DatabaseError (or ConflictError for
    uniqueness violations), never as driver exceptions.
    """

    @property
    @abstractmethod
    def user_repository(self) -> UserRepository:
        pass

    @property
    @abstractmethod
    def family_repository(self) -> FamilyRepository:
        pass

    @property
    @abstractmethod
    def club_repository(self) -> ClubRepository:
        pass

    @property
    @abstractmethod
    def club_request_repository(self) -> ClubRequestRepository:
        pass

    @property
    @abstractmethod
    def enrollment_request_repository(self) -> EnrollmentRequestRepository:
        pass

    @property
    @abstractmethod
    def club_membership_repository(self) -> ClubMembershipRepository:
        pass

    @property
    @abstractmethod
    def transaction_repository(self) -> TransactionRepository:
        pass

    @property
    @abstractmethod
    def training_repository(self) -> TrainingRepository:
        pass

    @property
    @abstractmethod
    def tournament_repository(self) -> TournamentRepository:
        pass

    @abstractmethod
    async def execute_in_transaction(self, work: Callable[[], Awaitable[T]]) -> T:
        """
        Run ``work`` inside one transaction.

        Args:
            work: Zero-argument coroutine function using the repositories

        Returns:
            Whatever ``work`` returns, after the commit

        Raises:
            TransactionError: If a transaction is already active in this context
            DatabaseError: If the storage layer fails
        """
        pass

    # Legacy manual control. Production implementations raise
    # UnsupportedOperationError.

    @abstractmethod
    async def begin_transaction(self) -> None:
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
