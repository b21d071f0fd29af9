# 📄 File: app/modules/membership/infrastructure/database/unit_of_work.py
#
# 🧭 Purpose (Layman Explanation):
# Makes sure each use-case talks to the database through one conversation (session) that
# is either fully saved or fully undone, even when many requests run at the same time.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy UnitOfWork. ``execute_in_transaction`` opens a session, stores it in a
# ContextVar so concurrent tasks never share one, and wraps ``work`` in ``session.begin()``.
# Domain exceptions propagate unchanged; driver errors become ConflictError or
# DatabaseError. Manual begin/commit/rollback are not supported.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - repositories.py (SQLAlchemy repositories)
# - app.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - app/modules/membership/container.py (PERSISTENCE_BACKEND=sqlalchemy)
# - integration tests

import logging
from contextvars import ContextVar
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.shared.core.exceptions import (
    ConflictError,
    DatabaseError,
    TransactionError,
    UnsupportedOperationError,
)

from ...domain.services import UnitOfWork
from .repositories import (
    SqlAlchemyClubMembershipRepository,
    SqlAlchemyClubRepository,
    SqlAlchemyClubRequestRepository,
    SqlAlchemyEnrollmentRequestRepository,
    SqlAlchemyFamilyRepository,
    SqlAlchemyTournamentRepository,
    SqlAlchemyTrainingRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyUserRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work bound to an async session factory.

    Example:
        uow = SqlAlchemyUnitOfWork(db_manager.session_factory)

        async def work():
            request = await uow.club_request_repository.find(request_id)
            request.approve()
            await uow.club_request_repository.save(request)

        await uow.execute_in_transaction(work)
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory
        self._current: ContextVar[Optional[AsyncSession]] = ContextVar(
            f"uow_session_{id(self)}", default=None
        )
        provider = self.current_session
        self._users = SqlAlchemyUserRepository(provider)
        self._families = SqlAlchemyFamilyRepository(provider)
        self._clubs = SqlAlchemyClubRepository(provider)
        self._club_requests = SqlAlchemyClubRequestRepository(provider)
        self._enrollments = SqlAlchemyEnrollmentRequestRepository(provider)
        self._memberships = SqlAlchemyClubMembershipRepository(provider)
        self._transactions = SqlAlchemyTransactionRepository(provider)
        self._trainings = SqlAlchemyTrainingRepository(provider)
        self._tournaments = SqlAlchemyTournamentRepository(provider)

    def current_session(self) -> AsyncSession:
        session = self._current.get()
        if session is None:
            raise TransactionError("Repositories can only be used inside execute_in_transaction")
        return session

    @property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return self._users

    @property
    def family_repository(self) -> SqlAlchemyFamilyRepository:
        return self._families

    @property
    def club_repository(self) -> SqlAlchemyClubRepository:
        return self._clubs

    @property
    def club_request_repository(self) -> SqlAlchemyClubRequestRepository:
        return self._club_requests

    @property
    def enrollment_request_repository(self) -> SqlAlchemyEnrollmentRequestRepository:
        return self._enrollments

    @property
    def club_membership_repository(self) -> SqlAlchemyClubMembershipRepository:
        return self._memberships

    @property
    def transaction_repository(self) -> SqlAlchemyTransactionRepository:
        return self._transactions

    @property
    def training_repository(self) -> SqlAlchemyTrainingRepository:
        return self._trainings

    @property
    def tournament_repository(self) -> SqlAlchemyTournamentRepository:
        return self._tournaments

    async def execute_in_transaction(self, work: Callable[[], Awaitable[T]]) -> T:
        if self._current.get() is not None:
            raise TransactionError("A transaction is already active in this context")

        async with self._session_factory() as session:
            token = self._current.set(session)
            try:
                async with session.begin():
                    result = await work()
            except IntegrityError as e:
                logger.warning(f"Transaction rolled back on integrity violation: {e.orig}")
                raise ConflictError("Resource conflict") from e
            except SQLAlchemyError as e:
                logger.error(f"Database error occurred, transaction rolled back: {e}")
                raise DatabaseError(f"Database operation failed: {e}", operation="transaction") from e
            finally:
                self._current.reset(token)

        logger.debug("Database transaction committed successfully")
        return result

    async def begin_transaction(self) -> None:
        raise UnsupportedOperationError("begin_transaction", "SqlAlchemyUnitOfWork")

    async def commit(self) -> None:
        raise UnsupportedOperationError("commit", "SqlAlchemyUnitOfWork")

    async def rollback(self) -> None:
        raise UnsupportedOperationError("rollback", "SqlAlchemyUnitOfWork")
