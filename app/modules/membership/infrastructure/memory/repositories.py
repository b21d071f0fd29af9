# 📄 File: app/modules/membership/infrastructure/memory/repositories.py
# 🧭 Purpose (Layman Explanation):
# The in-memory versions of every "filing cabinet" of the membership system: users,
# families, clubs, requests, memberships, payments, trainings and tournaments.
# 🧪 Purpose (Technical Summary):
# Repository implementations over InMemoryDatabase. Reads hand out deep copies so
# callers never mutate stored rows; writes enforce the same uniqueness rules as the
# SQL schema (user e-mail, family holder, one PENDING enrollment per dependant/club)
# and tournament optimistic locking.
# 🔗 Dependencies:
# domain repository interfaces and models, InMemoryDatabase, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# InMemoryUnitOfWork

from typing import Callable, List, Optional, Tuple, TypeVar

from pydantic import BaseModel

from app.shared.core.exceptions import ConflictError, OptimisticLockError

from ...domain.models import (
    Club,
    ClubMembership,
    ClubRequest,
    ClubRequestStatus,
    EnrollmentRequest,
    EnrollmentStatus,
    Family,
    Tournament,
    Training,
    Transaction,
    User,
)
from ...domain.repositories import (
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
from .database import InMemoryDatabase

M = TypeVar("M", bound=BaseModel)


class _MemoryRepository:
    table_name: str = ""

    def __init__(self, db: InMemoryDatabase):
        self._db = db

    @property
    def _rows(self):
        return self._db.table(self.table_name)

    def _get(self, record_id: str) -> Optional[M]:
        row = self._rows.get(record_id)
        return row.model_copy(deep=True) if row is not None else None

    def _select(self, predicate: Callable[[M], bool]) -> List[M]:
        return [row.model_copy(deep=True) for row in self._rows.values() if predicate(row)]

    async def _put(self, record_id: str, record: M) -> M:
        await self._db.put(self.table_name, record_id, record)
        return record


class InMemoryUserRepository(_MemoryRepository, UserRepository):
    table_name = "users"

    async def find(self, user_id: str) -> Optional[User]:
        return self._get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        found = self._select(lambda u: u.email == email)
        return found[0] if found else None

    async def save(self, user: User) -> User:
        if any(u.email == user.email and u.id != user.id for u in self._rows.values()):
            raise ConflictError(
                "E-mail already in use.", resource_type="User", conflict_field="email",
                existing_value=user.email,
            )
        return await self._put(user.id, user)


class InMemoryFamilyRepository(_MemoryRepository, FamilyRepository):
    table_name = "families"

    async def find(self, family_id: str) -> Optional[Family]:
        return self._get(family_id)

    async def find_by_holder_id(self, holder_id: str) -> Optional[Family]:
        found = self._select(lambda f: f.holder_id == holder_id)
        return found[0] if found else None

    async def save(self, family: Family) -> Family:
        if any(f.holder_id == family.holder_id and f.id != family.id for f in self._rows.values()):
            raise ConflictError(
                "User already holds a family.", resource_type="Family", conflict_field="holder_id",
                existing_value=family.holder_id,
            )
        return await self._put(family.id, family)


class InMemoryClubRepository(_MemoryRepository, ClubRepository):
    table_name = "clubs"

    def _with_corum(self, club: Club) -> Club:
        memberships = self._db.table("club_memberships").values()
        club.corum = sum(1 for m in memberships if m.club_id == club.id and m.is_active())
        return club

    async def find(self, club_id: str) -> Optional[Club]:
        club = self._get(club_id)
        return self._with_corum(club) if club is not None else None

    async def find_by_principal_id(self, principal_id: str) -> Optional[Club]:
        found = self._select(lambda c: c.principal_id == principal_id)
        return self._with_corum(found[0]) if found else None

    async def save(self, club: Club) -> Club:
        # corum is derived, the stored value is never read back
        return await self._put(club.id, club)

    async def search(
        self,
        name: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Club], int]:
        def matches(club: Club) -> bool:
            if name and name.casefold() not in club.name.casefold():
                return False
            if city and city.casefold() not in club.address.city.casefold():
                return False
            if state and state.upper() != club.address.state.upper():
                return False
            return True

        found = sorted(self._select(matches), key=lambda c: c.name.casefold())
        start = (max(page, 1) - 1) * limit
        return [self._with_corum(c) for c in found[start:start + limit]], len(found)


class InMemoryClubRequestRepository(_MemoryRepository, ClubRequestRepository):
    table_name = "club_requests"

    async def find(self, request_id: str) -> Optional[ClubRequest]:
        return self._get(request_id)

    async def find_by_requester_id(self, requester_id: str) -> List[ClubRequest]:
        found = self._select(lambda r: r.requester_id == requester_id)
        return sorted(found, key=lambda r: r.requested_at, reverse=True)

    async def find_pending(self) -> List[ClubRequest]:
        found = self._select(lambda r: r.status == ClubRequestStatus.PENDING)
        return sorted(found, key=lambda r: r.requested_at)

    async def save(self, request: ClubRequest) -> ClubRequest:
        return await self._put(request.id, request)


class InMemoryEnrollmentRequestRepository(_MemoryRepository, EnrollmentRequestRepository):
    table_name = "enrollment_requests"

    async def find(self, request_id: str) -> Optional[EnrollmentRequest]:
        return self._get(request_id)

    async def find_by_dependant_and_club(self, dependant_id: str, club_id: str) -> List[EnrollmentRequest]:
        return self._select(lambda r: r.dependant_id == dependant_id and r.club_id == club_id)

    async def find_pending_by_club(self, club_id: str) -> List[EnrollmentRequest]:
        found = self._select(lambda r: r.club_id == club_id and r.status == EnrollmentStatus.PENDING)
        return sorted(found, key=lambda r: r.requested_at)

    async def find_by_family(self, family_id: str) -> List[EnrollmentRequest]:
        found = self._select(lambda r: r.family_id == family_id)
        return sorted(found, key=lambda r: r.requested_at, reverse=True)

    async def save(self, request: EnrollmentRequest) -> EnrollmentRequest:
        if request.status == EnrollmentStatus.PENDING and any(
            r.id != request.id
            and r.status == EnrollmentStatus.PENDING
            and r.dependant_id == request.dependant_id
            and r.club_id == request.club_id
            for r in self._rows.values()
        ):
            raise ConflictError(
                "A pending enrollment request already exists for this dependant and club.",
                resource_type="EnrollmentRequest",
                conflict_field="dependant_id",
                existing_value=request.dependant_id,
            )
        return await self._put(request.id, request)


class InMemoryClubMembershipRepository(_MemoryRepository, ClubMembershipRepository):
    table_name = "club_memberships"

    async def find(self, membership_id: str) -> Optional[ClubMembership]:
        return self._get(membership_id)

    async def find_by_member_and_club(self, member_id: str, club_id: str) -> Optional[ClubMembership]:
        found = self._select(lambda m: m.member_id == member_id and m.club_id == club_id)
        return found[0] if found else None

    async def find_active_by_club(self, club_id: str) -> List[ClubMembership]:
        found = self._select(lambda m: m.club_id == club_id and m.is_active())
        return sorted(found, key=lambda m: m.created_at)

    async def save(self, membership: ClubMembership) -> ClubMembership:
        return await self._put(membership.id, membership)


class InMemoryTransactionRepository(_MemoryRepository, TransactionRepository):
    table_name = "transactions"

    async def find(self, transaction_id: str) -> Optional[Transaction]:
        return self._get(transaction_id)

    async def find_by_gateway_transaction_id(self, gateway_transaction_id: str) -> Optional[Transaction]:
        found = self._select(lambda t: t.gateway_transaction_id == gateway_transaction_id)
        return found[0] if found else None

    async def save(self, transaction: Transaction) -> Transaction:
        return await self._put(transaction.id, transaction)


class InMemoryTrainingRepository(_MemoryRepository, TrainingRepository):
    table_name = "trainings"

    async def find(self, training_id: str) -> Optional[Training]:
        return self._get(training_id)

    async def find_all(self) -> List[Training]:
        return sorted(self._select(lambda t: True), key=lambda t: t.created_at, reverse=True)

    async def save(self, training: Training) -> Training:
        return await self._put(training.id, training)

    async def delete(self, training_id: str) -> bool:
        return await self._db.remove(self.table_name, training_id)


class InMemoryTournamentRepository(_MemoryRepository, TournamentRepository):
    table_name = "tournaments"

    async def find(self, tournament_id: str) -> Optional[Tournament]:
        return self._get(tournament_id)

    async def find_by_registration_id(self, registration_id: str) -> Optional[Tournament]:
        found = self._select(lambda t: t.find_registration(registration_id) is not None)
        return found[0] if found else None

    async def find_all(self, include_deleted: bool = False) -> List[Tournament]:
        found = self._select(lambda t: include_deleted or not t.is_deleted())
        return sorted(found, key=lambda t: t.start_date)

    async def save(self, tournament: Tournament) -> Tournament:
        stored = self._rows.get(tournament.id)
        if stored is not None:
            if stored.version != tournament.version:
                raise OptimisticLockError("Tournament", tournament.id, expected_version=tournament.version)
            tournament.version += 1
        return await self._put(tournament.id, tournament)
