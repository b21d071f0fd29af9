# 📄 File: app/modules/membership/infrastructure/database/repositories.py
# 🧭 Purpose (Layman Explanation):
# This file handles all database operations for the membership system, like storing new
# club requests, finding a family by its holder, or counting how many members a club has.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementations of the membership repository interfaces. Every repository
# asks the unit of work for the session of the current transaction, maps ORM rows to
# domain aggregates and back, fills the derived club ``corum`` with a COUNT of ACTIVE
# memberships, and maps flush-time driver errors to domain-level exceptions.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (repository interfaces and aggregates)
# - models.py (SQLAlchemy models)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - unit_of_work.py (SqlAlchemyUnitOfWork)

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from app.shared.core.exceptions import ConflictError, DatabaseError, OptimisticLockError
from app.shared.utils.helpers import ensure_utc

from ...domain.models import (
    Address,
    Club,
    ClubMembership,
    ClubRequest,
    ClubRequestStatus,
    Dependant,
    EnrollmentRequest,
    EnrollmentStatus,
    Family,
    MembershipStatus,
    Registration,
    RegistrationSync,
    Tournament,
    Training,
    Transaction,
    User,
)
from ...domain.models.user import UserRole
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
from .models import (
    ClubMembershipModel,
    ClubModel,
    ClubRequestModel,
    DependantModel,
    EnrollmentRequestModel,
    FamilyModel,
    RegistrationModel,
    RegistrationSyncModel,
    TournamentModel,
    TrainingModel,
    TransactionModel,
    UserModel,
)

logger = logging.getLogger(__name__)

SessionProvider = Callable[[], AsyncSession]

ADDRESS_FIELDS = ("street", "number", "district", "city", "state", "zip_code", "country", "complement")


def _utc(value: Optional[datetime]) -> Optional[datetime]:
    return ensure_utc(value) if value is not None else None


def _address_from_row(row) -> Address:
    return Address(**{name: getattr(row, name) for name in ADDRESS_FIELDS})


def _address_to_row(row, address: Address) -> None:
    for name in ADDRESS_FIELDS:
        setattr(row, name, getattr(address, name))


def _contains_pattern(text: str) -> str:
    """ILIKE pattern matching ``text`` literally anywhere in the column."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlAlchemyRepository:
    """Base class: session lookup and flush error mapping."""

    table: str = ""

    def __init__(self, session_provider: SessionProvider):
        self._session_provider = session_provider

    @property
    def _session(self) -> AsyncSession:
        return self._session_provider()

    async def _flush(self, conflict_message: str = "Resource conflict") -> None:
        try:
            await self._session.flush()
        except StaleDataError:
            raise
        except IntegrityError as e:
            logger.warning(f"Integrity violation on {self.table}: {e.orig}")
            raise ConflictError(conflict_message, resource_type=self.table) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error on {self.table}: {e}")
            raise DatabaseError(f"Failed to write {self.table}", operation="flush", table=self.table) from e


# =============================================================================
# USERS AND FAMILIES
# =============================================================================

class SqlAlchemyUserRepository(SqlAlchemyRepository, UserRepository):
    table = "users"

    @staticmethod
    def _model_to_domain(row: UserModel) -> User:
        return User(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            phone=row.phone,
            password_hash=row.password_hash,
            roles=frozenset(UserRole(r) for r in row.roles or []),
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at),
        )

    async def find(self, user_id: str) -> Optional[User]:
        row = await self._session.get(UserModel, user_id)
        return self._model_to_domain(row) if row is not None else None

    async def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._model_to_domain(row) if row is not None else None

    async def save(self, user: User) -> User:
        row = await self._session.get(UserModel, user.id)
        if row is None:
            row = UserModel(id=user.id, created_at=user.created_at)
            self._session.add(row)
        row.first_name = user.first_name
        row.last_name = user.last_name
        row.email = user.email
        row.phone = user.phone
        row.password_hash = user.password_hash
        row.roles = sorted(role.value for role in user.roles)
        row.updated_at = user.updated_at
        await self._flush("E-mail already in use.")
        return user


class SqlAlchemyFamilyRepository(SqlAlchemyRepository, FamilyRepository):
    table = "families"

    @staticmethod
    def _model_to_domain(row: FamilyModel) -> Family:
        return Family(
            id=row.id,
            holder_id=row.holder_id,
            status=row.status,
            affiliated_at=_utc(row.affiliated_at),
            affiliation_expires_at=_utc(row.affiliation_expires_at),
            dependants=[
                Dependant(
                    id=d.id,
                    family_id=d.family_id,
                    first_name=d.first_name,
                    last_name=d.last_name,
                    birthdate=d.birthdate,
                    relationship=d.relationship_type,
                    sex=d.sex,
                    type=d.type,
                    email=d.email,
                    phone=d.phone,
                )
                for d in row.dependants
            ],
        )

    async def _load(self, *criteria) -> Optional[FamilyModel]:
        stmt = select(FamilyModel).where(*criteria)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def find(self, family_id: str) -> Optional[Family]:
        row = await self._load(FamilyModel.id == family_id)
        return self._model_to_domain(row) if row is not None else None

    async def find_by_holder_id(self, holder_id: str) -> Optional[Family]:
        row = await self._load(FamilyModel.holder_id == holder_id)
        return self._model_to_domain(row) if row is not None else None

    async def save(self, family: Family) -> Family:
        row = await self._load(FamilyModel.id == family.id)
        if row is None:
            row = FamilyModel(id=family.id, holder_id=family.holder_id, dependants=[])
            self._session.add(row)
        row.status = family.status.value
        row.affiliated_at = family.affiliated_at
        row.affiliation_expires_at = family.affiliation_expires_at

        existing = {d.id: d for d in row.dependants}
        children = []
        for dependant in family.dependants:
            child = existing.get(dependant.id) or DependantModel(id=dependant.id)
            child.family_id = family.id
            child.first_name = dependant.first_name
            child.last_name = dependant.last_name
            child.birthdate = dependant.birthdate
            child.relationship_type = dependant.relationship.value
            child.sex = dependant.sex.value
            child.type = dependant.type.value
            child.email = dependant.email
            child.phone = dependant.phone
            children.append(child)
        row.dependants = children

        await self._flush("User already holds a family.")
        return family


# =============================================================================
# CLUBS
# =============================================================================

class SqlAlchemyClubRepository(SqlAlchemyRepository, ClubRepository):
    table = "clubs"

    async def _corum(self, club_id: str) -> int:
        stmt = select(func.count()).select_from(ClubMembershipModel).where(
            ClubMembershipModel.club_id == club_id,
            ClubMembershipModel.status == MembershipStatus.ACTIVE.value,
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def _model_to_domain(self, row: ClubModel) -> Club:
        return Club(
            id=row.id,
            name=row.name,
            principal_id=row.principal_id,
            address=_address_from_row(row),
            max_members=row.max_members,
            corum=await self._corum(row.id),
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at),
        )

    async def find(self, club_id: str) -> Optional[Club]:
        row = await self._session.get(ClubModel, club_id)
        return await self._model_to_domain(row) if row is not None else None

    async def find_by_principal_id(self, principal_id: str) -> Optional[Club]:
        stmt = select(ClubModel).where(ClubModel.principal_id == principal_id)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return await self._model_to_domain(row) if row is not None else None

    async def save(self, club: Club) -> Club:
        row = await self._session.get(ClubModel, club.id)
        if row is None:
            row = ClubModel(id=club.id, created_at=club.created_at)
            self._session.add(row)
        row.name = club.name
        row.principal_id = club.principal_id
        row.max_members = club.max_members
        row.updated_at = club.updated_at
        _address_to_row(row, club.address)
        await self._flush("User already owns a club.")
        return club

    async def search(
        self,
        name: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Club], int]:
        criteria = []
        if name:
            criteria.append(ClubModel.name.ilike(_contains_pattern(name), escape="\\"))
        if city:
            criteria.append(ClubModel.city.ilike(_contains_pattern(city), escape="\\"))
        if state:
            criteria.append(func.upper(ClubModel.state) == state.upper())

        total_stmt = select(func.count()).select_from(ClubModel).where(*criteria)
        total = (await self._session.execute(total_stmt)).scalar_one()

        stmt = (
            select(ClubModel)
            .where(*criteria)
            .order_by(func.lower(ClubModel.name))
            .offset((max(page, 1) - 1) * limit)
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [await self._model_to_domain(row) for row in rows], total


class SqlAlchemyClubRequestRepository(SqlAlchemyRepository, ClubRequestRepository):
    table = "club_requests"

    @staticmethod
    def _model_to_domain(row: ClubRequestModel) -> ClubRequest:
        return ClubRequest(
            id=row.id,
            club_name=row.club_name,
            address=_address_from_row(row),
            max_members=row.max_members,
            requester_id=row.requester_id,
            status=row.status,
            requested_at=_utc(row.requested_at),
            resolved_at=_utc(row.resolved_at),
            rejection_reason=row.rejection_reason,
        )

    async def find(self, request_id: str) -> Optional[ClubRequest]:
        row = await self._session.get(ClubRequestModel, request_id)
        return self._model_to_domain(row) if row is not None else None

    async def find_by_requester_id(self, requester_id: str) -> List[ClubRequest]:
        stmt = (
            select(ClubRequestModel)
            .where(ClubRequestModel.requester_id == requester_id)
            .order_by(ClubRequestModel.requested_at.desc())
        )
        return [self._model_to_domain(r) for r in (await self._session.execute(stmt)).scalars()]

    async def find_pending(self) -> List[ClubRequest]:
        stmt = (
            select(ClubRequestModel)
            .where(ClubRequestModel.status == ClubRequestStatus.PENDING.value)
            .order_by(ClubRequestModel.requested_at)
        )
        return [self._model_to_domain(r) for r in (await self._session.execute(stmt)).scalars()]

    async def save(self, request: ClubRequest) -> ClubRequest:
        row = await self._session.get(ClubRequestModel, request.id)
        if row is None:
            row = ClubRequestModel(id=request.id, requester_id=request.requester_id)
            self._session.add(row)
        row.club_name = request.club_name
        row.max_members = request.max_members
        row.status = request.status.value
        row.requested_at = request.requested_at
        row.resolved_at = request.resolved_at
        row.rejection_reason = request.rejection_reason
        _address_to_row(row, request.address)
        await self._flush()
        return request


class SqlAlchemyEnrollmentRequestRepository(SqlAlchemyRepository, EnrollmentRequestRepository):
    table = "enrollment_requests"

    @staticmethod
    def _model_to_domain(row: EnrollmentRequestModel) -> EnrollmentRequest:
        return EnrollmentRequest(
            id=row.id,
            family_id=row.family_id,
            dependant_id=row.dependant_id,
            club_id=row.club_id,
            status=row.status,
            requested_at=_utc(row.requested_at),
            resolved_at=_utc(row.resolved_at),
            rejection_reason=row.rejection_reason,
        )

    async def _all(self, *criteria, order_by=None) -> List[EnrollmentRequest]:
        stmt = select(EnrollmentRequestModel).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        return [self._model_to_domain(r) for r in (await self._session.execute(stmt)).scalars()]

    async def find(self, request_id: str) -> Optional[EnrollmentRequest]:
        row = await self._session.get(EnrollmentRequestModel, request_id)
        return self._model_to_domain(row) if row is not None else None

    async def find_by_dependant_and_club(self, dependant_id: str, club_id: str) -> List[EnrollmentRequest]:
        return await self._all(
            EnrollmentRequestModel.dependant_id == dependant_id,
            EnrollmentRequestModel.club_id == club_id,
        )

    async def find_pending_by_club(self, club_id: str) -> List[EnrollmentRequest]:
        return await self._all(
            EnrollmentRequestModel.club_id == club_id,
            EnrollmentRequestModel.status == EnrollmentStatus.PENDING.value,
            order_by=EnrollmentRequestModel.requested_at,
        )

    async def find_by_family(self, family_id: str) -> List[EnrollmentRequest]:
        return await self._all(
            EnrollmentRequestModel.family_id == family_id,
            order_by=EnrollmentRequestModel.requested_at.desc(),
        )

    async def save(self, request: EnrollmentRequest) -> EnrollmentRequest:
        row = await self._session.get(EnrollmentRequestModel, request.id)
        if row is None:
            row = EnrollmentRequestModel(
                id=request.id,
                family_id=request.family_id,
                dependant_id=request.dependant_id,
                club_id=request.club_id,
                requested_at=request.requested_at,
            )
            self._session.add(row)
        row.status = request.status.value
        row.resolved_at = request.resolved_at
        row.rejection_reason = request.rejection_reason
        await self._flush("A pending enrollment request already exists for this dependant and club.")
        return request


class SqlAlchemyClubMembershipRepository(SqlAlchemyRepository, ClubMembershipRepository):
    table = "club_memberships"

    @staticmethod
    def _model_to_domain(row: ClubMembershipModel) -> ClubMembership:
        return ClubMembership(
            id=row.id,
            club_id=row.club_id,
            member_id=row.member_id,
            family_id=row.family_id,
            status=row.status,
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at),
        )

    async def find(self, membership_id: str) -> Optional[ClubMembership]:
        row = await self._session.get(ClubMembershipModel, membership_id)
        return self._model_to_domain(row) if row is not None else None

    async def find_by_member_and_club(self, member_id: str, club_id: str) -> Optional[ClubMembership]:
        stmt = select(ClubMembershipModel).where(
            ClubMembershipModel.member_id == member_id,
            ClubMembershipModel.club_id == club_id,
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._model_to_domain(row) if row is not None else None

    async def find_active_by_club(self, club_id: str) -> List[ClubMembership]:
        stmt = (
            select(ClubMembershipModel)
            .where(
                ClubMembershipModel.club_id == club_id,
                ClubMembershipModel.status == MembershipStatus.ACTIVE.value,
            )
            .order_by(ClubMembershipModel.created_at)
        )
        return [self._model_to_domain(r) for r in (await self._session.execute(stmt)).scalars()]

    async def save(self, membership: ClubMembership) -> ClubMembership:
        row = await self._session.get(ClubMembershipModel, membership.id)
        if row is None:
            row = ClubMembershipModel(
                id=membership.id,
                club_id=membership.club_id,
                member_id=membership.member_id,
                family_id=membership.family_id,
                created_at=membership.created_at,
            )
            self._session.add(row)
        row.status = membership.status.value
        row.updated_at = membership.updated_at
        await self._flush("Dependant already has a membership in this club.")
        return membership


# =============================================================================
# PAYMENTS AND TRAININGS
# =============================================================================

class SqlAlchemyTransactionRepository(SqlAlchemyRepository, TransactionRepository):
    table = "transactions"

    @staticmethod
    def _model_to_domain(row: TransactionModel) -> Transaction:
        return Transaction(
            id=row.id,
            family_id=row.family_id,
            gateway=row.gateway,
            gateway_transaction_id=row.gateway_transaction_id,
            payment_method=row.payment_method,
            amount_cents=row.amount_cents,
            status=row.status,
            gateway_payload=row.gateway_payload or {},
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at),
        )

    async def find(self, transaction_id: str) -> Optional[Transaction]:
        row = await self._session.get(TransactionModel, transaction_id)
        return self._model_to_domain(row) if row is not None else None

    async def find_by_gateway_transaction_id(self, gateway_transaction_id: str) -> Optional[Transaction]:
        stmt = select(TransactionModel).where(TransactionModel.gateway_transaction_id == gateway_transaction_id)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._model_to_domain(row) if row is not None else None

    async def save(self, transaction: Transaction) -> Transaction:
        row = await self._session.get(TransactionModel, transaction.id)
        if row is None:
            row = TransactionModel(
                id=transaction.id,
                family_id=transaction.family_id,
                gateway=transaction.gateway,
                gateway_transaction_id=transaction.gateway_transaction_id,
                payment_method=transaction.payment_method.value,
                amount_cents=transaction.amount_cents,
                created_at=transaction.created_at,
            )
            self._session.add(row)
        row.status = transaction.status.value
        row.gateway_payload = dict(transaction.gateway_payload)
        row.updated_at = transaction.updated_at
        await self._flush("Gateway transaction already recorded.")
        return transaction


class SqlAlchemyTrainingRepository(SqlAlchemyRepository, TrainingRepository):
    table = "trainings"

    @staticmethod
    def _model_to_domain(row: TrainingModel) -> Training:
        return Training(
            id=row.id,
            title=row.title,
            description=row.description,
            youtube_url=row.youtube_url,
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at),
        )

    async def find(self, training_id: str) -> Optional[Training]:
        row = await self._session.get(TrainingModel, training_id)
        return self._model_to_domain(row) if row is not None else None

    async def find_all(self) -> List[Training]:
        stmt = select(TrainingModel).order_by(TrainingModel.created_at.desc())
        return [self._model_to_domain(r) for r in (await self._session.execute(stmt)).scalars()]

    async def save(self, training: Training) -> Training:
        row = await self._session.get(TrainingModel, training.id)
        if row is None:
            row = TrainingModel(id=training.id, created_at=training.created_at)
            self._session.add(row)
        row.title = training.title
        row.description = training.description
        row.youtube_url = training.youtube_url
        row.updated_at = training.updated_at
        await self._flush()
        return training

    async def delete(self, training_id: str) -> bool:
        row = await self._session.get(TrainingModel, training_id)
        if row is None:
            return False
        await self._session.delete(row)
        await self._flush()
        return True


# =============================================================================
# TOURNAMENTS
# =============================================================================

class SqlAlchemyTournamentRepository(SqlAlchemyRepository, TournamentRepository):
    table = "tournaments"

    @staticmethod
    def _sync_to_domain(row: Optional[RegistrationSyncModel]) -> Optional[RegistrationSync]:
        if row is None:
            return None
        return RegistrationSync(
            id=row.id,
            registration_id=row.registration_id,
            status=row.status,
            attempts=row.attempts,
            last_attempt_at=_utc(row.last_attempt_at),
            next_attempt_at=_utc(row.next_attempt_at),
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at),
        )

    def _model_to_domain(self, row: TournamentModel) -> Tournament:
        return Tournament(
            id=row.id,
            name=row.name,
            description=row.description,
            type=row.type,
            registration_start_date=_utc(row.registration_start_date),
            registration_end_date=_utc(row.registration_end_date),
            start_date=_utc(row.start_date),
            deleted_at=_utc(row.deleted_at),
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at),
            version=row.version,
            registrations=[
                Registration(
                    id=r.id,
                    tournament_id=r.tournament_id,
                    competitor_id=r.competitor_id,
                    status=r.status,
                    type=r.type,
                    created_at=_utc(r.created_at),
                    updated_at=_utc(r.updated_at),
                    sync=self._sync_to_domain(r.sync),
                )
                for r in row.registrations
            ],
        )

    async def _load(self, *criteria) -> List[TournamentModel]:
        stmt = select(TournamentModel).where(*criteria).order_by(TournamentModel.start_date)
        return list((await self._session.execute(stmt)).scalars().all())

    async def find(self, tournament_id: str) -> Optional[Tournament]:
        rows = await self._load(TournamentModel.id == tournament_id)
        return self._model_to_domain(rows[0]) if rows else None

    async def find_by_registration_id(self, registration_id: str) -> Optional[Tournament]:
        rows = await self._load(
            TournamentModel.id.in_(
                select(RegistrationModel.tournament_id).where(RegistrationModel.id == registration_id)
            )
        )
        return self._model_to_domain(rows[0]) if rows else None

    async def find_all(self, include_deleted: bool = False) -> List[Tournament]:
        criteria = [] if include_deleted else [TournamentModel.deleted_at.is_(None)]
        return [self._model_to_domain(row) for row in await self._load(*criteria)]

    @staticmethod
    def _apply_sync(registration_row: RegistrationModel, sync: Optional[RegistrationSync]) -> None:
        if sync is None:
            return
        row = registration_row.sync
        if row is None:
            row = RegistrationSyncModel(id=sync.id, registration_id=sync.registration_id, created_at=sync.created_at)
            registration_row.sync = row
        row.status = sync.status.value
        row.attempts = sync.attempts
        row.last_attempt_at = sync.last_attempt_at
        row.next_attempt_at = sync.next_attempt_at
        row.updated_at = sync.updated_at

    async def save(self, tournament: Tournament) -> Tournament:
        rows = await self._load(TournamentModel.id == tournament.id)
        if rows:
            row = rows[0]
            if row.version != tournament.version:
                raise OptimisticLockError("Tournament", tournament.id, expected_version=tournament.version)
        else:
            row = TournamentModel(id=tournament.id, created_at=tournament.created_at, registrations=[])
            self._session.add(row)

        row.name = tournament.name
        row.description = tournament.description
        row.type = tournament.type.value
        row.registration_start_date = tournament.registration_start_date
        row.registration_end_date = tournament.registration_end_date
        row.start_date = tournament.start_date
        row.deleted_at = tournament.deleted_at
        row.updated_at = tournament.updated_at
        if rows:
            # child-only changes still bump the version
            flag_modified(row, "updated_at")

        existing = {r.id: r for r in row.registrations}
        children = []
        for registration in tournament.registrations:
            child = existing.get(registration.id)
            if child is None:
                child = RegistrationModel(
                    id=registration.id,
                    tournament_id=tournament.id,
                    competitor_id=registration.competitor_id,
                    created_at=registration.created_at,
                )
            child.status = registration.status.value
            child.type = registration.type.value
            child.updated_at = registration.updated_at
            self._apply_sync(child, registration.sync)
            children.append(child)
        row.registrations = children

        try:
            await self._flush("Tournament registration conflict.")
        except StaleDataError as e:
            raise OptimisticLockError("Tournament", tournament.id, expected_version=tournament.version) from e
        tournament.version = row.version
        return tournament
