# 📄 File: app/modules/membership/domain/models/tournament.py
# 🧭 Purpose (Layman Explanation):
# Debate tournaments that dependants can sign up for during a registration window,
# plus the bookkeeping that tracks whether each sign-up reached the external
# tournament system.
# 🧪 Purpose (Technical Summary):
# Tournament aggregate owning Registration entities, each with an optional
# RegistrationSync tracking delivery to the integration queue. ``version`` drives
# optimistic locking in the repositories.
# 🔗 Dependencies:
# pydantic, app.shared.core.exceptions, app.shared.utils
# 🔄 Connected Modules / Calls From:
# tournament handlers, registration sync handlers, tournament repositories

from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import DomainValidationError, EntityNotFoundError, InvalidOperationError
from app.shared.utils.helpers import utc_now
from app.shared.utils.validators import validate_text_content

MAX_SYNC_RETRIES = 3
SYNC_BACKOFF_BASE_MINUTES = 5


class TournamentType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    DUO = "DUO"


class RegistrationStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


class SyncStatus(str, Enum):
    PENDING = "PENDING"
    SYNCED = "SYNCED"
    FAILED = "FAILED"


class RegistrationSync(BaseModel):
    """Delivery state of one registration towards the tournament system."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    registration_id: str
    status: SyncStatus = SyncStatus.PENDING
    attempts: int = 0
    last_attempt_at: Optional[datetime] = None
    next_attempt_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def create(cls, id: str, registration_id: str) -> "RegistrationSync":
        return cls(id=id, registration_id=registration_id)

    def mark_as_synced(self) -> None:
        if self.status == SyncStatus.SYNCED:
            return
        self.status = SyncStatus.SYNCED
        self.next_attempt_at = None
        self.updated_at = utc_now()

    def is_max_retries_reached(self) -> bool:
        return self.attempts >= MAX_SYNC_RETRIES

    def mark_as_failed(self, now: Optional[datetime] = None) -> None:
        """
        Record a failed delivery and schedule the next one.

        The delay is ``2^attempts * 5`` minutes (10, 20, 40). Once the retries
        are exhausted the sync stays FAILED with no next attempt.
        """
        now = now or utc_now()
        self.attempts += 1
        self.last_attempt_at = now
        self.updated_at = now
        self.status = SyncStatus.FAILED
        if self.is_max_retries_reached():
            self.next_attempt_at = None
        else:
            backoff = (2 ** self.attempts) * SYNC_BACKOFF_BASE_MINUTES
            self.next_attempt_at = now + timedelta(minutes=backoff)


class Registration(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    tournament_id: str
    competitor_id: str
    status: RegistrationStatus = RegistrationStatus.CONFIRMED
    type: TournamentType = TournamentType.INDIVIDUAL
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    sync: Optional[RegistrationSync] = None

    def is_active(self) -> bool:
        return self.status in (RegistrationStatus.CONFIRMED, RegistrationStatus.PENDING_APPROVAL)

    def cancel(self) -> None:
        if self.status == RegistrationStatus.CANCELLED:
            raise InvalidOperationError("Registration is already cancelled.")
        if self.status == RegistrationStatus.REJECTED:
            raise InvalidOperationError("A rejected registration cannot be cancelled.")
        self.status = RegistrationStatus.CANCELLED
        self.updated_at = utc_now()

    def attach_sync(self, sync_id: str) -> RegistrationSync:
        """Create the sync record once; later calls return the existing one."""
        if self.sync is None:
            self.sync = RegistrationSync.create(id=sync_id, registration_id=self.id)
        return self.sync


class Tournament(BaseModel):
    """
    Tournament aggregate.

    Dates obey registration_start < registration_end <= start_date. A
    tournament with registrations can no longer be edited or deleted.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str
    description: str
    type: TournamentType
    registration_start_date: datetime
    registration_end_date: datetime
    start_date: datetime
    deleted_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    version: int = 1
    registrations: List[Registration] = Field(default_factory=list)

    @staticmethod
    def _check_texts(name: str, description: str) -> None:
        for field, result in (
            ("name", validate_text_content(name, "Tournament name", min_length=3, max_length=200)),
            ("description", validate_text_content(description, "Tournament description", min_length=10)),
        ):
            if not result.is_valid:
                raise DomainValidationError(result.first_error, field=field)

    @staticmethod
    def _check_dates(registration_start: datetime, registration_end: datetime, start: datetime) -> None:
        if registration_end <= registration_start:
            raise InvalidOperationError("Registration end date cannot be before or equal to the start date.")
        if start < registration_end:
            raise InvalidOperationError("Tournament start date cannot be before registration end date.")

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        description: str,
        type: TournamentType,
        registration_start_date: datetime,
        registration_end_date: datetime,
        start_date: datetime,
    ) -> "Tournament":
        cls._check_texts(name, description)
        cls._check_dates(registration_start_date, registration_end_date, start_date)
        return cls(
            id=id,
            name=name.strip(),
            description=description.strip(),
            type=type,
            registration_start_date=registration_start_date,
            registration_end_date=registration_end_date,
            start_date=start_date,
        )

    @property
    def registration_count(self) -> int:
        return len(self.registrations)

    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def _ensure_editable(self, action: str) -> None:
        if self.registration_count > 0:
            raise InvalidOperationError(f"Cannot {action} a tournament that already has registrations.")
        if self.is_deleted():
            raise InvalidOperationError(f"Cannot {action} a deleted tournament.")

    def update(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        type: Optional[TournamentType] = None,
        registration_start_date: Optional[datetime] = None,
        registration_end_date: Optional[datetime] = None,
        start_date: Optional[datetime] = None,
    ) -> None:
        self._ensure_editable("update")
        new_name = self.name if name is None else name
        new_description = self.description if description is None else description
        new_start = registration_start_date or self.registration_start_date
        new_end = registration_end_date or self.registration_end_date
        new_tournament_start = start_date or self.start_date
        self._check_texts(new_name, new_description)
        self._check_dates(new_start, new_end, new_tournament_start)

        self.name = new_name.strip()
        self.description = new_description.strip()
        if type is not None:
            self.type = type
        self.registration_start_date = new_start
        self.registration_end_date = new_end
        self.start_date = new_tournament_start
        self.updated_at = utc_now()

    def soft_delete(self) -> None:
        self._ensure_editable("delete")
        self.deleted_at = utc_now()
        self.updated_at = self.deleted_at

    # =========================================================================
    # REGISTRATIONS
    # =========================================================================

    def is_registration_open(self, now: Optional[datetime] = None) -> bool:
        now = now or utc_now()
        return self.registration_start_date <= now <= self.registration_end_date

    def is_competitor_registered(self, competitor_id: str) -> bool:
        return any(
            r.competitor_id == competitor_id and r.is_active() for r in self.registrations
        )

    def request_individual_registration(
        self,
        registration_id: str,
        competitor_id: str,
        now: Optional[datetime] = None,
    ) -> Registration:
        """
        Register a dependant in an INDIVIDUAL tournament.

        Raises:
            InvalidOperationError: Wrong tournament type, deleted tournament,
                registration window closed, or competitor already registered
        """
        if self.is_deleted():
            raise InvalidOperationError("Cannot register for a deleted tournament.")
        if self.type != TournamentType.INDIVIDUAL:
            raise InvalidOperationError(
                "Cannot register for this tournament type. Tournament must be of type INDIVIDUAL."
            )
        if not self.is_registration_open(now):
            raise InvalidOperationError("Registration period is not open for this tournament.")
        if self.is_competitor_registered(competitor_id):
            raise InvalidOperationError(
                f"Competitor {competitor_id} is already registered for this tournament."
            )

        registration = Registration(
            id=registration_id,
            tournament_id=self.id,
            competitor_id=competitor_id,
            status=RegistrationStatus.CONFIRMED,
            type=TournamentType.INDIVIDUAL,
        )
        self.registrations = [*self.registrations, registration]
        self.updated_at = utc_now()
        return registration

    def find_registration(self, registration_id: str) -> Optional[Registration]:
        return next((r for r in self.registrations if r.id == registration_id), None)

    def cancel_registration(self, registration_id: str) -> Registration:
        registration = self.find_registration(registration_id)
        if registration is None:
            raise EntityNotFoundError("Registration", registration_id)
        registration.cancel()
        self.updated_at = utc_now()
        return registration
