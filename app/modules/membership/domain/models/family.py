# 📄 File: app/modules/membership/domain/models/family.py
# 🧭 Purpose (Layman Explanation):
# A family is the household of one holder (the adult user) and the dependants
# (children, spouse) registered under it. Only families with a paid affiliation can
# add dependants, enroll them in clubs or have their holder open a club.
# 🧪 Purpose (Technical Summary):
# Family aggregate owning Dependant entities, with an affiliation state machine
# (NOT_AFFILIATED -> PENDING_PAYMENT -> AFFILIATED). An affiliation lapses once
# ``affiliation_expires_at`` has passed.
# 🔗 Dependencies:
# pydantic, app.shared.core.exceptions, app.shared.utils.validators
# 🔄 Connected Modules / Calls From:
# register_user, add_dependant, delete_dependant, request_enrollment, create_club,
# checkout, process_payment_update, tournament registration handlers

from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.shared.core.exceptions import DomainValidationError, EntityNotFoundError, InvalidOperationError
from app.shared.utils.helpers import utc_now
from app.shared.utils.validators import validate_birthdate, validate_text_content

AFFILIATION_PERIOD = timedelta(days=365)


class FamilyStatus(str, Enum):
    NOT_AFFILIATED = "NOT_AFFILIATED"
    PENDING_PAYMENT = "PENDING_PAYMENT"
    AFFILIATED = "AFFILIATED"
    EXPIRED = "EXPIRED"


class DependantRelationship(str, Enum):
    SON = "SON"
    DAUGHTER = "DAUGHTER"
    SPOUSE = "SPOUSE"
    OTHER = "OTHER"


class Sex(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class DependantType(str, Enum):
    STUDENT = "STUDENT"
    PARENT = "PARENT"


class Dependant(BaseModel):
    """A person registered under a family, eligible for enrollment."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    family_id: str
    first_name: str
    last_name: str
    birthdate: date
    relationship: DependantRelationship
    sex: Sex
    type: DependantType = DependantType.STUDENT
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

    @classmethod
    def create(
        cls,
        id: str,
        family_id: str,
        first_name: str,
        last_name: str,
        birthdate: date,
        relationship: DependantRelationship,
        sex: Sex,
        type: DependantType = DependantType.STUDENT,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> "Dependant":
        for field, value in (("first_name", first_name), ("last_name", last_name)):
            result = validate_text_content(value, field.replace("_", " ").capitalize(), min_length=2, max_length=100)
            if not result.is_valid:
                raise DomainValidationError(result.first_error, field=field)

        birthdate_check = validate_birthdate(birthdate)
        if not birthdate_check.is_valid:
            raise DomainValidationError(birthdate_check.first_error, field="birthdate")

        return cls(
            id=id,
            family_id=family_id,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            birthdate=birthdate,
            relationship=relationship,
            sex=sex,
            type=type,
            email=email,
            phone=phone,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Family(BaseModel):
    """
    Family aggregate.

    Business rules:
    - exactly one holder per family and one family per holder
    - dependants may only be added while the family is AFFILIATED
    - a dependant id appears at most once
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    holder_id: str
    status: FamilyStatus = FamilyStatus.NOT_AFFILIATED
    affiliated_at: Optional[datetime] = None
    affiliation_expires_at: Optional[datetime] = None
    dependants: List[Dependant] = Field(default_factory=list)

    @classmethod
    def create(cls, id: str, holder_id: str) -> "Family":
        return cls(id=id, holder_id=holder_id)

    def is_affiliated(self, now: Optional[datetime] = None) -> bool:
        if self.status != FamilyStatus.AFFILIATED:
            return False
        if self.affiliation_expires_at and (now or utc_now()) > self.affiliation_expires_at:
            return False
        return True

    def mark_pending_payment(self) -> None:
        """
        Record that an affiliation payment was started.

        Raises:
            InvalidOperationError: If the affiliation is still running
        """
        if self.is_affiliated():
            raise InvalidOperationError("Family is already affiliated.")
        self.status = FamilyStatus.PENDING_PAYMENT

    def activate_affiliation(self, now: Optional[datetime] = None) -> None:
        """Start (or renew) a one-year affiliation."""
        now = now or utc_now()
        self.status = FamilyStatus.AFFILIATED
        self.affiliated_at = now
        self.affiliation_expires_at = now + AFFILIATION_PERIOD

    # =========================================================================
    # DEPENDANTS
    # =========================================================================

    def add_dependant(self, dependant: Dependant) -> None:
        if not self.is_affiliated():
            raise InvalidOperationError("Family must be affiliated to add dependants.")
        if dependant.family_id != self.id:
            raise DomainValidationError("Dependant belongs to another family.", field="family_id")
        if self.has_dependant(dependant.id):
            raise InvalidOperationError(f"Dependant {dependant.id} is already a member of this family.")
        self.dependants = [*self.dependants, dependant]

    def remove_dependant(self, dependant_id: str) -> None:
        if not self.has_dependant(dependant_id):
            raise EntityNotFoundError("Dependant", dependant_id)
        self.dependants = [d for d in self.dependants if d.id != dependant_id]

    def has_dependant(self, dependant_id: str) -> bool:
        return any(d.id == dependant_id for d in self.dependants)

    def find_dependant(self, dependant_id: str) -> Optional[Dependant]:
        return next((d for d in self.dependants if d.id == dependant_id), None)
