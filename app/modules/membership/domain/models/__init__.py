# 📄 File: app/modules/membership/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the core membership records (users, families, clubs, requests,
# memberships, payments, trainings, tournaments) in one place.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting the domain aggregates, entities, value objects
# and enums of the membership module.
# 🔗 Dependencies:
# Domain model classes, enums, pydantic base models
# 🔄 Connected Modules / Calls From:
# Repositories, unit of work, application handlers, infrastructure mappers

from .address import Address
from .club import Club
from .club_membership import ClubMembership, MembershipStatus
from .club_request import ClubRequest, ClubRequestStatus, MIN_REJECTION_REASON_LENGTH
from .enrollment_request import EnrollmentRequest, EnrollmentStatus
from .family import Dependant, DependantRelationship, DependantType, Family, FamilyStatus, Sex
from .tournament import (
    Registration,
    RegistrationStatus,
    RegistrationSync,
    SyncStatus,
    Tournament,
    TournamentType,
)
from .training import Training
from .transaction import PaymentMethod, PaymentStatus, Transaction
from .user import DEFAULT_ROLE, User, UserRole

__all__ = [
    "Address",
    "Club",
    "ClubMembership",
    "MembershipStatus",
    "ClubRequest",
    "ClubRequestStatus",
    "MIN_REJECTION_REASON_LENGTH",
    "EnrollmentRequest",
    "EnrollmentStatus",
    "Dependant",
    "DependantRelationship",
    "DependantType",
    "Family",
    "FamilyStatus",
    "Sex",
    "Registration",
    "RegistrationStatus",
    "RegistrationSync",
    "SyncStatus",
    "Tournament",
    "TournamentType",
    "Training",
    "PaymentMethod",
    "PaymentStatus",
    "Transaction",
    "DEFAULT_ROLE",
    "User",
    "UserRole",
]
