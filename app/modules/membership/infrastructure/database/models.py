# 📄 File: app/modules/membership/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how membership information is stored in the database: users, families
# and their dependants, clubs, the requests to open or join clubs, payments, trainings
# and tournaments.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the membership schema. String(36) UUID keys, timezone-aware
# timestamps, addresses flattened into columns so clubs can be searched by city, a partial
# unique index keeping one PENDING enrollment per dependant and club, and a version
# column for optimistic locking on tournaments.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (declarative Base)
#
# 🔄 Connected Modules / Calls From:
# - repositories.py (mapping to and from domain aggregates)
# - migrations (schema generation)

"""
SQLAlchemy Models for Membership

Models:
- UserModel: Accounts and roles
- FamilyModel / DependantModel: Family affiliation and its members
- ClubModel / ClubRequestModel: Clubs and requests to open one
- EnrollmentRequestModel / ClubMembershipModel: Joining a club
- TransactionModel: Affiliation payments
- TrainingModel: Training videos
- TournamentModel / RegistrationModel / RegistrationSyncModel: Tournaments
"""

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship

from app.shared.infrastructure.database.connection import Base

ID = String(36)


class AddressColumnsMixin:
    """Flattened Address value object."""

    street = Column(String(200), nullable=False)
    number = Column(String(20), nullable=False, default="")
    district = Column(String(120), nullable=False, default="")
    city = Column(String(120), nullable=False, index=True)
    state = Column(String(2), nullable=False, index=True)
    zip_code = Column(String(8), nullable=False)
    country = Column(String(60), nullable=False, default="Brasil")
    complement = Column(String(200), nullable=True)


# =============================================================================
# USERS AND FAMILIES
# =============================================================================

class UserModel(Base):
    __tablename__ = "users"

    id = Column(ID, primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(30), nullable=True)
    password_hash = Column(String(255), nullable=False)
    roles = Column(JSON, nullable=False, default=list, comment="List of role names")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class FamilyModel(Base):
    __tablename__ = "families"

    id = Column(ID, primary_key=True)
    holder_id = Column(ID, ForeignKey("users.id"), unique=True, nullable=False)
    status = Column(String(20), nullable=False)
    affiliated_at = Column(DateTime(timezone=True), nullable=True)
    affiliation_expires_at = Column(DateTime(timezone=True), nullable=True)

    dependants = relationship(
        "DependantModel",
        back_populates="family",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="DependantModel.first_name",
    )


class DependantModel(Base):
    __tablename__ = "dependants"

    id = Column(ID, primary_key=True)
    family_id = Column(ID, ForeignKey("families.id", ondelete="CASCADE"), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    birthdate = Column(Date, nullable=False)
    relationship_type = Column("relationship", String(20), nullable=False)
    sex = Column(String(10), nullable=False)
    type = Column(String(20), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)

    family = relationship("FamilyModel", back_populates="dependants")


# =============================================================================
# CLUBS
# =============================================================================

class ClubModel(AddressColumnsMixin, Base):
    __tablename__ = "clubs"

    id = Column(ID, primary_key=True)
    name = Column(String(200), nullable=False, index=True)
    principal_id = Column(ID, ForeignKey("users.id"), unique=True, nullable=False)
    max_members = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class ClubRequestModel(AddressColumnsMixin, Base):
    __tablename__ = "club_requests"

    id = Column(ID, primary_key=True)
    club_name = Column(String(200), nullable=False)
    max_members = Column(Integer, nullable=True)
    requester_id = Column(ID, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, index=True)
    requested_at = Column(DateTime(timezone=True), nullable=False)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)


class EnrollmentRequestModel(Base):
    __tablename__ = "enrollment_requests"
    __table_args__ = (
        Index(
            "uq_enrollment_requests_pending_pair",
            "dependant_id",
            "club_id",
            unique=True,
            postgresql_where=text("status = 'PENDING'"),
            sqlite_where=text("status = 'PENDING'"),
        ),
    )

    id = Column(ID, primary_key=True)
    family_id = Column(ID, ForeignKey("families.id"), nullable=False, index=True)
    dependant_id = Column(ID, ForeignKey("dependants.id"), nullable=False)
    club_id = Column(ID, ForeignKey("clubs.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False)
    requested_at = Column(DateTime(timezone=True), nullable=False)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    rejection_reason = Column(Text, nullable=True)


class ClubMembershipModel(Base):
    __tablename__ = "club_memberships"
    __table_args__ = (UniqueConstraint("member_id", "club_id", name="uq_club_memberships_member_club"),)

    id = Column(ID, primary_key=True)
    club_id = Column(ID, ForeignKey("clubs.id"), nullable=False, index=True)
    member_id = Column(ID, ForeignKey("dependants.id"), nullable=False)
    family_id = Column(ID, ForeignKey("families.id"), nullable=False)
    status = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


# =============================================================================
# PAYMENTS AND TRAININGS
# =============================================================================

class TransactionModel(Base):
    __tablename__ = "transactions"

    id = Column(ID, primary_key=True)
    family_id = Column(ID, ForeignKey("families.id"), nullable=False, index=True)
    gateway = Column(String(50), nullable=False)
    gateway_transaction_id = Column(String(120), unique=True, nullable=False)
    payment_method = Column(String(20), nullable=False)
    amount_cents = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False)
    gateway_payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


class TrainingModel(Base):
    __tablename__ = "trainings"

    id = Column(ID, primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    youtube_url = Column(String(500), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


# =============================================================================
# TOURNAMENTS
# =============================================================================

class TournamentModel(Base):
    __tablename__ = "tournaments"

    id = Column(ID, primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)
    registration_start_date = Column(DateTime(timezone=True), nullable=False)
    registration_end_date = Column(DateTime(timezone=True), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    version = Column(Integer, nullable=False, default=1)

    registrations = relationship(
        "RegistrationModel",
        back_populates="tournament",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="RegistrationModel.created_at",
    )

    __mapper_args__ = {"version_id_col": version}


class RegistrationModel(Base):
    __tablename__ = "registrations"

    id = Column(ID, primary_key=True)
    tournament_id = Column(ID, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True)
    competitor_id = Column(ID, ForeignKey("dependants.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False)
    type = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    tournament = relationship("TournamentModel", back_populates="registrations")
    sync = relationship(
        "RegistrationSyncModel",
        back_populates="registration",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class RegistrationSyncModel(Base):
    __tablename__ = "registration_syncs"

    id = Column(ID, primary_key=True)
    registration_id = Column(
        ID, ForeignKey("registrations.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    status = Column(String(20), nullable=False)
    attempts = Column(Integer, nullable=False, default=0)
    last_attempt_at = Column(DateTime(timezone=True), nullable=True)
    next_attempt_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    registration = relationship("RegistrationModel", back_populates="sync")
