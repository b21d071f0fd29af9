# 📄 File: app/modules/membership/presentation/api/schemas/club_schemas.py
# 🧭 Purpose (Layman Explanation):
# The data formats for asking to open a club, the admin's decision on it, finding
# clubs, and the club owner's view of enrollments and members.
# 🧪 Purpose (Technical Summary):
# Request/response schemas for club requests, clubs, enrollments and memberships.
# Responses are validated from domain aggregates via ``from_attributes``.
# 🔗 Dependencies:
# pydantic, common.CamelModel, membership domain enums
# 🔄 Connected Modules / Calls From:
# app.modules.membership.presentation.api.v1 (club_requests, admin, clubs,
# enrollments, club_management)

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from ....domain.models import ClubRequestStatus, EnrollmentStatus, MembershipStatus
from .common import CamelModel


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class AddressRequest(CamelModel):
    street: str = Field(..., min_length=1, examples=["Rua das Flores"])
    number: str = Field(default="", examples=["123"])
    district: str = Field(default="", examples=["Centro"])
    city: str = Field(..., min_length=1, examples=["Campinas"])
    state: str = Field(..., min_length=2, max_length=2, examples=["SP"])
    zip_code: str = Field(..., examples=["13010-100"])
    complement: Optional[str] = None


class CreateClubRequestRequest(CamelModel):
    club_name: str = Field(..., min_length=3, examples=["Clube X"])
    address: AddressRequest
    max_members: Optional[int] = Field(default=None, ge=1, examples=[30])


class RejectRequest(CamelModel):
    """Body of every reject endpoint."""

    reason: str = Field(..., description="At least 10 characters", examples=["Missing documents"])


class RequestEnrollmentRequest(CamelModel):
    dependant_id: str
    club_id: str


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class AddressResponse(CamelModel):
    street: str
    number: str
    district: str
    city: str
    state: str
    zip_code: str
    country: str
    complement: Optional[str] = None


class ClubRequestResponse(CamelModel):
    id: str
    club_name: str
    requester_id: str
    address: AddressResponse
    max_members: Optional[int] = None
    status: ClubRequestStatus
    requested_at: datetime
    resolved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


class ClubResponse(CamelModel):
    id: str
    name: str
    principal_id: str
    address: AddressResponse
    max_members: Optional[int] = None
    corum: int
    created_at: datetime


class ClubPageResponse(CamelModel):
    items: List[ClubResponse]
    total: int
    page: int
    limit: int


class EnrollmentResponse(CamelModel):
    id: str
    family_id: str
    dependant_id: str
    club_id: str
    status: EnrollmentStatus
    requested_at: datetime
    resolved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


class MembershipResponse(CamelModel):
    id: str
    club_id: str
    member_id: str
    family_id: str
    status: MembershipStatus
    created_at: datetime


class ClubMemberResponse(CamelModel):
    membership_id: str
    dependant_id: str
    family_id: str
    first_name: str
    last_name: str
    birthdate: date
    member_since: datetime
