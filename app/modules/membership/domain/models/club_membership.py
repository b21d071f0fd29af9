# 📄 File: app/modules/membership/domain/models/club_membership.py
# 🧭 Purpose (Layman Explanation):
# Records that a dependant is (or was) a member of a club.
# 🧪 Purpose (Technical Summary):
# ClubMembership entity, ACTIVE <-> REVOKED. ACTIVE rows are what club capacity
# (``Club.corum``) counts.
# 🔗 Dependencies:
# pydantic, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# approve_enrollment, remove_club_member, request_enrollment handlers, repositories

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import InvalidOperationError
from app.shared.utils.helpers import utc_now


class MembershipStatus(str, Enum):
    ACTIVE = "ACTIVE"
    REVOKED = "REVOKED"


class ClubMembership(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    club_id: str
    member_id: str = Field(..., description="Dependant id")
    family_id: str
    status: MembershipStatus = MembershipStatus.ACTIVE
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def create(cls, id: str, club_id: str, member_id: str, family_id: str) -> "ClubMembership":
        return cls(id=id, club_id=club_id, member_id=member_id, family_id=family_id)

    def is_active(self) -> bool:
        return self.status == MembershipStatus.ACTIVE

    def revoke(self) -> None:
        if not self.is_active():
            raise InvalidOperationError("Membership is already revoked.")
        self.status = MembershipStatus.REVOKED
        self.updated_at = utc_now()

    def reinstate(self) -> None:
        if self.is_active():
            raise InvalidOperationError("Membership is already active.")
        self.status = MembershipStatus.ACTIVE
        self.updated_at = utc_now()
