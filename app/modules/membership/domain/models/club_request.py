# 📄 File: app/modules/membership/domain/models/club_request.py
# 🧭 Purpose (Layman Explanation):
# A request from a member who wants to open a club. An admin either approves it
# (and the club gets created in the background) or rejects it with a reason.
# 🧪 Purpose (Technical Summary):
# ClubRequest aggregate: PENDING -> APPROVED | REJECTED, both terminal. Guards leave
# the state untouched when they fail; ``resolved_at`` is written exactly once.
# 🔗 Dependencies:
# pydantic, address.py, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# create/approve/reject club request handlers, create_club handler, repositories

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import DomainValidationError, InvalidOperationError
from app.shared.utils.helpers import utc_now

from .address import Address

MIN_REJECTION_REASON_LENGTH = 10


def check_rejection_reason(reason: Optional[str]) -> str:
    """
    Validate a rejection reason shared by club and enrollment requests.

    Raises:
        DomainValidationError: If the reason is shorter than 10 characters
    """
    if reason is None or len(reason) < MIN_REJECTION_REASON_LENGTH:
        raise DomainValidationError(
            f"Rejection reason must have at least {MIN_REJECTION_REASON_LENGTH} characters.",
            field="reason",
        )
    return reason


class ClubRequestStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ClubRequest(BaseModel):
    """Request to create a club, resolved once by an admin."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    club_name: str
    address: Address
    max_members: Optional[int] = None
    requester_id: str
    status: ClubRequestStatus = ClubRequestStatus.PENDING
    requested_at: datetime = Field(default_factory=utc_now)
    resolved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    @classmethod
    def create(
        cls,
        id: str,
        club_name: str,
        requester_id: str,
        address: Address,
        max_members: Optional[int] = None,
    ) -> "ClubRequest":
        """
        Open a new PENDING request.

        Raises:
            DomainValidationError: If the club name is too short or the
                member cap is below 1
        """
        if not club_name or len(club_name.strip()) < 3:
            raise DomainValidationError(
                "Club name is required and must have at least 3 characters.", field="club_name"
            )
        if max_members is not None and max_members < 1:
            raise DomainValidationError("Max members must be at least 1.", field="max_members")

        return cls(
            id=id,
            club_name=club_name.strip(),
            requester_id=requester_id,
            address=address,
            max_members=max_members,
            status=ClubRequestStatus.PENDING,
            resolved_at=None,
            rejection_reason=None,
        )

    def is_pending(self) -> bool:
        return self.status == ClubRequestStatus.PENDING

    def approve(self) -> None:
        """
        Approve a PENDING request.

        Raises:
            InvalidOperationError: If the request was already resolved
        """
        self._ensure_pending("approve")
        self.status = ClubRequestStatus.APPROVED
        self.resolved_at = utc_now()

    def reject(self, reason: str) -> None:
        """
        Reject a PENDING request with a reason of at least 10 characters.

        Raises:
            InvalidOperationError: If the request was already resolved
            DomainValidationError: If the reason is too short
        """
        self._ensure_pending("reject")
        reason = check_rejection_reason(reason)
        self.status = ClubRequestStatus.REJECTED
        self.resolved_at = utc_now()
        self.rejection_reason = reason

    def _ensure_pending(self, action: str) -> None:
        if not self.is_pending():
            raise InvalidOperationError(
                f"Cannot {action} a club request with status {self.status.value}.",
                details={"club_request_id": self.id, "status": self.status.value},
            )
