# 📄 File: app/modules/membership/domain/models/enrollment_request.py
# 🧭 Purpose (Layman Explanation):
# A family's request to enroll one of its dependants in a club. The club principal
# approves or rejects it, and may later remove an approved member.
# 🧪 Purpose (Technical Summary):
# EnrollmentRequest aggregate: PENDING -> APPROVED | REJECTED, APPROVED -> REVOKED.
# Every transition is guarded; a failed guard leaves the state untouched.
# 🔗 Dependencies:
# pydantic, club_request.py (shared rejection rule), app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# request/approve/reject enrollment and remove club member handlers, repositories

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import InvalidOperationError
from app.shared.utils.helpers import utc_now

from .club_request import check_rejection_reason


class EnrollmentStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    REVOKED = "REVOKED"


class EnrollmentRequest(BaseModel):
    """Enrollment of a dependant in a club."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    family_id: str
    dependant_id: str
    club_id: str
    status: EnrollmentStatus = EnrollmentStatus.PENDING
    requested_at: datetime = Field(default_factory=utc_now)
    resolved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    @classmethod
    def create(cls, id: str, family_id: str, dependant_id: str, club_id: str) -> "EnrollmentRequest":
        return cls(
            id=id,
            family_id=family_id,
            dependant_id=dependant_id,
            club_id=club_id,
            status=EnrollmentStatus.PENDING,
        )

    def is_pending(self) -> bool:
        return self.status == EnrollmentStatus.PENDING

    def approve(self) -> None:
        """
        Approve a PENDING enrollment.

        Raises:
            InvalidOperationError: If the enrollment was already resolved
        """
        self._ensure_status(EnrollmentStatus.PENDING, "approve")
        self.status = EnrollmentStatus.APPROVED
        self.resolved_at = utc_now()

    def reject(self, reason: str) -> None:
        """
        Reject a PENDING enrollment with a reason of at least 10 characters.

        Raises:
            InvalidOperationError: If the enrollment was already resolved
            DomainValidationError: If the reason is too short
        """
        self._ensure_status(EnrollmentStatus.PENDING, "reject")
        reason = check_rejection_reason(reason)
        self.status = EnrollmentStatus.REJECTED
        self.resolved_at = utc_now()
        self.rejection_reason = reason

    def revoke(self) -> None:
        """
        Revoke an APPROVED enrollment (member removed from the club).

        ``resolved_at`` keeps the approval time.

        Raises:
            InvalidOperationError: If the enrollment is not APPROVED
        """
        self._ensure_status(EnrollmentStatus.APPROVED, "revoke")
        self.status = EnrollmentStatus.REVOKED

    def _ensure_status(self, expected: EnrollmentStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidOperationError(
                f"Cannot {action} an enrollment request with status {self.status.value}.",
                details={"enrollment_request_id": self.id, "status": self.status.value},
            )
