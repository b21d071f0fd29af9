# 📄 File: app/modules/membership/domain/models/club.py
# 🧭 Purpose (Layman Explanation):
# A club run by one principal (its owner), with an address and an optional limit
# on how many members it may have.
# 🧪 Purpose (Technical Summary):
# Club aggregate. ``corum`` is derived by the repository from ACTIVE memberships
# and is not persisted; capacity checks compare it with ``max_members``.
# 🔗 Dependencies:
# pydantic, address.py, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# create_club, request_enrollment, approve_enrollment handlers, club repositories

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import DomainValidationError
from app.shared.utils.helpers import utc_now

from .address import Address
from .club_request import ClubRequest


class Club(BaseModel):
    """Club aggregate owned by exactly one principal."""

    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str
    principal_id: str
    address: Address
    max_members: Optional[int] = None
    corum: int = Field(default=0, ge=0, description="Active members, derived on load")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        principal_id: str,
        address: Address,
        max_members: Optional[int] = None,
    ) -> "Club":
        """
        Create a new club.

        Raises:
            DomainValidationError: If the name is shorter than 3 characters
                or the member cap is below 1
        """
        if not name or len(name.strip()) < 3:
            raise DomainValidationError(
                "Club name is required and must have at least 3 characters.", field="name"
            )
        if max_members is not None and max_members < 1:
            raise DomainValidationError("Max members must be at least 1.", field="max_members")
        if not principal_id:
            raise DomainValidationError("Club principal is required.", field="principal_id")

        return cls(
            id=id,
            name=name.strip(),
            principal_id=principal_id,
            address=address,
            max_members=max_members,
        )

    @classmethod
    def from_request(cls, id: str, request: ClubRequest) -> "Club":
        return cls.create(
            id=id,
            name=request.club_name,
            principal_id=request.requester_id,
            address=request.address,
            max_members=request.max_members,
        )

    def is_at_max_capacity(self) -> bool:
        """True when no further ACTIVE membership fits under ``max_members``."""
        return self.max_members is not None and self.corum >= self.max_members

    def is_principal(self, user_id: str) -> bool:
        return self.principal_id == user_id
