# 📄 File: app/modules/membership/application/commands/club_request_commands.py
# 🧭 Purpose (Layman Explanation):
# The "forms" a user fills to ask for a new club, and the ones an admin fills to accept
# or refuse that request.
#
# 🧪 Purpose (Technical Summary):
# CQRS commands for the club request lifecycle: create, approve, reject, and the
# event-driven create-club step triggered by an approval.
#
# 🔗 Dependencies:
# - pydantic for command validation
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.club_request_handlers
# - app.modules.membership.application.listeners.club_listeners
# - app.modules.membership.presentation.api.v1.club_requests

"""
Club Request Commands

- CreateClubRequestCommand: a holder asks to open a club
- ApproveClubRequestCommand / RejectClubRequestCommand: admin decision
- CreateClubCommand: issued by the queue listener once an approval is delivered
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AddressInput(BaseModel):
    """Raw address fields, validated by the Address value object."""

    street: str = Field(..., examples=["Rua das Flores"])
    number: str = Field(default="", examples=["123"])
    district: str = Field(default="", examples=["Centro"])
    city: str = Field(..., examples=["Campinas"])
    state: str = Field(..., examples=["SP"])
    zip_code: str = Field(..., examples=["13010-100"])
    complement: Optional[str] = None


class CreateClubRequestCommand(BaseModel):
    requester_id: str
    club_name: str = Field(..., description="Desired club name", examples=["Clube X"])
    address: AddressInput
    max_members: Optional[int] = Field(default=None, description="Member cap, none for unlimited")


class ApproveClubRequestCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    club_request_id: str


class RejectClubRequestCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    club_request_id: str
    reason: str = Field(..., description="At least 10 characters")


class CreateClubCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    request_id: str = Field(..., description="Approved club request id")
