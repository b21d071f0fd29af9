# 📄 File: app/modules/membership/application/commands/enrollment_commands.py
# 🧭 Purpose (Layman Explanation):
# The forms used to put a dependant in a club: the family asks, the club owner accepts,
# refuses, or later removes the member.
#
# 🧪 Purpose (Technical Summary):
# CQRS commands for the EnrollmentRequest lifecycle. ``logged_in_user_id`` always comes
# from the verified access token, never from the request body.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.enrollment_handlers
# - app.modules.membership.presentation.api.v1.enrollments / club_management

from pydantic import BaseModel, ConfigDict, Field


class RequestEnrollmentCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str
    dependant_id: str
    club_id: str


class ApproveEnrollmentCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str
    enrollment_request_id: str


class RejectEnrollmentCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str
    enrollment_request_id: str
    reason: str = Field(..., description="At least 10 characters")


class RemoveClubMemberCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str
    enrollment_request_id: str
