# 📄 File: app/modules/membership/presentation/api/v1/club_management.py
# 🧭 Purpose (Layman Explanation):
# The club owner's desk: see who is waiting to join, accept or refuse them, remove
# members, and list the current members.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints guarded by the club owner role. Ownership of the specific club is
# checked again by the handlers against ``Club.principal_id``.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.membership.application (commands, queries)
# - app.modules.membership.presentation (schemas, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

import logging
from typing import List

from fastapi import APIRouter, Depends

from ....application.commands import (
    ApproveEnrollmentCommand,
    RejectEnrollmentCommand,
    RemoveClubMemberCommand,
)
from ....application.queries import ListClubMembersQuery, ListPendingEnrollmentsQuery
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_club_owner
from ..schemas import ClubMemberResponse, EnrollmentResponse, MembershipResponse, RejectRequest

logger = logging.getLogger(__name__)

club_management_router = APIRouter(prefix="/club-management")


@club_management_router.get(
    "/enrollments",
    response_model=List[EnrollmentResponse],
    summary="Pending enrollments of my club",
)
async def list_pending_enrollments(
    owner: CurrentUser = Depends(get_current_club_owner),
    container: MembershipContainer = Depends(get_container),
) -> List[EnrollmentResponse]:
    enrollments = await container.list_pending_enrollments.handle(
        ListPendingEnrollmentsQuery(logged_in_user_id=owner.user_id)
    )
    return [EnrollmentResponse.model_validate(e) for e in enrollments]


@club_management_router.post(
    "/enrollments/{enrollment_request_id}/approve",
    response_model=MembershipResponse,
    summary="Approve enrollment",
    responses={
        200: {"description": "Membership active"},
        400: {"description": "Enrollment not PENDING or club full"},
        403: {"description": "Caller is not the club principal"},
    },
)
async def approve_enrollment(
    enrollment_request_id: str,
    owner: CurrentUser = Depends(get_current_club_owner),
    container: MembershipContainer = Depends(get_container),
) -> MembershipResponse:
    membership = await container.approve_enrollment.handle(
        ApproveEnrollmentCommand(logged_in_user_id=owner.user_id, enrollment_request_id=enrollment_request_id)
    )
    return MembershipResponse.model_validate(membership)


@club_management_router.post(
    "/enrollments/{enrollment_request_id}/reject",
    response_model=EnrollmentResponse,
    summary="Reject enrollment",
)
async def reject_enrollment(
    enrollment_request_id: str,
    body: RejectRequest,
    owner: CurrentUser = Depends(get_current_club_owner),
    container: MembershipContainer = Depends(get_container),
) -> EnrollmentResponse:
    enrollment = await container.reject_enrollment.handle(
        RejectEnrollmentCommand(
            logged_in_user_id=owner.user_id,
            enrollment_request_id=enrollment_request_id,
            reason=body.reason,
        )
    )
    return EnrollmentResponse.model_validate(enrollment)


@club_management_router.delete(
    "/enrollments/{enrollment_request_id}",
    response_model=EnrollmentResponse,
    summary="Remove club member",
    description="Revoke an APPROVED enrollment and the membership it granted",
)
async def remove_club_member(
    enrollment_request_id: str,
    owner: CurrentUser = Depends(get_current_club_owner),
    container: MembershipContainer = Depends(get_container),
) -> EnrollmentResponse:
    enrollment = await container.remove_club_member.handle(
        RemoveClubMemberCommand(logged_in_user_id=owner.user_id, enrollment_request_id=enrollment_request_id)
    )
    logger.info(f"Club owner {owner.user_id} removed member {enrollment.dependant_id}")
    return EnrollmentResponse.model_validate(enrollment)


@club_management_router.get(
    "/members",
    response_model=List[ClubMemberResponse],
    summary="Members of my club",
)
async def list_members(
    owner: CurrentUser = Depends(get_current_club_owner),
    container: MembershipContainer = Depends(get_container),
) -> List[ClubMemberResponse]:
    members = await container.list_club_members.handle(ListClubMembersQuery(logged_in_user_id=owner.user_id))
    return [
        ClubMemberResponse(
            membership_id=view.membership.id,
            dependant_id=view.dependant.id,
            family_id=view.membership.family_id,
            first_name=view.dependant.first_name,
            last_name=view.dependant.last_name,
            birthdate=view.dependant.birthdate,
            member_since=view.membership.created_at,
        )
        for view in members
    ]
