# 📄 File: app/modules/membership/presentation/api/v1/admin.py
# 🧭 Purpose (Layman Explanation):
# The administrator's desk: review the clubs people asked to open, approve or refuse
# them, and change what a user is allowed to do.
#
# 🧪 Purpose (Technical Summary):
# Admin-only FastAPI endpoints for the club request decision workflow and role
# management. Approval and rejection publish their events after the commit; the club
# itself is created asynchronously by the club request queue listener.
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
    ApproveClubRequestCommand,
    ManageUserRoleCommand,
    RejectClubRequestCommand,
)
from ....application.queries import ListPendingClubRequestsQuery
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_admin_user
from ..schemas import ClubRequestResponse, ManageUserRoleRequest, RejectRequest, UserResponse

logger = logging.getLogger(__name__)

admin_router = APIRouter(prefix="/admin")


@admin_router.get(
    "/club-requests",
    response_model=List[ClubRequestResponse],
    summary="Pending club requests",
)
async def list_pending_club_requests(
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> List[ClubRequestResponse]:
    requests = await container.list_pending_club_requests.handle(ListPendingClubRequestsQuery())
    return [ClubRequestResponse.model_validate(r) for r in requests]


@admin_router.post(
    "/club-requests/{club_request_id}/approve",
    response_model=ClubRequestResponse,
    summary="Approve club request",
    description="Approve a PENDING request; the club is created in the background",
    responses={
        200: {"description": "Request approved"},
        400: {"description": "Request is not PENDING"},
        404: {"description": "Request not found"},
    },
)
async def approve_club_request(
    club_request_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> ClubRequestResponse:
    request = await container.approve_club_request.handle(
        ApproveClubRequestCommand(club_request_id=club_request_id)
    )
    logger.info(f"Admin {admin.user_id} approved club request {request.id}")
    return ClubRequestResponse.model_validate(request)


@admin_router.post(
    "/club-requests/{club_request_id}/reject",
    response_model=ClubRequestResponse,
    summary="Reject club request",
)
async def reject_club_request(
    club_request_id: str,
    body: RejectRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> ClubRequestResponse:
    request = await container.reject_club_request.handle(
        RejectClubRequestCommand(club_request_id=club_request_id, reason=body.reason)
    )
    logger.info(f"Admin {admin.user_id} rejected club request {request.id}")
    return ClubRequestResponse.model_validate(request)


@admin_router.put(
    "/users/{user_id}/roles",
    response_model=UserResponse,
    summary="Manage user roles",
    description="Replace the roles of a user; the default role is always kept",
)
async def manage_user_roles(
    user_id: str,
    body: ManageUserRoleRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> UserResponse:
    user = await container.manage_user_role.handle(ManageUserRoleCommand(user_id=user_id, roles=body.roles))
    logger.info(f"Admin {admin.user_id} changed roles of user {user.id}")
    return UserResponse.model_validate(user)
