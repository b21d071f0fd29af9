# 📄 File: app/modules/membership/presentation/api/v1/club_requests.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints a family holder uses to ask for a new club and to follow up on
# their requests.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints for CreateClubRequest and the caller's own club requests.
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

from fastapi import APIRouter, Depends, status

from ....application.commands import AddressInput, CreateClubRequestCommand
from ....application.queries import GetUserClubRequestsQuery
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_user
from ..schemas import ClubRequestResponse, CreateClubRequestRequest

logger = logging.getLogger(__name__)

club_requests_router = APIRouter(prefix="/club-requests")


@club_requests_router.post(
    "",
    response_model=ClubRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a club",
    description="Ask the administrators to open a new club run by the caller",
    responses={
        201: {"description": "Club request stored as PENDING"},
        400: {"description": "Caller already owns a club"},
        409: {"description": "Caller already has a pending request"},
    },
)
async def create_club_request(
    body: CreateClubRequestRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> ClubRequestResponse:
    command = CreateClubRequestCommand(
        requester_id=current_user.user_id,
        club_name=body.club_name,
        address=AddressInput(**body.address.model_dump()),
        max_members=body.max_members,
    )
    request = await container.create_club_request.handle(command)
    return ClubRequestResponse.model_validate(request)


@club_requests_router.get(
    "/me",
    response_model=List[ClubRequestResponse],
    summary="My club requests",
)
async def list_my_club_requests(
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> List[ClubRequestResponse]:
    requests = await container.get_user_club_requests.handle(
        GetUserClubRequestsQuery(user_id=current_user.user_id)
    )
    return [ClubRequestResponse.model_validate(r) for r in requests]
