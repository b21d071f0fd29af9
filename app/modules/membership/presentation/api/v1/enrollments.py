# 📄 File: app/modules/membership/presentation/api/v1/enrollments.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints a family uses to ask for a spot in a club for one of its dependants
# and to see how those requests are going.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints for RequestEnrollment and the caller family's enrollment requests.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.membership.application (commands, queries)
# - app.modules.membership.presentation (schemas, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

from typing import List

from fastapi import APIRouter, Depends, status

from ....application.commands import RequestEnrollmentCommand
from ....application.queries import ListMyEnrollmentRequestsQuery
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_user
from ..schemas import EnrollmentResponse, RequestEnrollmentRequest

enrollments_router = APIRouter(prefix="/enrollments")


@enrollments_router.post(
    "",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request enrollment",
    responses={
        201: {"description": "Enrollment stored as PENDING"},
        400: {"description": "Family not affiliated, duplicate request or club full"},
        403: {"description": "Dependant is not part of the caller's family"},
        404: {"description": "Family or club not found"},
    },
)
async def request_enrollment(
    body: RequestEnrollmentRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> EnrollmentResponse:
    enrollment = await container.request_enrollment.handle(
        RequestEnrollmentCommand(
            logged_in_user_id=current_user.user_id,
            dependant_id=body.dependant_id,
            club_id=body.club_id,
        )
    )
    return EnrollmentResponse.model_validate(enrollment)


@enrollments_router.get(
    "/me",
    response_model=List[EnrollmentResponse],
    summary="My family's enrollment requests",
)
async def list_my_enrollments(
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> List[EnrollmentResponse]:
    enrollments = await container.list_my_enrollment_requests.handle(
        ListMyEnrollmentRequestsQuery(logged_in_user_id=current_user.user_id)
    )
    return [EnrollmentResponse.model_validate(e) for e in enrollments]
