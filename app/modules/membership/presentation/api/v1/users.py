# 📄 File: app/modules/membership/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for signing up as a family holder and adding or removing children
# or associates of the family.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints translating requests into RegisterUser / AddDependant /
# DeleteDependant commands.
# Domain exceptions propagate to the global exception handlers.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.membership.application.commands
# - app.modules.membership.presentation.api.schemas
# - app.modules.membership.presentation.dependencies
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

import logging

from fastapi import APIRouter, Depends, Response, status

from ....application.commands import AddDependantCommand, DeleteDependantCommand, RegisterUserCommand
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_user
from ..schemas import AddDependantRequest, DependantResponse, RegisterUserRequest, UserResponse

logger = logging.getLogger(__name__)

users_router = APIRouter()


@users_router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Create a family holder account together with its (not yet affiliated) family",
    responses={
        201: {"description": "User registered"},
        409: {"description": "E-mail already in use"},
        422: {"description": "Validation error"},
    },
)
async def register_user(
    body: RegisterUserRequest,
    container: MembershipContainer = Depends(get_container),
) -> UserResponse:
    user = await container.register_user.handle(RegisterUserCommand(**body.model_dump()))
    return UserResponse.model_validate(user)


@users_router.post(
    "/dependants",
    response_model=DependantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add dependant",
    description="Add a dependant to the caller's family",
)
async def add_dependant(
    body: AddDependantRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> DependantResponse:
    dependant = await container.add_dependant.handle(
        AddDependantCommand(logged_in_user_id=current_user.user_id, **body.model_dump())
    )
    return DependantResponse.model_validate(dependant)


@users_router.delete(
    "/dependants/{dependant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove dependant",
    description="Remove a dependant with no enrollment or tournament history from the caller's family",
)
async def delete_dependant(
    dependant_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> Response:
    await container.delete_dependant.handle(
        DeleteDependantCommand(logged_in_user_id=current_user.user_id, dependant_id=dependant_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
