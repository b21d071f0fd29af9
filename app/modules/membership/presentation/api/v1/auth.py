# 📄 File: app/modules/membership/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The sign-in endpoints: trade e-mail and password for access tickets, and trade an
# old refresh ticket for a new pair.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints for LoginCommand / RefreshTokenCommand. Both answer 200 with a
# camelCase token pair; bad credentials surface as 401 through the global handlers.
#
# 🔗 Dependencies:
# - FastAPI router
# - app.modules.membership.application.commands
# - app.modules.membership.presentation (schemas, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

import logging

from fastapi import APIRouter, Depends

from ....application.commands import LoginCommand, RefreshTokenCommand
from ....container import MembershipContainer
from ...dependencies import get_container
from ..schemas import LoginRequest, RefreshTokenRequest, TokenResponse

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth")


@auth_router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in",
    description="Exchange e-mail and password for an access/refresh token pair",
    responses={
        200: {"description": "Tokens issued"},
        401: {"description": "Invalid e-mail or password"},
    },
)
async def login(
    body: LoginRequest,
    container: MembershipContainer = Depends(get_container),
) -> TokenResponse:
    tokens = await container.login.handle(LoginCommand(email=body.email, password=body.password))
    return TokenResponse(access_token=tokens.access_token, refresh_token=tokens.refresh_token)


@auth_router.post(
    "/refresh-token",
    response_model=TokenResponse,
    summary="Refresh tokens",
    description="Sign a new pair carrying the user's current roles",
)
async def refresh_token(
    body: RefreshTokenRequest,
    container: MembershipContainer = Depends(get_container),
) -> TokenResponse:
    tokens = await container.refresh_token.handle(RefreshTokenCommand(refresh_token=body.refresh_token))
    return TokenResponse(access_token=tokens.access_token, refresh_token=tokens.refresh_token)
