# 📄 File: app/modules/membership/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Checks who is calling the API (from the token they send) and whether they are allowed
# to use an admin or club-owner endpoint, and hands each endpoint the wired-up services.
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies: container lookup on ``app.state``, HTTPBearer token resolution
# through the container's TokenService into a CurrentUser, and role guards built by the
# ``require_role`` factory.
# 🔗 Dependencies:
# FastAPI (Depends, Request, HTTPBearer), app.shared.core.security, app.shared.core.exceptions,
# app.modules.membership.container
# 🔄 Connected Modules / Calls From:
# app.modules.membership.presentation.api.v1.* endpoints

import logging
from typing import List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.shared.core.exceptions import ForbiddenError, UnauthorizedError
from app.shared.core.security import TokenPayload

from ..container import MembershipContainer
from ..domain.models import UserRole

logger = logging.getLogger(__name__)

# auto_error disabled so a missing header goes through the 401 error body
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """User information extracted from the access token."""

    def __init__(
        self,
        user_id: str,
        email: str,
        roles: Optional[List[str]] = None,
        family_id: Optional[str] = None,
    ):
        self.user_id = user_id
        self.email = email
        self.roles = roles or [UserRole.SEM_FUNCAO.value]
        self.family_id = family_id

    @classmethod
    def from_token(cls, payload: TokenPayload) -> "CurrentUser":
        return cls(
            user_id=payload.sub,
            email=payload.email,
            roles=list(payload.roles),
            family_id=payload.family_id,
        )

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN.value)


def get_container(request: Request) -> MembershipContainer:
    """The membership container attached to the application at startup."""
    return request.app.state.container


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    container: MembershipContainer = Depends(get_container),
) -> CurrentUser:
    """
    Resolve the caller from the Bearer access token.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")

    payload = container.token_service.verify_access_token(credentials.credentials)
    current_user = CurrentUser.from_token(payload)
    request.state.user_id = current_user.user_id
    logger.debug(f"Current user retrieved: {current_user.user_id}")
    return current_user


def require_role(required_role: UserRole):
    """
    Dependency factory for role-based authorization.

    Args:
        required_role: Role the caller's token must carry

    Returns:
        function: Dependency function
    """
    async def role_dependency(
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if not current_user.has_role(required_role.value):
            logger.warning(f"User {current_user.user_id} lacks required role: {required_role.value}")
            raise ForbiddenError(
                f"Access denied. Required role: {required_role.value}",
                user_id=current_user.user_id,
            )
        return current_user

    return role_dependency


get_current_admin_user = require_role(UserRole.ADMIN)
get_current_club_owner = require_role(UserRole.DONO_DE_CLUBE)
