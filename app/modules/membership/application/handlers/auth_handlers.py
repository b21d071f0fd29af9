# 📄 File: app/modules/membership/application/handlers/auth_handlers.py
# 🧭 Purpose (Layman Explanation):
# Signs people in: checks their e-mail and password and hands out the access and
# refresh tickets (tokens) every other endpoint asks for.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers for credential login and refresh-token rotation. Both sign a
# fresh pair from the user's current roles and family, so a refresh after a role
# grant (for example after a club was created) carries the new role.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (User, unit of work)
# - app.shared.core.security (HashingService, TokenService)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.auth
# - app.modules.membership.container (handler wiring)

__all__ = ["LoginHandler", "RefreshTokenHandler"]

import logging
from typing import Optional, Tuple

from app.shared.core.exceptions import UnauthorizedError
from app.shared.core.security import HashingService, TokenPair, TokenService

from ...domain.models import User
from ...domain.services import UnitOfWork
from ..commands import LoginCommand, RefreshTokenCommand

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid e-mail or password"


class LoginHandler:
    """
    Exchanges e-mail and password for a token pair.

    Unknown e-mails and wrong passwords get the same 401.
    """

    def __init__(self, uow: UnitOfWork, hashing_service: HashingService, token_service: TokenService):
        self._uow = uow
        self._hashing_service = hashing_service
        self._token_service = token_service

    async def handle(self, command: LoginCommand) -> TokenPair:
        async def work() -> Tuple[Optional[User], Optional[str]]:
            user = await self._uow.user_repository.find_by_email(command.email)
            if user is None:
                return None, None
            family = await self._uow.family_repository.find_by_holder_id(user.id)
            return user, family.id if family else None

        user, family_id = await self._uow.execute_in_transaction(work)
        if user is None or not user.check_password(command.password, self._hashing_service):
            logger.warning(f"Failed login for {command.email}")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info(f"User {user.id} logged in")
        return self._token_service.issue_pair(user.token_payload(family_id))


class RefreshTokenHandler:
    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self._uow = uow
        self._token_service = token_service

    async def handle(self, command: RefreshTokenCommand) -> TokenPair:
        """
        Verify a refresh token and sign a new pair.

        Raises:
            UnauthorizedError: If the token is invalid, is an access token, or
                its user no longer exists
        """
        claims = self._token_service.verify_refresh_token(command.refresh_token)

        async def work() -> Tuple[Optional[User], Optional[str]]:
            user = await self._uow.user_repository.find(claims.sub)
            if user is None:
                return None, None
            family = await self._uow.family_repository.find_by_holder_id(user.id)
            return user, family.id if family else None

        user, family_id = await self._uow.execute_in_transaction(work)
        if user is None:
            logger.warning(f"Refresh token for unknown user {claims.sub}")
            raise UnauthorizedError("Could not validate credentials")

        return self._token_service.issue_pair(user.token_payload(family_id))
