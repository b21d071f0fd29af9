# 📄 File: app/modules/membership/application/commands/auth_commands.py
# 🧭 Purpose (Layman Explanation):
# Forms for signing in with e-mail and password, and for swapping an old sign-in
# ticket (refresh token) for a new pair.
#
# 🧪 Purpose (Technical Summary):
# CQRS commands for credential login and refresh-token rotation.
#
# 🔗 Dependencies:
# - pydantic (EmailStr needs email-validator)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.auth_handlers
# - app.modules.membership.presentation.api.v1.auth

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshTokenCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    refresh_token: str = Field(..., min_length=1)
