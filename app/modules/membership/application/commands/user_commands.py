# 📄 File: app/modules/membership/application/commands/user_commands.py
# 🧭 Purpose (Layman Explanation):
# Forms to sign up a new family holder, add a child (or spouse) to the family, and for
# admins to change what a user is allowed to do.
#
# 🧪 Purpose (Technical Summary):
# CQRS commands for user registration, dependant management and role administration.
#
# 🔗 Dependencies:
# - pydantic (EmailStr needs email-validator)
# - domain enums
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.user_handlers
# - app.modules.membership.presentation.api.v1.users

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from ...domain.models import DependantRelationship, DependantType, Sex, UserRole


class RegisterUserCommand(BaseModel):
    first_name: str = Field(..., examples=["Maria"])
    last_name: str = Field(..., examples=["Silva"])
    email: EmailStr = Field(..., examples=["maria@example.com"])
    password: str = Field(..., description="Raw password, hashed with bcrypt", examples=["Secret123"])
    phone: Optional[str] = None


class AddDependantCommand(BaseModel):
    logged_in_user_id: str
    first_name: str
    last_name: str
    birthdate: date
    relationship: DependantRelationship
    sex: Sex
    type: DependantType = DependantType.STUDENT
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class ManageUserRoleCommand(BaseModel):
    user_id: str
    roles: List[UserRole] = Field(..., description="Full new role list; the default role is always kept")


class DeleteDependantCommand(BaseModel):
    logged_in_user_id: str
    dependant_id: str
