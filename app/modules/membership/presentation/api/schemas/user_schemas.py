# 📄 File: app/modules/membership/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# The data formats for signing up, signing in, adding children or associates to a family, and
# changing what a user is allowed to do.
# 🧪 Purpose (Technical Summary):
# Request/response schemas for the user, auth, dependant and role endpoints. Responses never
# expose the password hash.
# 🔗 Dependencies:
# pydantic, common.CamelModel, membership domain enums
# 🔄 Connected Modules / Calls From:
# app.modules.membership.presentation.api.v1.users, auth, admin

from datetime import date, datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from ....domain.models import DependantRelationship, DependantType, Sex, UserRole
from .common import CamelModel


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class RegisterUserRequest(CamelModel):
    first_name: str = Field(..., min_length=1, examples=["Maria"])
    last_name: str = Field(..., min_length=1, examples=["Silva"])
    email: EmailStr = Field(..., examples=["maria@example.com"])
    password: str = Field(..., min_length=8, examples=["Secret123"])
    phone: Optional[str] = Field(default=None, examples=["+55 19 99999-0000"])


class AddDependantRequest(CamelModel):
    first_name: str = Field(..., min_length=1, examples=["Pedro"])
    last_name: str = Field(..., min_length=1, examples=["Silva"])
    birthdate: date = Field(..., examples=["2012-05-20"])
    relationship: DependantRelationship
    sex: Sex
    type: DependantType = DependantType.STUDENT
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr = Field(..., examples=["maria@example.com"])
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class ManageUserRoleRequest(CamelModel):
    roles: List[UserRole] = Field(..., min_length=1, description="Full new role list")


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class UserResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: EmailStr
    phone: Optional[str] = None
    roles: List[UserRole]
    created_at: datetime


class TokenResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class DependantResponse(CamelModel):
    id: str
    family_id: str
    first_name: str
    last_name: str
    birthdate: date
    relationship: DependantRelationship
    sex: Sex
    type: DependantType
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
