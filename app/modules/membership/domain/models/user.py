# 📄 File: app/modules/membership/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in the membership system: name, e-mail, a hashed password
# and the roles that say what the person may do (plain member, club owner, admin).
# 🧪 Purpose (Technical Summary):
# User aggregate with an immutable role set. Role changes go through validated
# replace/assign/revoke operations that keep the default role present and reject
# duplicates; passwords are only ever stored as a hash produced by HashingService.
# 🔗 Dependencies:
# pydantic, app.shared.core.security (HashingService), app.shared.utils.validators
# 🔄 Connected Modules / Calls From:
# register_user, create_club, manage_user_role handlers, user repositories

from datetime import datetime
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.shared.core.exceptions import DomainValidationError
from app.shared.core.security import HashingService, TokenPayload
from app.shared.utils.helpers import utc_now
from app.shared.utils.validators import validate_password, validate_text_content


class UserRole(str, Enum):
    """User role enumeration"""
    SEM_FUNCAO = "SEM_FUNCAO"          # default role held by every user
    DONO_DE_CLUBE = "DONO_DE_CLUBE"    # club owner / principal
    ADMIN = "ADMIN"


DEFAULT_ROLE = UserRole.SEM_FUNCAO


class User(BaseModel):
    """
    User domain model.

    Roles are a frozenset that always contains ``DEFAULT_ROLE``. The set is
    never mutated in place: every role operation validates and assigns a new
    set.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    first_name: str
    last_name: str
    email: EmailStr
    phone: Optional[str] = None
    password_hash: str
    roles: FrozenSet[UserRole] = Field(default_factory=lambda: frozenset({DEFAULT_ROLE}))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("roles")
    @classmethod
    def keep_default_role(cls, v: FrozenSet[UserRole]) -> FrozenSet[UserRole]:
        """The default role is part of every valid role set."""
        return frozenset(v) | {DEFAULT_ROLE}

    @classmethod
    def create(
        cls,
        id: str,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        hashing_service: HashingService,
        phone: Optional[str] = None,
        roles: Optional[Iterable[UserRole]] = None,
    ) -> "User":
        """
        Register a new user, hashing the raw password.

        Args:
            id: Identifier from the id generator
            first_name: Given name (at least 2 characters)
            last_name: Family name (at least 2 characters)
            email: Login e-mail
            password: Raw password, validated then hashed
            hashing_service: Hashing implementation
            phone: Optional phone number
            roles: Extra roles on top of the default one

        Returns:
            User: New user entity

        Raises:
            DomainValidationError: If names or the password are invalid
        """
        for field, value in (("first_name", first_name), ("last_name", last_name)):
            result = validate_text_content(value, field.replace("_", " ").capitalize(), min_length=2, max_length=100)
            if not result.is_valid:
                raise DomainValidationError(result.first_error, field=field)

        password_check = validate_password(password)
        if not password_check.is_valid:
            raise DomainValidationError(password_check.first_error, field="password")

        return cls(
            id=id,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email,
            phone=phone,
            password_hash=hashing_service.hash(password),
            roles=cls._validated_roles(roles or []),
        )

    # =========================================================================
    # ROLES
    # =========================================================================

    @staticmethod
    def _validated_roles(roles: Iterable[UserRole]) -> FrozenSet[UserRole]:
        role_list = [UserRole(role) for role in roles]
        if len(role_list) != len(set(role_list)):
            raise DomainValidationError("Cannot assign duplicated roles.", field="roles")
        return frozenset(role_list) | {DEFAULT_ROLE}

    def has_role(self, role: UserRole) -> bool:
        return role in self.roles

    def replace_roles(self, roles: Iterable[UserRole]) -> FrozenSet[UserRole]:
        """
        Replace the whole role set.

        Raises:
            DomainValidationError: If ``roles`` lists the same role twice
        """
        self.roles = self._validated_roles(roles)
        self.updated_at = utc_now()
        return self.roles

    def assign_roles(self, roles: Iterable[UserRole]) -> FrozenSet[UserRole]:
        """Add roles; roles already held are ignored."""
        new_roles = self.roles | frozenset(UserRole(role) for role in roles)
        if new_roles != self.roles:
            self.roles = new_roles
            self.updated_at = utc_now()
        return self.roles

    def revoke_role(self, role: UserRole) -> FrozenSet[UserRole]:
        if role == DEFAULT_ROLE:
            raise DomainValidationError("Cannot revoke the default role.", field="roles")
        if role in self.roles:
            self.roles = self.roles - {role}
            self.updated_at = utc_now()
        return self.roles

    # =========================================================================
    # CREDENTIALS
    # =========================================================================

    def check_password(self, raw_password: str, hashing_service: HashingService) -> bool:
        return hashing_service.compare(raw_password, self.password_hash)

    def token_payload(self, family_id: Optional[str]) -> TokenPayload:
        """Claims for tokens issued to this user."""
        return TokenPayload(
            sub=self.id,
            email=self.email,
            roles=sorted(role.value for role in self.roles),
            family_id=family_id,
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
