# 📄 File: app/modules/membership/application/handlers/user_handlers.py
# 🧭 Purpose (Layman Explanation):
# The "action processors" for people: signing up a new family holder, adding or removing
# dependants of the family, and letting admins change what a user may do.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers for user registration (user and NOT_AFFILIATED family created
# atomically), dependant management and role administration through the immutable
# role-set operations of the User aggregate.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (User, Family, Dependant, unit of work)
# - app.shared.core.security (HashingService, bcrypt through passlib)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.users / admin
# - app.modules.membership.container (handler wiring)

__all__ = [
    "RegisterUserHandler",
    "AddDependantHandler",
    "DeleteDependantHandler",
    "ManageUserRoleHandler",
]

import logging

from app.shared.core.exceptions import ConflictError, EntityNotFoundError, InvalidOperationError
from app.shared.core.security import HashingService
from app.shared.utils.helpers import IdGenerator

from ...domain.models import Dependant, Family, User
from ...domain.services import UnitOfWork
from ..commands import AddDependantCommand, DeleteDependantCommand, ManageUserRoleCommand, RegisterUserCommand

logger = logging.getLogger(__name__)


class RegisterUserHandler:
    """
    Registers a family holder.

    The e-mail must be unused; the password is validated and hashed by the
    User aggregate. The user's family starts NOT_AFFILIATED.
    """

    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator, hashing_service: HashingService):
        self._uow = uow
        self._id_generator = id_generator
        self._hashing_service = hashing_service

    async def handle(self, command: RegisterUserCommand) -> User:
        async def work() -> User:
            if await self._uow.user_repository.find_by_email(command.email) is not None:
                raise ConflictError(
                    "E-mail already in use.",
                    resource_type="User",
                    conflict_field="email",
                    existing_value=command.email,
                )

            user = User.create(
                id=self._id_generator.generate(),
                first_name=command.first_name,
                last_name=command.last_name,
                email=command.email,
                password=command.password,
                hashing_service=self._hashing_service,
                phone=command.phone,
            )
            await self._uow.user_repository.save(user)
            await self._uow.family_repository.save(
                Family.create(id=self._id_generator.generate(), holder_id=user.id)
            )
            return user

        user = await self._uow.execute_in_transaction(work)
        logger.info(f"User {user.id} registered")
        return user


class AddDependantHandler:
    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator):
        self._uow = uow
        self._id_generator = id_generator

    async def handle(self, command: AddDependantCommand) -> Dependant:
        async def work() -> Dependant:
            family = await self._uow.family_repository.find_by_holder_id(command.logged_in_user_id)
            if family is None:
                raise EntityNotFoundError("Family", message="Family of the logged in user not found")

            dependant = Dependant.create(
                id=self._id_generator.generate(),
                family_id=family.id,
                first_name=command.first_name,
                last_name=command.last_name,
                birthdate=command.birthdate,
                relationship=command.relationship,
                sex=command.sex,
                type=command.type,
                email=command.email,
                phone=command.phone,
            )
            family.add_dependant(dependant)
            await self._uow.family_repository.save(family)
            return dependant

        dependant = await self._uow.execute_in_transaction(work)
        logger.info(f"Dependant {dependant.id} added to family {dependant.family_id}")
        return dependant


class DeleteDependantHandler:
    """
    Removes a dependant from the caller's family.

    A dependant with enrollment requests or tournament registrations stays on
    record; those rows reference it.
    """

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: DeleteDependantCommand) -> None:
        async def work() -> str:
            family = await self._uow.family_repository.find_by_holder_id(command.logged_in_user_id)
            if family is None:
                raise EntityNotFoundError("Family", message="Family of the logged in user not found")
            if not family.has_dependant(command.dependant_id):
                raise EntityNotFoundError("Dependant", command.dependant_id)

            enrollments = await self._uow.enrollment_request_repository.find_by_family(family.id)
            tournaments = await self._uow.tournament_repository.find_all(include_deleted=True)
            if any(e.dependant_id == command.dependant_id for e in enrollments) or any(
                r.competitor_id == command.dependant_id for t in tournaments for r in t.registrations
            ):
                raise InvalidOperationError(
                    "Dependant has enrollments or registrations and cannot be removed.",
                    details={"dependant_id": command.dependant_id},
                )

            family.remove_dependant(command.dependant_id)
            await self._uow.family_repository.save(family)
            return family.id

        family_id = await self._uow.execute_in_transaction(work)
        logger.info(f"Dependant {command.dependant_id} removed from family {family_id}")


class ManageUserRoleHandler:
    """Replaces a user's roles (admin only, enforced at the API)."""

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: ManageUserRoleCommand) -> User:
        async def work() -> User:
            user = await self._uow.user_repository.find(command.user_id)
            if user is None:
                raise EntityNotFoundError("User", command.user_id)
            user.replace_roles(command.roles)
            return await self._uow.user_repository.save(user)

        user = await self._uow.execute_in_transaction(work)
        logger.info(f"Roles of user {user.id} set to {sorted(r.value for r in user.roles)}")
        return user
