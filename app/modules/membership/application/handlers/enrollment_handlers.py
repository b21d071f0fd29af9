# 📄 File: app/modules/membership/application/handlers/enrollment_handlers.py
# 🧭 Purpose (Layman Explanation):
# The "action processors" for putting dependants in clubs: a family asks for a spot, and
# the club owner accepts, refuses, or later removes the member.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers for the EnrollmentRequest lifecycle. All checks and writes run in
# one unit-of-work transaction. Club capacity counts ACTIVE memberships only and is
# checked both when requesting and when approving. Only the club principal may decide.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (aggregates, unit of work)
# - app.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.enrollments / club_management
# - app.modules.membership.container (handler wiring)

__all__ = [
    "RequestEnrollmentHandler",
    "ApproveEnrollmentHandler",
    "RejectEnrollmentHandler",
    "RemoveClubMemberHandler",
]

import logging
from typing import Tuple

from app.shared.core.exceptions import EntityNotFoundError, ForbiddenError, InvalidOperationError
from app.shared.utils.helpers import IdGenerator

from ...domain.models import Club, ClubMembership, EnrollmentRequest
from ...domain.services import UnitOfWork
from ..commands import (
    ApproveEnrollmentCommand,
    RejectEnrollmentCommand,
    RemoveClubMemberCommand,
    RequestEnrollmentCommand,
)

logger = logging.getLogger(__name__)

CLUB_FULL = "Club has reached its maximum number of members."


async def load_managed_enrollment(
    uow: UnitOfWork, user_id: str, enrollment_request_id: str
) -> Tuple[EnrollmentRequest, Club]:
    """
    Load an enrollment request and its club, checking the caller runs the club.

    Raises:
        EntityNotFoundError: If the request or its club does not exist
        ForbiddenError: If the caller is not the club principal
    """
    enrollment = await uow.enrollment_request_repository.find(enrollment_request_id)
    if enrollment is None:
        raise EntityNotFoundError("EnrollmentRequest", enrollment_request_id)

    club = await uow.club_repository.find(enrollment.club_id)
    if club is None:
        raise EntityNotFoundError("Club", enrollment.club_id)

    if not club.is_principal(user_id):
        raise ForbiddenError(
            "Only the club principal can manage its enrollments.",
            resource_type="Club",
            resource_id=club.id,
            user_id=user_id,
        )
    return enrollment, club


class RequestEnrollmentHandler:
    """
    Creates a PENDING enrollment of a dependant into a club.

    Checks, in order: caller's family exists, dependant belongs to it, club
    exists, family is affiliated, no PENDING request for the pair, no ACTIVE
    membership for the pair, club not at capacity.
    """

    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator):
        self._uow = uow
        self._id_generator = id_generator

    async def handle(self, command: RequestEnrollmentCommand) -> EnrollmentRequest:
        async def work() -> EnrollmentRequest:
            family = await self._uow.family_repository.find_by_holder_id(command.logged_in_user_id)
            if family is None:
                raise EntityNotFoundError("Family", message="Family of the logged in user not found")

            if not family.has_dependant(command.dependant_id):
                raise ForbiddenError(
                    "Dependant does not belong to your family.",
                    resource_type="Dependant",
                    resource_id=command.dependant_id,
                    user_id=command.logged_in_user_id,
                )

            club = await self._uow.club_repository.find(command.club_id)
            if club is None:
                raise EntityNotFoundError("Club", command.club_id)

            if not family.is_affiliated():
                raise InvalidOperationError("Family must be affiliated to request an enrollment.")

            previous = await self._uow.enrollment_request_repository.find_by_dependant_and_club(
                command.dependant_id, club.id
            )
            if any(r.is_pending() for r in previous):
                raise InvalidOperationError("There is already a pending enrollment request for this dependant.")

            membership = await self._uow.club_membership_repository.find_by_member_and_club(
                command.dependant_id, club.id
            )
            if membership is not None and membership.is_active():
                raise InvalidOperationError("Dependant is already a member of this club.")

            if club.is_at_max_capacity():
                raise InvalidOperationError(CLUB_FULL, details={"club_id": club.id, "max_members": club.max_members})

            enrollment = EnrollmentRequest.create(
                id=self._id_generator.generate(),
                family_id=family.id,
                dependant_id=command.dependant_id,
                club_id=club.id,
            )
            return await self._uow.enrollment_request_repository.save(enrollment)

        enrollment = await self._uow.execute_in_transaction(work)
        logger.info(f"Enrollment {enrollment.id} requested for dependant {enrollment.dependant_id}")
        return enrollment


class ApproveEnrollmentHandler:
    """Approves a PENDING enrollment and activates (or reinstates) the membership."""

    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator):
        self._uow = uow
        self._id_generator = id_generator

    async def handle(self, command: ApproveEnrollmentCommand) -> ClubMembership:
        async def work() -> ClubMembership:
            enrollment, club = await load_managed_enrollment(
                self._uow, command.logged_in_user_id, command.enrollment_request_id
            )
            if club.is_at_max_capacity():
                raise InvalidOperationError(CLUB_FULL, details={"club_id": club.id, "max_members": club.max_members})

            enrollment.approve()
            await self._uow.enrollment_request_repository.save(enrollment)

            membership = await self._uow.club_membership_repository.find_by_member_and_club(
                enrollment.dependant_id, club.id
            )
            if membership is None:
                membership = ClubMembership.create(
                    id=self._id_generator.generate(),
                    club_id=club.id,
                    member_id=enrollment.dependant_id,
                    family_id=enrollment.family_id,
                )
            else:
                membership.reinstate()
            return await self._uow.club_membership_repository.save(membership)

        membership = await self._uow.execute_in_transaction(work)
        logger.info(f"Enrollment {command.enrollment_request_id} approved, membership {membership.id} active")
        return membership


class RejectEnrollmentHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: RejectEnrollmentCommand) -> EnrollmentRequest:
        async def work() -> EnrollmentRequest:
            enrollment, _ = await load_managed_enrollment(
                self._uow, command.logged_in_user_id, command.enrollment_request_id
            )
            enrollment.reject(command.reason)
            return await self._uow.enrollment_request_repository.save(enrollment)

        enrollment = await self._uow.execute_in_transaction(work)
        logger.info(f"Enrollment {enrollment.id} rejected")
        return enrollment


class RemoveClubMemberHandler:
    """
    Removes a member: the APPROVED enrollment becomes REVOKED and the ACTIVE
    membership is revoked in the same transaction.
    """

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: RemoveClubMemberCommand) -> EnrollmentRequest:
        async def work() -> EnrollmentRequest:
            enrollment, club = await load_managed_enrollment(
                self._uow, command.logged_in_user_id, command.enrollment_request_id
            )
            enrollment.revoke()
            await self._uow.enrollment_request_repository.save(enrollment)

            membership = await self._uow.club_membership_repository.find_by_member_and_club(
                enrollment.dependant_id, club.id
            )
            if membership is not None and membership.is_active():
                membership.revoke()
                await self._uow.club_membership_repository.save(membership)
            return enrollment

        enrollment = await self._uow.execute_in_transaction(work)
        logger.info(f"Member {enrollment.dependant_id} removed from club {enrollment.club_id}")
        return enrollment
