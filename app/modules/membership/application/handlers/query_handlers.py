# 📄 File: app/modules/membership/application/handlers/query_handlers.py
# 🧭 Purpose (Layman Explanation):
# Answers read-only questions: pending club requests, my requests, club search, who is
# waiting to join my club, my family's enrollments, club members, tournaments and
# trainings.
#
# 🧪 Purpose (Technical Summary):
# CQRS query handlers. Each query runs in its own short transaction so the SQL unit of
# work always has a session; results are plain domain objects or small read models.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (aggregates, unit of work)
# - pydantic (read models)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1 routers

__all__ = [
    "ClubPage",
    "ClubMemberView",
    "ListPendingClubRequestsHandler",
    "GetUserClubRequestsHandler",
    "SearchClubsHandler",
    "ListPendingEnrollmentsHandler",
    "ListMyEnrollmentRequestsHandler",
    "ListClubMembersHandler",
    "ListTournamentsHandler",
    "ListTrainingsHandler",
]

import logging
from typing import List

from pydantic import BaseModel

from app.shared.core.exceptions import EntityNotFoundError

from ...domain.models import Club, ClubMembership, ClubRequest, Dependant, EnrollmentRequest, Tournament, Training
from ...domain.services import UnitOfWork
from ..queries import (
    GetUserClubRequestsQuery,
    ListClubMembersQuery,
    ListMyEnrollmentRequestsQuery,
    ListPendingClubRequestsQuery,
    ListPendingEnrollmentsQuery,
    ListTournamentsQuery,
    ListTrainingsQuery,
    SearchClubsQuery,
)

logger = logging.getLogger(__name__)


class ClubPage(BaseModel):
    items: List[Club]
    total: int
    page: int
    limit: int


class ClubMemberView(BaseModel):
    membership: ClubMembership
    dependant: Dependant


async def _principal_club(uow: UnitOfWork, user_id: str) -> Club:
    club = await uow.club_repository.find_by_principal_id(user_id)
    if club is None:
        raise EntityNotFoundError("Club", message="You do not administer any club")
    return club


class ListPendingClubRequestsHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, query: ListPendingClubRequestsQuery) -> List[ClubRequest]:
        return await self._uow.execute_in_transaction(self._uow.club_request_repository.find_pending)


class GetUserClubRequestsHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, query: GetUserClubRequestsQuery) -> List[ClubRequest]:
        async def work() -> List[ClubRequest]:
            return await self._uow.club_request_repository.find_by_requester_id(query.user_id)

        return await self._uow.execute_in_transaction(work)


class SearchClubsHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, query: SearchClubsQuery) -> ClubPage:
        async def work():
            return await self._uow.club_repository.search(
                name=query.name, city=query.city, state=query.state, page=query.page, limit=query.limit
            )

        items, total = await self._uow.execute_in_transaction(work)
        return ClubPage(items=items, total=total, page=query.page, limit=query.limit)


class ListPendingEnrollmentsHandler:
    """Pending enrollments of the club administered by the caller."""

    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, query: ListPendingEnrollmentsQuery) -> List[EnrollmentRequest]:
        async def work() -> List[EnrollmentRequest]:
            club = await _principal_club(self._uow, query.logged_in_user_id)
            return await self._uow.enrollment_request_repository.find_pending_by_club(club.id)

        return await self._uow.execute_in_transaction(work)


class ListMyEnrollmentRequestsHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, query: ListMyEnrollmentRequestsQuery) -> List[EnrollmentRequest]:
        async def work() -> List[EnrollmentRequest]:
            family = await self._uow.family_repository.find_by_holder_id(query.logged_in_user_id)
            if family is None:
                raise EntityNotFoundError("Family", message="Family of the logged in user not found")
            return await self._uow.enrollment_request_repository.find_by_family(family.id)

        return await self._uow.execute_in_transaction(work)


class ListClubMembersHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, query: ListClubMembersQuery) -> List[ClubMemberView]:
        async def work() -> List[ClubMemberView]:
            club = await _principal_club(self._uow, query.logged_in_user_id)
            members = []
            for membership in await self._uow.club_membership_repository.find_active_by_club(club.id):
                family = await self._uow.family_repository.find(membership.family_id)
                dependant = family.find_dependant(membership.member_id) if family else None
                if dependant is None:
                    logger.warning(f"Membership {membership.id} points to a missing dependant")
                    continue
                members.append(ClubMemberView(membership=membership, dependant=dependant))
            return members

        return await self._uow.execute_in_transaction(work)


class ListTournamentsHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, query: ListTournamentsQuery) -> List[Tournament]:
        async def work() -> List[Tournament]:
            return await self._uow.tournament_repository.find_all(include_deleted=query.include_deleted)

        return await self._uow.execute_in_transaction(work)


class ListTrainingsHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, query: ListTrainingsQuery) -> List[Training]:
        return await self._uow.execute_in_transaction(self._uow.training_repository.find_all)
