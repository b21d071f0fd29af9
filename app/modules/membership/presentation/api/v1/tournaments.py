# 📄 File: app/modules/membership/presentation/api/v1/tournaments.py
# 🧭 Purpose (Layman Explanation):
# Tournament endpoints: administrators create, edit and remove tournaments; families
# sign a dependant up for one or drop out again.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints for tournament administration (admin role) and individual
# registrations. A concurrent edit of the same tournament surfaces as HTTP 409.
#
# 🔗 Dependencies:
# - FastAPI router, status codes, Query parameters
# - app.modules.membership.application (commands, queries)
# - app.modules.membership.presentation (schemas, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status

from ....application.commands import (
    CancelRegistrationCommand,
    CreateTournamentCommand,
    DeleteTournamentCommand,
    RequestIndividualRegistrationCommand,
    UpdateTournamentCommand,
)
from ....application.queries import ListTournamentsQuery
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_admin_user, get_current_user
from ..schemas import (
    CreateTournamentRequest,
    RegistrationRequest,
    RegistrationResponse,
    TournamentResponse,
    UpdateTournamentRequest,
)

logger = logging.getLogger(__name__)

tournaments_router = APIRouter()


# =============================================================================
# ADMINISTRATION
# =============================================================================

@tournaments_router.post(
    "/admin/tournaments",
    response_model=TournamentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create tournament",
)
async def create_tournament(
    body: CreateTournamentRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> TournamentResponse:
    tournament = await container.create_tournament.handle(CreateTournamentCommand(**body.model_dump()))
    return TournamentResponse.model_validate(tournament)


@tournaments_router.put(
    "/admin/tournaments/{tournament_id}",
    response_model=TournamentResponse,
    summary="Update tournament",
    responses={
        400: {"description": "Tournament has registrations or is deleted"},
        409: {"description": "Tournament changed concurrently"},
    },
)
async def update_tournament(
    tournament_id: str,
    body: UpdateTournamentRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> TournamentResponse:
    tournament = await container.update_tournament.handle(
        UpdateTournamentCommand(tournament_id=tournament_id, **body.model_dump(exclude_none=True))
    )
    return TournamentResponse.model_validate(tournament)


@tournaments_router.delete(
    "/admin/tournaments/{tournament_id}",
    response_model=TournamentResponse,
    summary="Delete tournament",
    description="Soft-delete a tournament without registrations",
)
async def delete_tournament(
    tournament_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> TournamentResponse:
    tournament = await container.delete_tournament.handle(DeleteTournamentCommand(tournament_id=tournament_id))
    logger.info(f"Admin {admin.user_id} deleted tournament {tournament.id}")
    return TournamentResponse.model_validate(tournament)


# =============================================================================
# CATALOG AND REGISTRATIONS
# =============================================================================

@tournaments_router.get(
    "/tournaments",
    response_model=List[TournamentResponse],
    summary="List tournaments",
)
async def list_tournaments(
    include_deleted: bool = Query(default=False, alias="includeDeleted"),
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> List[TournamentResponse]:
    tournaments = await container.list_tournaments.handle(
        ListTournamentsQuery(include_deleted=include_deleted and current_user.is_admin())
    )
    return [TournamentResponse.model_validate(t) for t in tournaments]


@tournaments_router.post(
    "/tournaments/{tournament_id}/registrations",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a dependant",
    responses={
        400: {"description": "Registration closed, wrong type or already registered"},
        403: {"description": "Competitor is not a dependant of the caller's family"},
        409: {"description": "Tournament changed concurrently"},
    },
)
async def request_individual_registration(
    tournament_id: str,
    body: RegistrationRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> RegistrationResponse:
    registration = await container.request_individual_registration.handle(
        RequestIndividualRegistrationCommand(
            logged_in_user_id=current_user.user_id,
            tournament_id=tournament_id,
            competitor_id=body.competitor_id,
        )
    )
    return RegistrationResponse.model_validate(registration)


@tournaments_router.post(
    "/tournaments/registrations/{registration_id}/cancel",
    response_model=RegistrationResponse,
    summary="Cancel registration",
)
async def cancel_registration(
    registration_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> RegistrationResponse:
    registration = await container.cancel_registration.handle(
        CancelRegistrationCommand(logged_in_user_id=current_user.user_id, registration_id=registration_id)
    )
    return RegistrationResponse.model_validate(registration)
