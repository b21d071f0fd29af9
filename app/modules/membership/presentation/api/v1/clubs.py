# 📄 File: app/modules/membership/presentation/api/v1/clubs.py
# 🧭 Purpose (Layman Explanation):
# Lets families look for a club by name, city or state before asking to join one.
#
# 🧪 Purpose (Technical Summary):
# Paginated club search endpoint backed by SearchClubsHandler.
#
# 🔗 Dependencies:
# - FastAPI router, Query parameters
# - app.modules.membership.application.queries
# - app.modules.membership.presentation (schemas, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ....application.queries import SearchClubsQuery
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_user
from ..schemas import ClubPageResponse

clubs_router = APIRouter(prefix="/clubs")


@clubs_router.get(
    "",
    response_model=ClubPageResponse,
    summary="Search clubs",
)
async def search_clubs(
    name: Optional[str] = Query(default=None, description="Part of the club name"),
    city: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None, min_length=2, max_length=2),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> ClubPageResponse:
    result = await container.search_clubs.handle(
        SearchClubsQuery(name=name, city=city, state=state, page=page, limit=limit)
    )
    return ClubPageResponse.model_validate(result)
