# 📄 File: app/modules/membership/application/queries/club_queries.py
# 🧭 Purpose (Layman Explanation):
# Questions people ask about clubs: which requests are waiting, which clubs exist in my
# city, who is waiting to join my club, who are my members.
#
# 🧪 Purpose (Technical Summary):
# CQRS read queries for club requests, club search, enrollments and members.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.query_handlers

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ListPendingClubRequestsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)


class GetUserClubRequestsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str


class SearchClubsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = Field(default=None, min_length=2, max_length=2)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class ListPendingEnrollmentsQuery(BaseModel):
    """Pending enrollments of the club the caller administers."""

    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str


class ListMyEnrollmentRequestsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str


class ListClubMembersQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str
