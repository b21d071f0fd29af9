# 📄 File: app/modules/membership/application/queries/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects every read-only question the membership system can answer.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting the CQRS read queries.
# 🔗 Dependencies:
# pydantic query models
# 🔄 Connected Modules / Calls From:
# query handlers, API routers

from .catalog_queries import ListTournamentsQuery, ListTrainingsQuery
from .club_queries import (
    GetUserClubRequestsQuery,
    ListClubMembersQuery,
    ListMyEnrollmentRequestsQuery,
    ListPendingClubRequestsQuery,
    ListPendingEnrollmentsQuery,
    SearchClubsQuery,
)

__all__ = [
    "ListTournamentsQuery",
    "ListTrainingsQuery",
    "GetUserClubRequestsQuery",
    "ListClubMembersQuery",
    "ListMyEnrollmentRequestsQuery",
    "ListPendingClubRequestsQuery",
    "ListPendingEnrollmentsQuery",
    "SearchClubsQuery",
]
