# 📄 File: app/modules/membership/application/handlers/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects every "action processor" of the membership system.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting the CQRS command and query handlers.
# 🔗 Dependencies:
# handler modules
# 🔄 Connected Modules / Calls From:
# app.modules.membership.container, listeners, tests

from .auth_handlers import LoginHandler, RefreshTokenHandler
from .club_request_handlers import (
    ApproveClubRequestHandler,
    CreateClubHandler,
    CreateClubRequestHandler,
    CreateClubResult,
    RejectClubRequestHandler,
)
from .enrollment_handlers import (
    ApproveEnrollmentHandler,
    RejectEnrollmentHandler,
    RemoveClubMemberHandler,
    RequestEnrollmentHandler,
)
from .payment_handlers import CheckoutHandler, ProcessPaymentUpdateHandler
from .query_handlers import (
    ClubMemberView,
    ClubPage,
    GetUserClubRequestsHandler,
    ListClubMembersHandler,
    ListMyEnrollmentRequestsHandler,
    ListPendingClubRequestsHandler,
    ListPendingEnrollmentsHandler,
    ListTournamentsHandler,
    ListTrainingsHandler,
    SearchClubsHandler,
)
from .tournament_handlers import (
    CancelRegistrationHandler,
    CreateRegistrationSyncHandler,
    CreateTournamentHandler,
    DeleteTournamentHandler,
    RequestIndividualRegistrationHandler,
    SyncRegistrationHandler,
    UpdateTournamentHandler,
)
from .training_handlers import CreateTrainingHandler, DeleteTrainingHandler, UpdateTrainingHandler
from .user_handlers import AddDependantHandler, DeleteDependantHandler, ManageUserRoleHandler, RegisterUserHandler

__all__ = [
    "LoginHandler",
    "RefreshTokenHandler",
    "ApproveClubRequestHandler",
    "CreateClubHandler",
    "CreateClubRequestHandler",
    "CreateClubResult",
    "RejectClubRequestHandler",
    "ApproveEnrollmentHandler",
    "RejectEnrollmentHandler",
    "RemoveClubMemberHandler",
    "RequestEnrollmentHandler",
    "CheckoutHandler",
    "ProcessPaymentUpdateHandler",
    "ClubMemberView",
    "ClubPage",
    "GetUserClubRequestsHandler",
    "ListClubMembersHandler",
    "ListMyEnrollmentRequestsHandler",
    "ListPendingClubRequestsHandler",
    "ListPendingEnrollmentsHandler",
    "ListTournamentsHandler",
    "ListTrainingsHandler",
    "SearchClubsHandler",
    "CancelRegistrationHandler",
    "CreateRegistrationSyncHandler",
    "CreateTournamentHandler",
    "DeleteTournamentHandler",
    "RequestIndividualRegistrationHandler",
    "SyncRegistrationHandler",
    "UpdateTournamentHandler",
    "CreateTrainingHandler",
    "DeleteTrainingHandler",
    "UpdateTrainingHandler",
    "AddDependantHandler",
    "DeleteDependantHandler",
    "ManageUserRoleHandler",
    "RegisterUserHandler",
]
