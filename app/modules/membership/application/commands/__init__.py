# 📄 File: app/modules/membership/application/commands/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects every "form" (command) that changes membership data.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting the CQRS write commands.
# 🔗 Dependencies:
# pydantic command models
# 🔄 Connected Modules / Calls From:
# handlers, listeners, API routers

from .auth_commands import LoginCommand, RefreshTokenCommand
from .club_request_commands import (
    AddressInput,
    ApproveClubRequestCommand,
    CreateClubCommand,
    CreateClubRequestCommand,
    RejectClubRequestCommand,
)
from .enrollment_commands import (
    ApproveEnrollmentCommand,
    RejectEnrollmentCommand,
    RemoveClubMemberCommand,
    RequestEnrollmentCommand,
)
from .payment_commands import CheckoutCommand, ProcessPaymentUpdateCommand
from .tournament_commands import (
    CancelRegistrationCommand,
    CreateRegistrationSyncCommand,
    CreateTournamentCommand,
    DeleteTournamentCommand,
    RequestIndividualRegistrationCommand,
    SyncRegistrationCommand,
    UpdateTournamentCommand,
)
from .training_commands import CreateTrainingCommand, DeleteTrainingCommand, UpdateTrainingCommand
from .user_commands import (
    AddDependantCommand,
    DeleteDependantCommand,
    ManageUserRoleCommand,
    RegisterUserCommand,
)

__all__ = [
    "LoginCommand",
    "RefreshTokenCommand",
    "AddressInput",
    "ApproveClubRequestCommand",
    "CreateClubCommand",
    "CreateClubRequestCommand",
    "RejectClubRequestCommand",
    "ApproveEnrollmentCommand",
    "RejectEnrollmentCommand",
    "RemoveClubMemberCommand",
    "RequestEnrollmentCommand",
    "CheckoutCommand",
    "ProcessPaymentUpdateCommand",
    "CancelRegistrationCommand",
    "CreateRegistrationSyncCommand",
    "CreateTournamentCommand",
    "DeleteTournamentCommand",
    "RequestIndividualRegistrationCommand",
    "SyncRegistrationCommand",
    "UpdateTournamentCommand",
    "CreateTrainingCommand",
    "DeleteTrainingCommand",
    "UpdateTrainingCommand",
    "AddDependantCommand",
    "DeleteDependantCommand",
    "ManageUserRoleCommand",
    "RegisterUserCommand",
]
