# 📄 File: app/modules/membership/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers every data format the membership API accepts and returns.
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting request/response schemas.
# 🔗 Dependencies:
# schema modules
# 🔄 Connected Modules / Calls From:
# app.modules.membership.presentation.api.v1.*

from .catalog_schemas import (
    CheckoutRequest,
    CheckoutResponse,
    CreateTournamentRequest,
    PaymentWebhookRequest,
    PaymentWebhookResponse,
    RegistrationRequest,
    RegistrationResponse,
    SyncResponse,
    TournamentResponse,
    TrainingRequest,
    TrainingResponse,
    UpdateTournamentRequest,
)
from .club_schemas import (
    AddressRequest,
    AddressResponse,
    ClubMemberResponse,
    ClubPageResponse,
    ClubRequestResponse,
    ClubResponse,
    CreateClubRequestRequest,
    EnrollmentResponse,
    MembershipResponse,
    RejectRequest,
    RequestEnrollmentRequest,
)
from .common import CamelModel
from .user_schemas import (
    AddDependantRequest,
    DependantResponse,
    LoginRequest,
    ManageUserRoleRequest,
    RefreshTokenRequest,
    RegisterUserRequest,
    TokenResponse,
    UserResponse,
)

__all__ = [
    "CheckoutRequest",
    "CheckoutResponse",
    "CreateTournamentRequest",
    "PaymentWebhookRequest",
    "PaymentWebhookResponse",
    "RegistrationRequest",
    "RegistrationResponse",
    "SyncResponse",
    "TournamentResponse",
    "TrainingRequest",
    "TrainingResponse",
    "UpdateTournamentRequest",
    "AddressRequest",
    "AddressResponse",
    "ClubMemberResponse",
    "ClubPageResponse",
    "ClubRequestResponse",
    "ClubResponse",
    "CreateClubRequestRequest",
    "EnrollmentResponse",
    "MembershipResponse",
    "RejectRequest",
    "RequestEnrollmentRequest",
    "CamelModel",
    "AddDependantRequest",
    "DependantResponse",
    "LoginRequest",
    "ManageUserRoleRequest",
    "RefreshTokenRequest",
    "TokenResponse",
    "RegisterUserRequest",
    "UserResponse",
]
