# 📄 File: app/modules/membership/presentation/api/schemas/catalog_schemas.py
# 🧭 Purpose (Layman Explanation):
# The data formats for tournaments (and signing up for them), training videos and the
# affiliation payments (checkout and the notifications sent by the payment provider).
# 🧪 Purpose (Technical Summary):
# Request/response schemas for tournament administration, registrations, trainings
# checkout and the payment webhook. Update requests carry only the fields being changed.
# 🔗 Dependencies:
# pydantic, common.CamelModel, membership domain enums
# 🔄 Connected Modules / Calls From:
# app.modules.membership.presentation.api.v1 (tournaments, trainings, payments, webhooks)

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field

from ....domain.models import PaymentMethod, PaymentStatus, RegistrationStatus, SyncStatus, TournamentType
from .common import CamelModel


# =============================================================================
# TOURNAMENTS
# =============================================================================

class CreateTournamentRequest(CamelModel):
    name: str = Field(..., min_length=1, examples=["Regional Open"])
    description: str = Field(..., examples=["Lincoln-Douglas debate, regional qualifier"])
    type: TournamentType
    registration_start_date: datetime
    registration_end_date: datetime
    start_date: datetime


class UpdateTournamentRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[TournamentType] = None
    registration_start_date: Optional[datetime] = None
    registration_end_date: Optional[datetime] = None
    start_date: Optional[datetime] = None


class RegistrationRequest(CamelModel):
    competitor_id: str = Field(..., description="Dependant of the caller's family")


class SyncResponse(CamelModel):
    id: str
    status: SyncStatus
    attempts: int
    next_attempt_at: Optional[datetime] = None


class RegistrationResponse(CamelModel):
    id: str
    tournament_id: str
    competitor_id: str
    status: RegistrationStatus
    type: TournamentType
    created_at: datetime
    sync: Optional[SyncResponse] = None


class TournamentResponse(CamelModel):
    id: str
    name: str
    description: str
    type: TournamentType
    registration_start_date: datetime
    registration_end_date: datetime
    start_date: datetime
    deleted_at: Optional[datetime] = None
    registration_count: int = 0
    version: int


# =============================================================================
# TRAININGS
# =============================================================================

class TrainingRequest(CamelModel):
    title: str = Field(..., min_length=1, examples=["Cross-examination basics"])
    description: str = Field(..., examples=["How to prepare questions for the opponent"])
    youtube_url: str = Field(..., examples=["https://www.youtube.com/watch?v=dQw4w9WgXcQ"])


class TrainingResponse(CamelModel):
    id: str
    title: str
    description: str
    youtube_url: str
    created_at: datetime


# =============================================================================
# PAYMENTS
# =============================================================================

class PaymentWebhookRequest(CamelModel):
    """Status notification from the payment gateway; unknown keys are kept for audit."""

    model_config = ConfigDict(extra="allow")

    gateway_transaction_id: str
    status: PaymentStatus


class PaymentWebhookResponse(CamelModel):
    received: bool = True
    transaction_id: Optional[str] = None
    status: Optional[PaymentStatus] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class CheckoutRequest(CamelModel):
    payment_method: PaymentMethod = Field(..., examples=["PIX"])


class CheckoutResponse(CamelModel):
    id: str
    family_id: str
    gateway: str
    gateway_transaction_id: str
    payment_method: PaymentMethod
    amount_cents: int
    status: PaymentStatus
    created_at: datetime
