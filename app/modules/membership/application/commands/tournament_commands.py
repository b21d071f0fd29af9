# 📄 File: app/modules/membership/application/commands/tournament_commands.py
# 🧭 Purpose (Layman Explanation):
# Forms for admins to manage tournaments and for families to sign a dependant up (or
# drop out), plus the internal notes used to keep the tournament system in sync.
#
# 🧪 Purpose (Technical Summary):
# CQRS commands for tournament administration, individual registration, cancellation
# and registration sync (driven by queue listeners).
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.tournament_handlers
# - app.modules.membership.application.listeners.tournament_listeners
# - app.modules.membership.presentation.api.v1.tournaments

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ...domain.models import TournamentType


class CreateTournamentCommand(BaseModel):
    name: str
    description: str
    type: TournamentType
    registration_start_date: datetime
    registration_end_date: datetime
    start_date: datetime


class UpdateTournamentCommand(BaseModel):
    tournament_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[TournamentType] = None
    registration_start_date: Optional[datetime] = None
    registration_end_date: Optional[datetime] = None
    start_date: Optional[datetime] = None


class DeleteTournamentCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    tournament_id: str


class RequestIndividualRegistrationCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str
    tournament_id: str
    competitor_id: str


class CancelRegistrationCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    logged_in_user_id: str
    registration_id: str


class CreateRegistrationSyncCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    registration_id: str


class SyncRegistrationCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    registration_id: str
