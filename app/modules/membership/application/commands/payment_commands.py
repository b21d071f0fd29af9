# 📄 File: app/modules/membership/application/commands/payment_commands.py
# 🧭 Purpose (Layman Explanation):
# Starting the yearly affiliation payment, and what the payment provider tells us when
# that payment changes state.
#
# 🧪 Purpose (Technical Summary):
# CQRS commands for checkout and for the payment webhook body.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.payment_handlers
# - app.modules.membership.presentation.api.v1.webhooks, payments

from typing import Any, Dict

from pydantic import BaseModel, Field

from ...domain.models import PaymentMethod, PaymentStatus


class ProcessPaymentUpdateCommand(BaseModel):
    gateway_transaction_id: str
    status: PaymentStatus
    payload: Dict[str, Any] = Field(default_factory=dict, description="Raw gateway body, kept for audit")


class CheckoutCommand(BaseModel):
    logged_in_user_id: str
    payment_method: PaymentMethod = Field(..., description="How the affiliation fee will be paid")
