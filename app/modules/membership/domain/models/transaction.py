# 📄 File: app/modules/membership/domain/models/transaction.py
# 🧭 Purpose (Layman Explanation):
# A payment made through the payment gateway, usually the yearly family affiliation.
# 🧪 Purpose (Technical Summary):
# Transaction aggregate correlated with the gateway by ``gateway_transaction_id``.
# Everything but ``status`` is fixed at creation; status only moves forward.
# 🔗 Dependencies:
# pydantic, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# process_payment_update handler, transaction repositories

from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import InvalidOperationError
from app.shared.utils.helpers import utc_now


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, Enum):
    PIX = "PIX"
    CREDIT_CARD = "CREDIT_CARD"
    BANK_SLIP = "BANK_SLIP"


ALLOWED_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({
        PaymentStatus.PAID,
        PaymentStatus.FAILED,
        PaymentStatus.EXPIRED,
        PaymentStatus.CANCELLED,
    }),
    PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset(),
    PaymentStatus.EXPIRED: frozenset(),
    PaymentStatus.CANCELLED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}


class Transaction(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    family_id: str
    gateway: str
    gateway_transaction_id: str
    payment_method: PaymentMethod
    amount_cents: int = Field(..., ge=0)
    status: PaymentStatus = PaymentStatus.PENDING
    gateway_payload: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID

    def change_status(self, new_status: PaymentStatus) -> None:
        """
        Move the payment forward.

        Raises:
            InvalidOperationError: If the transition goes backwards or leaves
                a terminal status
        """
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidOperationError(
                f"Payment cannot move from {self.status.value} to {new_status.value}.",
                details={"transaction_id": self.id},
            )
        self.status = new_status
        self.updated_at = utc_now()
