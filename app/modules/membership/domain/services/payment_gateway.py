# 📄 File: app/modules/membership/domain/services/payment_gateway.py
# 🧭 Purpose (Layman Explanation):
# Describes what the app needs from a payment provider: open a charge for the yearly
# affiliation fee and tell us its id, so the provider's later notice can be matched.
# 🧪 Purpose (Technical Summary):
# PaymentGateway contract used by checkout. A gateway opens a charge and returns a
# GatewayCharge; settlement always arrives through the payment webhook.
# 🔗 Dependencies:
# abc, pydantic, domain payment enums
# 🔄 Connected Modules / Calls From:
# CheckoutHandler; implemented by infrastructure.payments

from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field

from ..models.transaction import PaymentMethod, PaymentStatus


class ChargePayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    phone: str = ""


class GatewayCharge(BaseModel):
    """A charge as reported by the gateway right after it was opened."""

    model_config = ConfigDict(frozen=True)

    id: str
    status: PaymentStatus = PaymentStatus.PENDING
    amount_cents: int = Field(..., ge=0)
    payment_method: PaymentMethod
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PaymentGateway(ABC):
    """Contract of a payment provider."""

    name: str = ""

    @property
    @abstractmethod
    def supported_methods(self) -> FrozenSet[PaymentMethod]:
        pass

    @abstractmethod
    async def create_charge(
        self,
        payment_method: PaymentMethod,
        amount_cents: int,
        description: str,
        payer: ChargePayer,
    ) -> GatewayCharge:
        """
        Open a charge.

        Raises:
            InfrastructureError: If the provider cannot be reached
        """
        pass
