# 📄 File: app/modules/membership/infrastructure/payments/offline_gateway.py
# 🧭 Purpose (Layman Explanation):
# A payment "provider" for fees paid outside the app (a PIX transfer or a bank slip
# handled by the office). It only hands out a reference number; the office confirms
# the payment later through the payment notice endpoint.
# 🧪 Purpose (Technical Summary):
# PaymentGateway that opens PENDING charges with locally generated ids. Settlement
# arrives through POST /webhooks/payments like any other gateway. Card payments need
# a card processor and are not supported.
# 🔗 Dependencies:
# domain.services.payment_gateway, app.shared.utils.helpers (IdGenerator)
# 🔄 Connected Modules / Calls From:
# app.modules.membership.container (default gateway), CheckoutHandler

import logging
from typing import FrozenSet, Optional

from app.shared.utils.helpers import IdGenerator, UuidGenerator

from ...domain.models import PaymentMethod, PaymentStatus
from ...domain.services import ChargePayer, GatewayCharge, PaymentGateway

logger = logging.getLogger(__name__)


class OfflinePaymentGateway(PaymentGateway):
    def __init__(self, name: str = "offline", id_generator: Optional[IdGenerator] = None):
        self.name = name
        self._id_generator = id_generator or UuidGenerator()

    @property
    def supported_methods(self) -> FrozenSet[PaymentMethod]:
        return frozenset({PaymentMethod.PIX, PaymentMethod.BANK_SLIP})

    async def create_charge(
        self,
        payment_method: PaymentMethod,
        amount_cents: int,
        description: str,
        payer: ChargePayer,
    ) -> GatewayCharge:
        charge = GatewayCharge(
            id=f"{self.name}_{self._id_generator.generate()}",
            status=PaymentStatus.PENDING,
            amount_cents=amount_cents,
            payment_method=payment_method,
            metadata={"description": description, "payer_id": payer.id, "payer_email": payer.email},
        )
        logger.info(f"Charge {charge.id} opened for payer {payer.id} ({payment_method.value})")
        return charge
