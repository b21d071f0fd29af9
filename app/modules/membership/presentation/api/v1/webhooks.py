# 📄 File: app/modules/membership/presentation/api/v1/webhooks.py
# 🧭 Purpose (Layman Explanation):
# Where the payment provider tells us a family's membership fee was paid (or failed),
# so the family's affiliation can be switched on.
#
# 🧪 Purpose (Technical Summary):
# Unauthenticated payment webhook. Unknown transactions are acknowledged with
# ``transactionId: null`` so the gateway stops retrying; repeated notifications with
# the same status are no-ops.
#
# 🔗 Dependencies:
# - FastAPI router
# - app.modules.membership.application.commands
# - app.modules.membership.presentation (schemas, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

import logging

from fastapi import APIRouter, Depends

from ....application.commands import ProcessPaymentUpdateCommand
from ....container import MembershipContainer
from ...dependencies import get_container
from ..schemas import PaymentWebhookRequest, PaymentWebhookResponse

logger = logging.getLogger(__name__)

webhooks_router = APIRouter(prefix="/webhooks")


@webhooks_router.post(
    "/payments",
    response_model=PaymentWebhookResponse,
    summary="Payment status update",
)
async def payment_webhook(
    body: PaymentWebhookRequest,
    container: MembershipContainer = Depends(get_container),
) -> PaymentWebhookResponse:
    transaction = await container.process_payment_update.handle(
        ProcessPaymentUpdateCommand(
            gateway_transaction_id=body.gateway_transaction_id,
            status=body.status,
            payload=body.model_dump(mode="json", by_alias=True),
        )
    )
    if transaction is None:
        return PaymentWebhookResponse(details={"reason": "unknown transaction"})
    return PaymentWebhookResponse(transaction_id=transaction.id, status=transaction.status)
