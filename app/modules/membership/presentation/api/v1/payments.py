# 📄 File: app/modules/membership/presentation/api/v1/payments.py
# 🧭 Purpose (Layman Explanation):
# Where a family holder starts paying the yearly affiliation fee.
#
# 🧪 Purpose (Technical Summary):
# Authenticated checkout endpoint. Answers 201 with the PENDING transaction; the
# family becomes AFFILIATED when /webhooks/payments reports the charge PAID.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.membership.application.commands
# - app.modules.membership.presentation (schemas, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

from fastapi import APIRouter, Depends, status

from ....application.commands import CheckoutCommand
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_user
from ..schemas import CheckoutRequest, CheckoutResponse

payments_router = APIRouter()


@payments_router.post(
    "/checkout",
    response_model=CheckoutResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start affiliation payment",
    responses={
        201: {"description": "Charge opened, waiting for payment"},
        400: {"description": "Family already affiliated or payment method not accepted"},
    },
)
async def checkout(
    body: CheckoutRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> CheckoutResponse:
    transaction = await container.checkout.handle(
        CheckoutCommand(logged_in_user_id=current_user.user_id, payment_method=body.payment_method)
    )
    return CheckoutResponse.model_validate(transaction)
