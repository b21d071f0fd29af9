# 📄 File: app/modules/membership/application/handlers/payment_handlers.py
# 🧭 Purpose (Layman Explanation):
# Starts the yearly affiliation payment for a family, then listens to what the payment
# provider reports and, once the family has paid, switches their affiliation on for a year.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers for checkout and payment webhooks. Checkout opens a charge at
# the configured gateway, records a PENDING Transaction and marks the family
# PENDING_PAYMENT in one unit of work. For webhooks, unknown transactions are logged and
# ignored, repeated notifications with the same status are no-ops, and a PAID status
# advances the transaction and activates the family affiliation atomically.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (Transaction, Family, PaymentGateway, unit of work)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.webhooks, payments

__all__ = ["CheckoutHandler", "ProcessPaymentUpdateHandler"]

import logging
from typing import Optional

from app.shared.core.exceptions import EntityNotFoundError, InvalidOperationError
from app.shared.utils.helpers import IdGenerator

from ...domain.models import PaymentStatus, Transaction
from ...domain.services import ChargePayer, PaymentGateway, UnitOfWork
from ..commands import CheckoutCommand, ProcessPaymentUpdateCommand

logger = logging.getLogger(__name__)


class ProcessPaymentUpdateHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: ProcessPaymentUpdateCommand) -> Optional[Transaction]:
        async def work() -> Optional[Transaction]:
            transaction = await self._uow.transaction_repository.find_by_gateway_transaction_id(
                command.gateway_transaction_id
            )
            if transaction is None:
                logger.warning(f"Payment update for unknown transaction {command.gateway_transaction_id}")
                return None

            if transaction.status == command.status:
                logger.debug(f"Transaction {transaction.id} already {command.status.value}")
                return transaction

            transaction.change_status(command.status)
            transaction.gateway_payload = {**transaction.gateway_payload, **command.payload}
            await self._uow.transaction_repository.save(transaction)

            if command.status == PaymentStatus.PAID:
                family = await self._uow.family_repository.find(transaction.family_id)
                if family is None:
                    raise EntityNotFoundError("Family", transaction.family_id)
                family.activate_affiliation()
                await self._uow.family_repository.save(family)
                logger.info(f"Family {family.id} affiliated until {family.affiliation_expires_at}")

            return transaction

        return await self._uow.execute_in_transaction(work)


class CheckoutHandler:
    """
    Starts the affiliation payment of the caller's family.

    Steps:
    1. The payment method must be one the gateway accepts
    2. Load the caller and their family; an affiliated family cannot pay again
    3. Open the charge at the gateway
    4. Mark the family PENDING_PAYMENT and record the PENDING Transaction

    The family is affiliated later, when the webhook reports the charge PAID.
    """

    DESCRIPTION = "NCFCA Brasil affiliation fee"

    def __init__(
        self,
        uow: UnitOfWork,
        id_generator: IdGenerator,
        gateway: PaymentGateway,
        amount_cents: int,
    ):
        self._uow = uow
        self._id_generator = id_generator
        self._gateway = gateway
        self._amount_cents = amount_cents

    async def handle(self, command: CheckoutCommand) -> Transaction:
        if command.payment_method not in self._gateway.supported_methods:
            raise InvalidOperationError(
                f"Payment method {command.payment_method.value} is not accepted by {self._gateway.name}.",
                details={"payment_method": command.payment_method.value},
            )

        async def work() -> Transaction:
            user = await self._uow.user_repository.find(command.logged_in_user_id)
            if user is None:
                raise EntityNotFoundError("User", command.logged_in_user_id)
            family = await self._uow.family_repository.find_by_holder_id(user.id)
            if family is None:
                raise EntityNotFoundError("Family", message=f"Family of user {user.id} not found")
            if family.is_affiliated():
                raise InvalidOperationError("Family is already affiliated.", details={"family_id": family.id})

            charge = await self._gateway.create_charge(
                payment_method=command.payment_method,
                amount_cents=self._amount_cents,
                description=self.DESCRIPTION,
                payer=ChargePayer(id=user.id, name=user.full_name, email=user.email, phone=user.phone or ""),
            )

            family.mark_pending_payment()
            await self._uow.family_repository.save(family)
            transaction = Transaction(
                id=self._id_generator.generate(),
                family_id=family.id,
                gateway=self._gateway.name,
                gateway_transaction_id=charge.id,
                payment_method=charge.payment_method,
                amount_cents=charge.amount_cents,
                status=charge.status,
                gateway_payload=charge.metadata,
            )
            return await self._uow.transaction_repository.save(transaction)

        transaction = await self._uow.execute_in_transaction(work)
        logger.info(f"Checkout {transaction.id} opened for family {transaction.family_id} ({transaction.gateway_transaction_id})")
        return transaction
