from datetime import date

import pytest

from app.modules.membership.application.commands import (
    AddDependantCommand,
    ManageUserRoleCommand,
    ProcessPaymentUpdateCommand,
    RegisterUserCommand,
)
from app.modules.membership.domain.models import (
    DependantRelationship,
    FamilyStatus,
    PaymentMethod,
    PaymentStatus,
    Sex,
    Transaction,
    UserRole,
)
from app.shared.core.exceptions import (
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
    InvalidOperationError,
)

TEST_PASSWORD = "Secret123"


class TestRegisterUser:
    async def test_user_gets_family_and_hashed_password(self, scenario, container):
        user = await scenario.register_user()

        assert user.password_hash != TEST_PASSWORD
        assert user.check_password(TEST_PASSWORD, container.hashing_service)
        family = await scenario.family_of(user.id)
        assert family.holder_id == user.id
        assert family.status == FamilyStatus.NOT_AFFILIATED

    async def test_email_is_unique_ignoring_case(self, scenario):
        await scenario.register_user(email="maria@example.com")

        with pytest.raises(ConflictError):
            await scenario.register_user(email="MARIA@example.com")

    async def test_weak_password_registers_nothing(self, container, scenario):
        with pytest.raises(DomainValidationError):
            await container.register_user.handle(
                RegisterUserCommand(first_name="Maria", last_name="Silva", email="m@example.com", password="short")
            )

        # the e-mail is still free
        assert (await scenario.register_user(email="m@example.com")).email == "m@example.com"


class TestDependants:
    def command(self, user_id: str) -> AddDependantCommand:
        return AddDependantCommand(
            logged_in_user_id=user_id,
            first_name="Clara",
            last_name="Silva",
            birthdate=date(2013, 3, 14),
            relationship=DependantRelationship.DAUGHTER,
            sex=Sex.FEMALE,
        )

    async def test_affiliated_family_adds_dependant(self, scenario, container):
        user = await scenario.register_user()
        await scenario.affiliate(user.id)

        dependant = await container.add_dependant.handle(self.command(user.id))

        family = await scenario.family_of(user.id)
        assert family.find_dependant(dependant.id).first_name == "Clara"

    async def test_unaffiliated_family_cannot_add(self, scenario, container):
        user = await scenario.register_user()

        with pytest.raises(InvalidOperationError):
            await container.add_dependant.handle(self.command(user.id))

    async def test_unknown_holder(self, container):
        with pytest.raises(EntityNotFoundError):
            await container.add_dependant.handle(self.command("missing"))


class TestManageRoles:
    async def test_roles_are_replaced_keeping_default(self, scenario, container):
        user = await scenario.register_user()

        updated = await container.manage_user_role.handle(
            ManageUserRoleCommand(user_id=user.id, roles=[UserRole.ADMIN])
        )

        assert updated.roles == frozenset({UserRole.ADMIN, UserRole.SEM_FUNCAO})

    async def test_duplicated_roles_are_refused(self, scenario, container):
        user = await scenario.register_user()

        with pytest.raises(DomainValidationError):
            await container.manage_user_role.handle(
                ManageUserRoleCommand(user_id=user.id, roles=[UserRole.ADMIN, UserRole.ADMIN])
            )

    async def test_unknown_user(self, container):
        with pytest.raises(EntityNotFoundError):
            await container.manage_user_role.handle(ManageUserRoleCommand(user_id="missing", roles=[]))


class TestPaymentUpdates:
    async def seed_transaction(self, scenario, user_id: str) -> Transaction:
        family = await scenario.family_of(user_id)
        transaction = Transaction(
            id="tx-1",
            family_id=family.id,
            gateway="pagarme",
            gateway_transaction_id="gw-123",
            payment_method=PaymentMethod.PIX,
            amount_cents=15000,
        )

        async def work():
            return await scenario.uow.transaction_repository.save(transaction)

        return await scenario.uow.execute_in_transaction(work)

    async def test_paid_transaction_affiliates_family(self, scenario, container):
        user = await scenario.register_user()
        await self.seed_transaction(scenario, user.id)

        transaction = await container.process_payment_update.handle(
            ProcessPaymentUpdateCommand(
                gateway_transaction_id="gw-123", status=PaymentStatus.PAID, payload={"event": "order.paid"}
            )
        )

        assert transaction.status == PaymentStatus.PAID
        assert transaction.gateway_payload == {"event": "order.paid"}
        family = await scenario.family_of(user.id)
        assert family.is_affiliated()

    async def test_same_status_twice_is_idempotent(self, scenario, container):
        user = await scenario.register_user()
        await self.seed_transaction(scenario, user.id)
        command = ProcessPaymentUpdateCommand(gateway_transaction_id="gw-123", status=PaymentStatus.PAID)

        await container.process_payment_update.handle(command)
        again = await container.process_payment_update.handle(command)

        assert again.status == PaymentStatus.PAID

    async def test_backwards_transition_is_refused(self, scenario, container):
        user = await scenario.register_user()
        await self.seed_transaction(scenario, user.id)
        await container.process_payment_update.handle(
            ProcessPaymentUpdateCommand(gateway_transaction_id="gw-123", status=PaymentStatus.FAILED)
        )

        with pytest.raises(InvalidOperationError):
            await container.process_payment_update.handle(
                ProcessPaymentUpdateCommand(gateway_transaction_id="gw-123", status=PaymentStatus.PAID)
            )
        assert not (await scenario.family_of(user.id)).is_affiliated()

    async def test_unknown_transaction_is_ignored(self, container):
        result = await container.process_payment_update.handle(
            ProcessPaymentUpdateCommand(gateway_transaction_id="nope", status=PaymentStatus.PAID)
        )

        assert result is None
