import pytest

from app.modules.membership.application.commands import (
    CheckoutCommand,
    DeleteDependantCommand,
    LoginCommand,
    ManageUserRoleCommand,
    ProcessPaymentUpdateCommand,
    RefreshTokenCommand,
    RequestEnrollmentCommand,
)
from app.modules.membership.domain.models import FamilyStatus, PaymentMethod, PaymentStatus, UserRole
from app.shared.core.exceptions import EntityNotFoundError, InvalidOperationError, UnauthorizedError
from app.shared.core.security import TokenPayload

TEST_PASSWORD = "Secret123"


class TestLogin:
    async def test_valid_credentials_issue_pair(self, scenario, container):
        user = await scenario.register_user()
        family = await scenario.family_of(user.id)

        tokens = await container.login.handle(LoginCommand(email="MARIA@example.com", password=TEST_PASSWORD))

        claims = container.token_service.verify_access_token(tokens.access_token)
        assert claims.sub == user.id
        assert claims.family_id == family.id
        assert claims.roles == ["SEM_FUNCAO"]
        assert container.token_service.verify_refresh_token(tokens.refresh_token).sub == user.id

    @pytest.mark.parametrize(
        "email, password",
        [("maria@example.com", "Wrong1234"), ("nobody@example.com", TEST_PASSWORD)],
    )
    async def test_bad_credentials_are_unauthorized(self, scenario, container, email, password):
        await scenario.register_user()

        with pytest.raises(UnauthorizedError) as exc_info:
            await container.login.handle(LoginCommand(email=email, password=password))

        assert exc_info.value.message == "Invalid e-mail or password"


class TestRefreshToken:
    async def test_refreshed_pair_carries_current_roles(self, scenario, container):
        user = await scenario.register_user()
        tokens = await container.login.handle(LoginCommand(email=user.email, password=TEST_PASSWORD))
        await container.manage_user_role.handle(ManageUserRoleCommand(user_id=user.id, roles=[UserRole.ADMIN]))

        refreshed = await container.refresh_token.handle(RefreshTokenCommand(refresh_token=tokens.refresh_token))

        claims = container.token_service.verify_access_token(refreshed.access_token)
        assert set(claims.roles) == {"ADMIN", "SEM_FUNCAO"}

    async def test_access_token_cannot_refresh(self, scenario, container):
        user = await scenario.register_user()
        tokens = await container.login.handle(LoginCommand(email=user.email, password=TEST_PASSWORD))

        with pytest.raises(UnauthorizedError):
            await container.refresh_token.handle(RefreshTokenCommand(refresh_token=tokens.access_token))

    async def test_token_of_unknown_user_is_refused(self, container):
        token = container.token_service.sign_refresh_token(TokenPayload(sub="ghost", email="ghost@example.com"))

        with pytest.raises(UnauthorizedError):
            await container.refresh_token.handle(RefreshTokenCommand(refresh_token=token))


class TestCheckout:
    async def test_checkout_then_paid_webhook_affiliates_family(self, scenario, container, settings):
        user = await scenario.register_user()

        transaction = await container.checkout.handle(
            CheckoutCommand(logged_in_user_id=user.id, payment_method=PaymentMethod.PIX)
        )

        assert transaction.status == PaymentStatus.PENDING
        assert transaction.amount_cents == settings.AFFILIATION_FEE_CENTS
        assert transaction.gateway == "offline"
        assert transaction.gateway_transaction_id.startswith("offline_")
        family = await scenario.family_of(user.id)
        assert transaction.family_id == family.id
        assert family.status == FamilyStatus.PENDING_PAYMENT

        await container.process_payment_update.handle(
            ProcessPaymentUpdateCommand(
                gateway_transaction_id=transaction.gateway_transaction_id, status=PaymentStatus.PAID
            )
        )

        assert (await scenario.family_of(user.id)).is_affiliated()

    async def test_affiliated_family_cannot_pay_again(self, scenario, container):
        user = await scenario.register_user()
        await scenario.affiliate(user.id)

        with pytest.raises(InvalidOperationError):
            await container.checkout.handle(
                CheckoutCommand(logged_in_user_id=user.id, payment_method=PaymentMethod.BANK_SLIP)
            )

        assert (await scenario.family_of(user.id)).status == FamilyStatus.AFFILIATED

    async def test_credit_card_is_not_accepted(self, scenario, container):
        user = await scenario.register_user()

        with pytest.raises(InvalidOperationError):
            await container.checkout.handle(
                CheckoutCommand(logged_in_user_id=user.id, payment_method=PaymentMethod.CREDIT_CARD)
            )

        assert (await scenario.family_of(user.id)).status == FamilyStatus.NOT_AFFILIATED

    async def test_unknown_user(self, container):
        with pytest.raises(EntityNotFoundError):
            await container.checkout.handle(
                CheckoutCommand(logged_in_user_id="missing", payment_method=PaymentMethod.PIX)
            )


class TestDeleteDependant:
    async def test_dependant_is_removed(self, scenario, container):
        user = await scenario.register_user()
        await scenario.affiliate(user.id)
        dependant = await scenario.add_dependant(user.id)

        await container.delete_dependant.handle(
            DeleteDependantCommand(logged_in_user_id=user.id, dependant_id=dependant.id)
        )

        assert not (await scenario.family_of(user.id)).has_dependant(dependant.id)

    async def test_unknown_dependant(self, scenario, container):
        user = await scenario.register_user()

        with pytest.raises(EntityNotFoundError):
            await container.delete_dependant.handle(
                DeleteDependantCommand(logged_in_user_id=user.id, dependant_id="missing")
            )

    async def test_dependant_with_enrollment_history_stays(self, scenario, container):
        owner = await scenario.register_user(email="owner@example.com", first_name="Ana")
        await scenario.affiliate(owner.id)
        club = await scenario.open_club(owner.id)
        parent = await scenario.register_user(email="parent@example.com", first_name="Joao")
        await scenario.affiliate(parent.id)
        dependant = await scenario.add_dependant(parent.id)
        await container.request_enrollment.handle(
            RequestEnrollmentCommand(logged_in_user_id=parent.id, dependant_id=dependant.id, club_id=club.id)
        )

        with pytest.raises(InvalidOperationError):
            await container.delete_dependant.handle(
                DeleteDependantCommand(logged_in_user_id=parent.id, dependant_id=dependant.id)
            )

        assert (await scenario.family_of(parent.id)).has_dependant(dependant.id)
