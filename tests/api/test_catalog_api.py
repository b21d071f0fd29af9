from datetime import timedelta

from httpx import AsyncClient

from app.modules.membership.domain.models import PaymentMethod, Transaction
from app.shared.utils.helpers import utc_now

API = "/api/v1"


def tournament_body(**overrides) -> dict:
    now = utc_now()
    body = {
        "name": "Regional Open",
        "description": "Lincoln-Douglas regional qualifier",
        "type": "INDIVIDUAL",
        "registrationStartDate": (now - timedelta(days=1)).isoformat(),
        "registrationEndDate": (now + timedelta(days=5)).isoformat(),
        "startDate": (now + timedelta(days=10)).isoformat(),
    }
    body.update(overrides)
    return body


class TestTournamentsApi:
    async def test_admin_creates_and_users_list(self, api_client: AsyncClient, scenario):
        created = await api_client.post(
            f"{API}/admin/tournaments", json=tournament_body(), headers=scenario.admin_headers()
        )
        assert created.status_code == 201
        assert created.json()["version"] == 1
        assert created.json()["registrationCount"] == 0

        user = await scenario.register_user()
        listed = await api_client.get(f"{API}/tournaments", headers=await scenario.auth_headers(user.id))
        assert [t["name"] for t in listed.json()] == ["Regional Open"]

    async def test_only_admins_create(self, api_client: AsyncClient, scenario):
        user = await scenario.register_user()

        response = await api_client.post(
            f"{API}/admin/tournaments", json=tournament_body(), headers=await scenario.auth_headers(user.id)
        )

        assert response.status_code == 403

    async def test_registration_freezes_tournament(self, api_client: AsyncClient, scenario, publisher):
        created = await api_client.post(
            f"{API}/admin/tournaments", json=tournament_body(), headers=scenario.admin_headers()
        )
        tournament_id = created.json()["id"]
        holder = await scenario.register_user()
        await scenario.affiliate(holder.id)
        dependant = await scenario.add_dependant(holder.id)
        holder_headers = await scenario.auth_headers(holder.id)

        registered = await api_client.post(
            f"{API}/tournaments/{tournament_id}/registrations",
            json={"competitorId": dependant.id},
            headers=holder_headers,
        )
        assert registered.status_code == 201
        assert registered.json()["status"] == "CONFIRMED"
        assert registered.json()["type"] == "INDIVIDUAL"
        assert len(publisher.published) == 1

        edit = await api_client.put(
            f"{API}/admin/tournaments/{tournament_id}", json={"name": "Renamed"}, headers=scenario.admin_headers()
        )
        assert edit.status_code == 400

        cancelled = await api_client.post(
            f"{API}/tournaments/registrations/{registered.json()['id']}/cancel", headers=holder_headers
        )
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "CANCELLED"

    async def test_deleted_tournament_is_hidden(self, api_client: AsyncClient, scenario):
        created = await api_client.post(
            f"{API}/admin/tournaments", json=tournament_body(), headers=scenario.admin_headers()
        )

        deleted = await api_client.delete(
            f"{API}/admin/tournaments/{created.json()['id']}", headers=scenario.admin_headers()
        )
        assert deleted.json()["deletedAt"] is not None

        user = await scenario.register_user()
        visible = await api_client.get(
            f"{API}/tournaments", params={"includeDeleted": "true"}, headers=await scenario.auth_headers(user.id)
        )
        assert visible.json() == []
        everything = await api_client.get(
            f"{API}/tournaments", params={"includeDeleted": "true"}, headers=scenario.admin_headers()
        )
        assert len(everything.json()) == 1


class TestTrainingsApi:
    body = {
        "title": "Cross-examination",
        "description": "How to prepare good questions",
        "youtubeUrl": "https://www.youtube.com/watch?v=abc123",
    }

    async def test_training_lifecycle(self, api_client: AsyncClient, scenario):
        created = await api_client.post(f"{API}/admin/trainings", json=self.body, headers=scenario.admin_headers())
        assert created.status_code == 201
        training_id = created.json()["id"]

        user = await scenario.register_user()
        listed = await api_client.get(f"{API}/trainings", headers=await scenario.auth_headers(user.id))
        assert [t["youtubeUrl"] for t in listed.json()] == [self.body["youtubeUrl"]]

        updated = await api_client.put(
            f"{API}/admin/trainings/{training_id}",
            json={**self.body, "youtubeUrl": "https://youtu.be/abc123"},
            headers=scenario.admin_headers(),
        )
        assert updated.json()["youtubeUrl"] == "https://youtu.be/abc123"

        deleted = await api_client.delete(f"{API}/admin/trainings/{training_id}", headers=scenario.admin_headers())
        assert deleted.status_code == 204

    async def test_non_youtube_url_is_refused(self, api_client: AsyncClient, scenario):
        response = await api_client.post(
            f"{API}/admin/trainings",
            json={**self.body, "youtubeUrl": "https://vimeo.com/1"},
            headers=scenario.admin_headers(),
        )

        assert response.status_code == 400
        assert response.headers["X-Error-Code"] == "DOMAIN_VALIDATION_ERROR"


class TestPaymentWebhook:
    async def test_paid_transaction_affiliates_family(self, api_client: AsyncClient, scenario):
        user = await scenario.register_user()
        family = await scenario.family_of(user.id)

        async def seed():
            await scenario.uow.transaction_repository.save(
                Transaction(
                    id="tx-1",
                    family_id=family.id,
                    gateway="pagarme",
                    gateway_transaction_id="gw-123",
                    payment_method=PaymentMethod.PIX,
                    amount_cents=15000,
                )
            )

        await scenario.uow.execute_in_transaction(seed)

        response = await api_client.post(
            f"{API}/webhooks/payments",
            json={"gatewayTransactionId": "gw-123", "status": "PAID", "orderCode": "or_1"},
        )

        assert response.status_code == 200
        assert response.json()["transactionId"] == "tx-1"
        assert response.json()["status"] == "PAID"
        assert (await scenario.family_of(user.id)).is_affiliated()

    async def test_unknown_transaction_is_acknowledged(self, api_client: AsyncClient):
        response = await api_client.post(
            f"{API}/webhooks/payments", json={"gatewayTransactionId": "nope", "status": "PAID"}
        )

        assert response.status_code == 200
        assert response.json()["received"] is True
        assert response.json()["transactionId"] is None
