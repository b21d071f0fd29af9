from httpx import AsyncClient

from app.shared.events.consumer import DeliveryOutcome

API = "/api/v1"

CLUB_REQUEST_BODY = {
    "clubName": "Clube X",
    "address": {
        "street": "Rua das Flores",
        "number": "123",
        "district": "Centro",
        "city": "Campinas",
        "state": "SP",
        "zipCode": "13010-100",
    },
    "maxMembers": 10,
}


async def deliver_club_events(container, publisher) -> None:
    """Feed every queued club request event to the listener, as the broker would."""
    for event in publisher.events_for(container.messaging.club_request_queue):
        outcome = await container.club_request_consumer.process(event.to_message(), event.metadata.to_headers())
        assert outcome in (DeliveryOutcome.ACK, DeliveryOutcome.DISCARD)
    publisher.clear()


class TestClubRequestFlow:
    async def test_request_approve_and_own_club(self, api_client: AsyncClient, scenario, container, publisher):
        user = await scenario.register_user()
        await scenario.affiliate(user.id)

        created = await api_client.post(
            f"{API}/club-requests", json=CLUB_REQUEST_BODY, headers=await scenario.auth_headers(user.id)
        )
        assert created.status_code == 201
        request_id = created.json()["id"]
        assert created.json()["status"] == "PENDING"
        assert created.json()["address"]["zipCode"] == "13010100"

        pending = await api_client.get(f"{API}/admin/club-requests", headers=scenario.admin_headers())
        assert [r["id"] for r in pending.json()] == [request_id]

        approved = await api_client.post(
            f"{API}/admin/club-requests/{request_id}/approve", headers=scenario.admin_headers()
        )
        assert approved.status_code == 200
        assert approved.json()["status"] == "APPROVED"

        await deliver_club_events(container, publisher)

        clubs = await api_client.get(
            f"{API}/clubs", params={"city": "campinas"}, headers=await scenario.auth_headers(user.id)
        )
        assert clubs.json()["total"] == 1
        club = clubs.json()["items"][0]
        assert club["principalId"] == user.id
        assert club["maxMembers"] == 10
        assert club["corum"] == 0

        # a token signed after the grant carries the owner role
        members = await api_client.get(f"{API}/club-management/members", headers=await scenario.auth_headers(user.id))
        assert members.status_code == 200
        assert members.json() == []

    async def test_second_pending_request_is_conflict(self, api_client: AsyncClient, scenario):
        user = await scenario.register_user()
        headers = await scenario.auth_headers(user.id)
        await api_client.post(f"{API}/club-requests", json=CLUB_REQUEST_BODY, headers=headers)

        response = await api_client.post(f"{API}/club-requests", json=CLUB_REQUEST_BODY, headers=headers)

        assert response.status_code == 409
        mine = await api_client.get(f"{API}/club-requests/me", headers=headers)
        assert len(mine.json()) == 1

    async def test_reject_needs_a_real_reason(self, api_client: AsyncClient, scenario, publisher):
        user = await scenario.register_user()
        request = await scenario.request_club(user.id)
        url = f"{API}/admin/club-requests/{request.id}/reject"

        too_short = await api_client.post(url, json={"reason": "  no  "}, headers=scenario.admin_headers())
        assert too_short.status_code == 400

        rejected = await api_client.post(
            url, json={"reason": "Address could not be verified"}, headers=scenario.admin_headers()
        )
        assert rejected.status_code == 200
        assert rejected.json()["status"] == "REJECTED"
        assert rejected.json()["rejectionReason"] == "Address could not be verified"
        assert len(publisher.published) == 1

    async def test_approving_twice_is_refused(self, api_client: AsyncClient, scenario):
        user = await scenario.register_user()
        request = await scenario.request_club(user.id)
        url = f"{API}/admin/club-requests/{request.id}/approve"

        await api_client.post(url, headers=scenario.admin_headers())
        response = await api_client.post(url, headers=scenario.admin_headers())

        assert response.status_code == 400
        assert response.headers["X-Error-Code"] == "INVALID_OPERATION"


class TestEnrollmentApi:
    async def seed(self, scenario):
        owner = await scenario.register_user(email="owner@example.com")
        await scenario.affiliate(owner.id)
        club = await scenario.open_club(owner.id, max_members=5)
        parent = await scenario.register_user(email="parent@example.com")
        await scenario.affiliate(parent.id)
        dependant = await scenario.add_dependant(parent.id)
        return owner, club, parent, dependant

    async def test_enrollment_lifecycle(self, api_client: AsyncClient, scenario):
        owner, club, parent, dependant = await self.seed(scenario)
        owner_headers = await scenario.auth_headers(owner.id)

        requested = await api_client.post(
            f"{API}/enrollments",
            json={"dependantId": dependant.id, "clubId": club.id},
            headers=await scenario.auth_headers(parent.id),
        )
        assert requested.status_code == 201
        enrollment_id = requested.json()["id"]

        pending = await api_client.get(f"{API}/club-management/enrollments", headers=owner_headers)
        assert [e["id"] for e in pending.json()] == [enrollment_id]

        approved = await api_client.post(
            f"{API}/club-management/enrollments/{enrollment_id}/approve", headers=owner_headers
        )
        assert approved.status_code == 200
        assert approved.json()["status"] == "ACTIVE"
        assert approved.json()["memberId"] == dependant.id

        members = await api_client.get(f"{API}/club-management/members", headers=owner_headers)
        assert [m["firstName"] for m in members.json()] == ["Pedro"]

        removed = await api_client.delete(f"{API}/club-management/enrollments/{enrollment_id}", headers=owner_headers)
        assert removed.status_code == 200
        assert removed.json()["status"] == "REVOKED"

        mine = await api_client.get(f"{API}/enrollments/me", headers=await scenario.auth_headers(parent.id))
        assert [e["status"] for e in mine.json()] == ["REVOKED"]

    async def test_reject_enrollment(self, api_client: AsyncClient, scenario):
        owner, club, parent, dependant = await self.seed(scenario)
        enrollment = await api_client.post(
            f"{API}/enrollments",
            json={"dependantId": dependant.id, "clubId": club.id},
            headers=await scenario.auth_headers(parent.id),
        )

        response = await api_client.post(
            f"{API}/club-management/enrollments/{enrollment.json()['id']}/reject",
            json={"reason": "Club meets on a different day"},
            headers=await scenario.auth_headers(owner.id),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "REJECTED"

    async def test_club_management_needs_owner_role(self, api_client: AsyncClient, scenario):
        _, _, parent, _ = await self.seed(scenario)

        response = await api_client.get(
            f"{API}/club-management/enrollments", headers=await scenario.auth_headers(parent.id)
        )

        assert response.status_code == 403

    async def test_someone_elses_dependant_is_forbidden(self, api_client: AsyncClient, scenario):
        _, club, _, dependant = await self.seed(scenario)
        stranger = await scenario.register_user(email="stranger@example.com")
        await scenario.affiliate(stranger.id)

        response = await api_client.post(
            f"{API}/enrollments",
            json={"dependantId": dependant.id, "clubId": club.id},
            headers=await scenario.auth_headers(stranger.id),
        )

        assert response.status_code == 403
