import pytest

from app.modules.membership.application.commands import (
    ApproveClubRequestCommand,
    CreateClubCommand,
    RejectClubRequestCommand,
)
from app.modules.membership.application.queries import (
    GetUserClubRequestsQuery,
    ListPendingClubRequestsQuery,
    SearchClubsQuery,
)
from app.modules.membership.domain.events import ClubRequestApprovedEvent, ClubRequestRejectedEvent
from app.modules.membership.domain.models import ClubRequestStatus, UserRole
from app.shared.core.exceptions import (
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
    InvalidOperationError,
    MessagingError,
    RedundantOperationError,
)

CLUB_QUEUE = "ClubRequest"


class TestCreateClubRequest:
    async def test_request_is_stored_as_pending(self, scenario):
        user = await scenario.register_user()

        request = await scenario.request_club(user.id, max_members=10)

        assert request.status == ClubRequestStatus.PENDING
        assert request.requester_id == user.id
        assert request.address.zip_code == "13010100"

    async def test_unknown_requester(self, scenario):
        with pytest.raises(EntityNotFoundError):
            await scenario.request_club("missing-user")

    async def test_second_pending_request_conflicts(self, scenario):
        user = await scenario.register_user()
        await scenario.request_club(user.id)

        with pytest.raises(ConflictError):
            await scenario.request_club(user.id, club_name="Outro Clube")

    async def test_club_owner_cannot_request_another_club(self, scenario):
        user = await scenario.register_user()
        await scenario.affiliate(user.id)
        await scenario.open_club(user.id)

        with pytest.raises(InvalidOperationError):
            await scenario.request_club(user.id, club_name="Outro Clube")


class TestApproveAndReject:
    async def test_approve_publishes_after_commit(self, scenario, container, publisher):
        user = await scenario.register_user()
        request = await scenario.request_club(user.id)

        approved = await container.approve_club_request.handle(
            ApproveClubRequestCommand(club_request_id=request.id)
        )

        assert approved.status == ClubRequestStatus.APPROVED
        events = publisher.events_for(CLUB_QUEUE)
        assert len(events) == 1
        assert isinstance(events[0], ClubRequestApprovedEvent)
        assert events[0].payload.request_id == request.id
        assert events[0].payload.requester_id == user.id

    async def test_approving_twice_is_invalid_and_publishes_once(self, scenario, container, publisher):
        user = await scenario.register_user()
        request = await scenario.request_club(user.id)
        command = ApproveClubRequestCommand(club_request_id=request.id)
        await container.approve_club_request.handle(command)

        with pytest.raises(InvalidOperationError):
            await container.approve_club_request.handle(command)

        assert len(publisher.events_for(CLUB_QUEUE)) == 1

    async def test_approval_stays_committed_when_publish_fails(self, scenario, container, publisher):
        user = await scenario.register_user()
        request = await scenario.request_club(user.id)
        publisher.fail_with = MessagingError("broker down")

        with pytest.raises(MessagingError):
            await container.approve_club_request.handle(ApproveClubRequestCommand(club_request_id=request.id))

        mine = await container.get_user_club_requests.handle(GetUserClubRequestsQuery(user_id=user.id))
        assert mine[0].status == ClubRequestStatus.APPROVED

    async def test_approve_unknown_request(self, container):
        with pytest.raises(EntityNotFoundError):
            await container.approve_club_request.handle(ApproveClubRequestCommand(club_request_id="nope"))

    async def test_reject_keeps_reason_and_publishes(self, scenario, container, publisher):
        user = await scenario.register_user()
        request = await scenario.request_club(user.id)

        rejected = await container.reject_club_request.handle(
            RejectClubRequestCommand(club_request_id=request.id, reason="Address could not be verified")
        )

        assert rejected.status == ClubRequestStatus.REJECTED
        assert rejected.rejection_reason == "Address could not be verified"
        event = publisher.events_for(CLUB_QUEUE)[0]
        assert isinstance(event, ClubRequestRejectedEvent)

    async def test_short_reason_leaves_request_pending(self, scenario, container, publisher):
        user = await scenario.register_user()
        request = await scenario.request_club(user.id)

        with pytest.raises(DomainValidationError):
            await container.reject_club_request.handle(
                RejectClubRequestCommand(club_request_id=request.id, reason="no")
            )

        pending = await container.list_pending_club_requests.handle(ListPendingClubRequestsQuery())
        assert [r.id for r in pending] == [request.id]
        assert publisher.published == []


class TestCreateClub:
    async def test_requester_becomes_principal_and_club_owner(self, scenario, container):
        user = await scenario.register_user()
        await scenario.affiliate(user.id)
        request = await scenario.request_club(user.id, max_members=3)
        await container.approve_club_request.handle(ApproveClubRequestCommand(club_request_id=request.id))

        result = await container.create_club.handle(CreateClubCommand(request_id=request.id))

        assert result.club.principal_id == user.id
        assert result.club.name == "Clube X"
        assert result.club.max_members == 3
        owner = await scenario.find_user(user.id)
        assert owner.has_role(UserRole.DONO_DE_CLUBE)
        claims = container.token_service.verify_access_token(result.tokens.access_token)
        assert UserRole.DONO_DE_CLUBE.value in claims.roles

    async def test_second_run_is_redundant(self, scenario, container):
        user = await scenario.register_user()
        await scenario.affiliate(user.id)
        request = await scenario.request_club(user.id)
        await container.approve_club_request.handle(ApproveClubRequestCommand(club_request_id=request.id))
        await container.create_club.handle(CreateClubCommand(request_id=request.id))

        with pytest.raises(RedundantOperationError):
            await container.create_club.handle(CreateClubCommand(request_id=request.id))

        page = await container.search_clubs.handle(SearchClubsQuery())
        assert page.total == 1

    async def test_unaffiliated_family_gets_no_club(self, scenario, container):
        user = await scenario.register_user()
        request = await scenario.request_club(user.id)

        with pytest.raises(InvalidOperationError):
            await container.create_club.handle(CreateClubCommand(request_id=request.id))

        owner = await scenario.find_user(user.id)
        assert not owner.has_role(UserRole.DONO_DE_CLUBE)
        assert (await container.search_clubs.handle(SearchClubsQuery())).total == 0

    async def test_unknown_request_is_not_found(self, container):
        with pytest.raises(EntityNotFoundError):
            await container.create_club.handle(CreateClubCommand(request_id="missing"))


class TestSearchClubs:
    async def test_filters_by_city_and_pages(self, scenario, container):
        for index, name in enumerate(["Clube Alfa", "Clube Beta", "Clube Gama"]):
            user = await scenario.register_user(email=f"owner{index}@example.com")
            await scenario.affiliate(user.id)
            await scenario.open_club(user.id, club_name=name)

        page = await container.search_clubs.handle(SearchClubsQuery(city="campinas", page=2, limit=2))

        assert page.total == 3
        assert [club.name for club in page.items] == ["Clube Gama"]

        by_name = await container.search_clubs.handle(SearchClubsQuery(name="beta"))
        assert [club.name for club in by_name.items] == ["Clube Beta"]

        elsewhere = await container.search_clubs.handle(SearchClubsQuery(state="RJ"))
        assert elsewhere.total == 0
