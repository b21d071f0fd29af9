import pytest
import pytest_asyncio

from app.modules.membership.application.commands import (
    ApproveEnrollmentCommand,
    RejectEnrollmentCommand,
    RemoveClubMemberCommand,
    RequestEnrollmentCommand,
)
from app.modules.membership.application.queries import (
    ListClubMembersQuery,
    ListMyEnrollmentRequestsQuery,
    ListPendingEnrollmentsQuery,
    SearchClubsQuery,
)
from app.modules.membership.domain.models import EnrollmentStatus, MembershipStatus
from app.shared.core.exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    ForbiddenError,
    InvalidOperationError,
)


class EnrollmentSetup:
    """A club run by ``owner`` and an affiliated family holding ``dependant``."""

    def __init__(self, scenario):
        self.scenario = scenario
        self.container = scenario.container

    async def build(self, max_members=None):
        self.owner = await self.scenario.register_user(email="owner@example.com", first_name="Ana")
        await self.scenario.affiliate(self.owner.id)
        self.club = await self.scenario.open_club(self.owner.id, max_members=max_members)

        self.parent = await self.scenario.register_user(email="parent@example.com", first_name="Joao")
        await self.scenario.affiliate(self.parent.id)
        self.dependant = await self.scenario.add_dependant(self.parent.id)
        return self

    async def request(self, dependant_id=None):
        return await self.container.request_enrollment.handle(
            RequestEnrollmentCommand(
                logged_in_user_id=self.parent.id,
                dependant_id=dependant_id or self.dependant.id,
                club_id=self.club.id,
            )
        )

    async def approve(self, enrollment_id, user_id=None):
        return await self.container.approve_enrollment.handle(
            ApproveEnrollmentCommand(
                logged_in_user_id=user_id or self.owner.id, enrollment_request_id=enrollment_id
            )
        )

    async def remove(self, enrollment_id):
        return await self.container.remove_club_member.handle(
            RemoveClubMemberCommand(logged_in_user_id=self.owner.id, enrollment_request_id=enrollment_id)
        )


@pytest_asyncio.fixture
async def club_setup(scenario) -> EnrollmentSetup:
    return await EnrollmentSetup(scenario).build()


class TestRequestEnrollment:
    async def test_pending_request_is_created(self, club_setup):
        enrollment = await club_setup.request()

        assert enrollment.status == EnrollmentStatus.PENDING
        assert enrollment.club_id == club_setup.club.id

        mine = await club_setup.container.list_my_enrollment_requests.handle(
            ListMyEnrollmentRequestsQuery(logged_in_user_id=club_setup.parent.id)
        )
        assert [e.id for e in mine] == [enrollment.id]

    async def test_duplicate_pending_request_is_refused(self, club_setup):
        await club_setup.request()

        with pytest.raises(InvalidOperationError):
            await club_setup.request()

    async def test_foreign_dependant_is_forbidden(self, club_setup):
        with pytest.raises(ForbiddenError):
            await club_setup.request(dependant_id="someone-else")

    async def test_unknown_club(self, club_setup):
        with pytest.raises(EntityNotFoundError):
            await club_setup.container.request_enrollment.handle(
                RequestEnrollmentCommand(
                    logged_in_user_id=club_setup.parent.id, dependant_id=club_setup.dependant.id, club_id="missing"
                )
            )

    async def test_active_member_cannot_request_again(self, club_setup):
        enrollment = await club_setup.request()
        await club_setup.approve(enrollment.id)

        with pytest.raises(InvalidOperationError):
            await club_setup.request()


class TestApproveEnrollment:
    async def test_approval_creates_active_membership(self, club_setup):
        enrollment = await club_setup.request()

        membership = await club_setup.approve(enrollment.id)

        assert membership.status == MembershipStatus.ACTIVE
        assert membership.member_id == club_setup.dependant.id
        assert membership.family_id == enrollment.family_id

        members = await club_setup.container.list_club_members.handle(
            ListClubMembersQuery(logged_in_user_id=club_setup.owner.id)
        )
        assert [m.dependant.id for m in members] == [club_setup.dependant.id]
        page = await club_setup.container.search_clubs.handle(SearchClubsQuery())
        assert page.items[0].corum == 1

    async def test_only_principal_may_approve(self, club_setup):
        enrollment = await club_setup.request()

        with pytest.raises(ForbiddenError):
            await club_setup.approve(enrollment.id, user_id=club_setup.parent.id)

    async def test_full_club_refuses_request_and_approval(self, scenario):
        club_setup = await EnrollmentSetup(scenario).build(max_members=1)
        second = await scenario.add_dependant(club_setup.parent.id, first_name="Lucas")
        first_request = await club_setup.request()
        second_request = await club_setup.request(dependant_id=second.id)

        await club_setup.approve(first_request.id)

        with pytest.raises(InvalidOperationError):
            await club_setup.approve(second_request.id)
        with pytest.raises(InvalidOperationError):
            await club_setup.request(dependant_id=second.id)

    async def test_reject_needs_reason(self, club_setup):
        enrollment = await club_setup.request()
        command = RejectEnrollmentCommand(
            logged_in_user_id=club_setup.owner.id, enrollment_request_id=enrollment.id, reason="short"
        )

        with pytest.raises(DomainValidationError):
            await club_setup.container.reject_enrollment.handle(command)

        pending = await club_setup.container.list_pending_enrollments.handle(
            ListPendingEnrollmentsQuery(logged_in_user_id=club_setup.owner.id)
        )
        assert [e.id for e in pending] == [enrollment.id]

    async def test_reject_resolves_request(self, club_setup):
        enrollment = await club_setup.request()

        rejected = await club_setup.container.reject_enrollment.handle(
            RejectEnrollmentCommand(
                logged_in_user_id=club_setup.owner.id,
                enrollment_request_id=enrollment.id,
                reason="Dependant is outside the age range",
            )
        )

        assert rejected.status == EnrollmentStatus.REJECTED
        # a new request is allowed once the previous one is resolved
        assert (await club_setup.request()).status == EnrollmentStatus.PENDING


class TestRemoveMember:
    async def test_remove_revokes_enrollment_and_membership(self, club_setup):
        enrollment = await club_setup.request()
        await club_setup.approve(enrollment.id)

        removed = await club_setup.remove(enrollment.id)

        assert removed.status == EnrollmentStatus.REVOKED
        members = await club_setup.container.list_club_members.handle(
            ListClubMembersQuery(logged_in_user_id=club_setup.owner.id)
        )
        assert members == []

    async def test_pending_enrollment_cannot_be_removed(self, club_setup):
        enrollment = await club_setup.request()

        with pytest.raises(InvalidOperationError):
            await club_setup.remove(enrollment.id)

    async def test_removed_member_can_rejoin(self, club_setup):
        first = await club_setup.request()
        await club_setup.approve(first.id)
        await club_setup.remove(first.id)

        second = await club_setup.request()
        membership = await club_setup.approve(second.id)

        assert membership.status == MembershipStatus.ACTIVE

    async def test_user_without_club_has_no_pending_list(self, club_setup):
        with pytest.raises(EntityNotFoundError):
            await club_setup.container.list_pending_enrollments.handle(
                ListPendingEnrollmentsQuery(logged_in_user_id=club_setup.parent.id)
            )
