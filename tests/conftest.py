from datetime import date, timedelta
from typing import Dict, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import create_application
from app.modules.membership.application.commands import (
    AddDependantCommand,
    AddressInput,
    ApproveClubRequestCommand,
    CreateClubCommand,
    CreateClubRequestCommand,
    RegisterUserCommand,
)
from app.modules.membership.container import MembershipContainer
from app.modules.membership.domain.models import (
    Club,
    ClubRequest,
    Dependant,
    DependantRelationship,
    Family,
    Sex,
    User,
    UserRole,
)
from app.modules.membership.infrastructure.database import SqlAlchemyUnitOfWork
from app.modules.membership.infrastructure.memory import InMemoryDatabase, InMemoryUnitOfWork
from app.shared.config.settings import Settings
from app.shared.core.security import HashingService, TokenPayload
from app.shared.events.publisher import RecordingEventPublisher
from app.shared.infrastructure.database.connection import DatabaseConnectionManager

TEST_PASSWORD = "Secret123"
SQLITE_URL = "sqlite+aiosqlite:///:memory:"

CAMPINAS = AddressInput(
    street="Rua das Flores",
    number="123",
    district="Centro",
    city="Campinas",
    state="SP",
    zip_code="13010-100",
)


class PlainHasher(HashingService):
    """Reversible stand-in for bcrypt in domain tests."""

    def hash(self, plain: str) -> str:
        return f"plain:{plain}"

    def compare(self, plain: str, hashed: str) -> bool:
        return hashed == f"plain:{plain}"


# =============================================================================
# SETTINGS AND WIRING
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    return Settings(
        JWT_SECRET_KEY="test-secret-key-for-membership-api",
        ENVIRONMENT="test",
        PERSISTENCE_BACKEND="memory",
        DATABASE_URL=SQLITE_URL,
        RABBITMQ_URL="memory://",
        ENABLE_EVENT_CONSUMERS=False,
        BCRYPT_ROUNDS=4,
        LOG_FORMAT="console",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def hasher() -> PlainHasher:
    return PlainHasher()


@pytest.fixture
def publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def uow(memory_db: InMemoryDatabase) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(memory_db)


@pytest.fixture
def container(settings: Settings, uow: InMemoryUnitOfWork, publisher: RecordingEventPublisher) -> MembershipContainer:
    return MembershipContainer(settings, uow, publisher)


@pytest_asyncio.fixture
async def sql_database(settings: Settings):
    database = DatabaseConnectionManager(settings, url=SQLITE_URL)
    await database.initialize()
    await database.create_all()
    try:
        yield database
    finally:
        await database.close()


@pytest.fixture
def sql_uow(sql_database: DatabaseConnectionManager) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(sql_database.session_factory)


@pytest.fixture
def sql_container(
    settings: Settings,
    sql_uow: SqlAlchemyUnitOfWork,
    sql_database: DatabaseConnectionManager,
    publisher: RecordingEventPublisher,
) -> MembershipContainer:
    sql_settings = settings.model_copy(update={"PERSISTENCE_BACKEND": "sqlalchemy"})
    return MembershipContainer(sql_settings, sql_uow, publisher, database=sql_database)


# =============================================================================
# SCENARIO BUILDER
# =============================================================================

class MembershipScenario:
    """Drives the real handlers to put the store in a known state."""

    def __init__(self, container: MembershipContainer):
        self.container = container
        self.uow = container.uow

    async def register_user(
        self,
        email: str = "maria@example.com",
        first_name: str = "Maria",
        last_name: str = "Silva",
    ) -> User:
        return await self.container.register_user.handle(
            RegisterUserCommand(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password=TEST_PASSWORD,
            )
        )

    async def family_of(self, user_id: str) -> Family:
        async def work() -> Family:
            return await self.uow.family_repository.find_by_holder_id(user_id)

        return await self.uow.execute_in_transaction(work)

    async def affiliate(self, user_id: str) -> Family:
        async def work() -> Family:
            family = await self.uow.family_repository.find_by_holder_id(user_id)
            family.activate_affiliation()
            return await self.uow.family_repository.save(family)

        return await self.uow.execute_in_transaction(work)

    async def add_dependant(self, user_id: str, first_name: str = "Pedro") -> Dependant:
        return await self.container.add_dependant.handle(
            AddDependantCommand(
                logged_in_user_id=user_id,
                first_name=first_name,
                last_name="Silva",
                birthdate=date.today() - timedelta(days=12 * 365),
                relationship=DependantRelationship.SON,
                sex=Sex.MALE,
            )
        )

    async def request_club(
        self,
        user_id: str,
        club_name: str = "Clube X",
        max_members: Optional[int] = None,
    ) -> ClubRequest:
        return await self.container.create_club_request.handle(
            CreateClubRequestCommand(
                requester_id=user_id,
                club_name=club_name,
                address=CAMPINAS,
                max_members=max_members,
            )
        )

    async def open_club(self, user_id: str, club_name: str = "Clube X", max_members: Optional[int] = None) -> Club:
        """Request, approve and create a club without going through the queue."""
        request = await self.request_club(user_id, club_name=club_name, max_members=max_members)
        await self.container.approve_club_request.handle(ApproveClubRequestCommand(club_request_id=request.id))
        result = await self.container.create_club.handle(CreateClubCommand(request_id=request.id))
        return result.club

    async def find_user(self, user_id: str) -> User:
        async def work() -> User:
            return await self.uow.user_repository.find(user_id)

        return await self.uow.execute_in_transaction(work)

    async def find_club(self, club_id: str) -> Club:
        async def work() -> Club:
            return await self.uow.club_repository.find(club_id)

        return await self.uow.execute_in_transaction(work)

    async def auth_headers(self, user_id: str) -> Dict[str, str]:
        """Bearer header for the user's current roles."""
        user = await self.find_user(user_id)
        family = await self.family_of(user_id)
        tokens = self.container.token_service.issue_pair(user.token_payload(family.id if family else None))
        return {"Authorization": f"Bearer {tokens.access_token}"}

    def admin_headers(self) -> Dict[str, str]:
        payload = TokenPayload(
            sub="admin-1",
            email="admin@ncfca.com.br",
            roles=[UserRole.ADMIN.value, UserRole.SEM_FUNCAO.value],
        )
        tokens = self.container.token_service.issue_pair(payload)
        return {"Authorization": f"Bearer {tokens.access_token}"}


@pytest.fixture
def scenario(container: MembershipContainer) -> MembershipScenario:
    return MembershipScenario(container)


@pytest.fixture
def sql_scenario(sql_container: MembershipContainer) -> MembershipScenario:
    return MembershipScenario(sql_container)


# =============================================================================
# HTTP CLIENT
# =============================================================================

@pytest_asyncio.fixture
async def api_client(settings: Settings, container: MembershipContainer):
    app = create_application(settings=settings, container=container)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
