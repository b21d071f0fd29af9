# 📄 File: app/modules/membership/container.py
#
# 🧭 Purpose (Layman Explanation):
# The place where every piece of the membership system is plugged together: which
# database to use, how passwords and tokens are handled, where events are sent, and
# which background workers listen to which queue.
#
# 🧪 Purpose (Technical Summary):
# Composition root. Builds the unit of work (in-memory or SQLAlchemy, chosen by
# PERSISTENCE_BACKEND), the event publisher, security services, the payment gateway
# and every command/query handler, then binds the queue listeners to EventConsumers. ``startup``/``shutdown``
# own the lifecycle of the database engine and the kombu consumer threads.
#
# 🔗 Dependencies:
# - app.shared.config (Settings, MessagingConfig)
# - app.shared.infrastructure.database.connection (DatabaseConnectionManager)
# - app.shared.events (publisher, consumer)
# - membership application and infrastructure layers
#
# 🔄 Connected Modules / Calls From:
# - app.main (lifespan, app.state.container)
# - app.modules.membership.presentation.dependencies
# - tests (containers over InMemoryDatabase or SQLite)

import asyncio
from typing import List, Optional

from app.shared.config.messaging import MessagingConfig
from app.shared.config.settings import Settings
from app.shared.core.security import HashingService, JWTTokenService, PasswordHasher, TokenService
from app.shared.events.consumer import EventConsumer, QueueConsumer
from app.shared.events.publisher import EventPublisher, KombuEventPublisher
from app.shared.infrastructure.database.connection import DatabaseConnectionManager
from app.shared.utils.helpers import IdGenerator, UuidGenerator
from app.shared.utils.logging import get_logger

from .application.handlers import (
    AddDependantHandler,
    ApproveClubRequestHandler,
    ApproveEnrollmentHandler,
    CancelRegistrationHandler,
    CheckoutHandler,
    CreateClubHandler,
    CreateClubRequestHandler,
    CreateRegistrationSyncHandler,
    CreateTournamentHandler,
    CreateTrainingHandler,
    DeleteDependantHandler,
    DeleteTournamentHandler,
    DeleteTrainingHandler,
    GetUserClubRequestsHandler,
    ListClubMembersHandler,
    ListMyEnrollmentRequestsHandler,
    ListPendingClubRequestsHandler,
    ListPendingEnrollmentsHandler,
    ListTournamentsHandler,
    ListTrainingsHandler,
    LoginHandler,
    ManageUserRoleHandler,
    ProcessPaymentUpdateHandler,
    RefreshTokenHandler,
    RegisterUserHandler,
    RejectClubRequestHandler,
    RejectEnrollmentHandler,
    RemoveClubMemberHandler,
    RequestEnrollmentHandler,
    RequestIndividualRegistrationHandler,
    SearchClubsHandler,
    SyncRegistrationHandler,
    UpdateTournamentHandler,
    UpdateTrainingHandler,
)
from .application.listeners import ClubRequestListener, TournamentRegistrationListener
from .domain.services import PaymentGateway, UnitOfWork
from .infrastructure.database import SqlAlchemyUnitOfWork
from .infrastructure.memory import InMemoryDatabase, InMemoryUnitOfWork
from .infrastructure.payments import OfflinePaymentGateway

logger = get_logger(__name__)


class MembershipContainer:
    """
    Wires the membership module.

    Example:
        container = await MembershipContainer.create(settings)
        await container.startup()
        user = await container.register_user.handle(command)
        await container.shutdown()
    """

    def __init__(
        self,
        settings: Settings,
        uow: UnitOfWork,
        publisher: EventPublisher,
        database: Optional[DatabaseConnectionManager] = None,
        id_generator: Optional[IdGenerator] = None,
        hashing_service: Optional[HashingService] = None,
        token_service: Optional[TokenService] = None,
        payment_gateway: Optional[PaymentGateway] = None,
    ):
        self.settings = settings
        self.messaging = MessagingConfig(settings)
        self.uow = uow
        self.publisher = publisher
        self.database = database
        self.id_generator = id_generator or UuidGenerator()
        self.hashing_service = hashing_service or PasswordHasher(
            schemes=settings.PASSWORD_HASH_SCHEMES,
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
        self.token_service = token_service or JWTTokenService(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_token_expire_days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS,
        )
        self.payment_gateway = payment_gateway or OfflinePaymentGateway(
            name=settings.PAYMENT_GATEWAY_NAME, id_generator=self.id_generator
        )

        self._build_command_handlers()
        self._build_query_handlers()

        self.club_request_consumer = ClubRequestListener(self.create_club).register(
            EventConsumer(self.messaging.club_request_queue)
        )
        self.tournament_registration_consumer = TournamentRegistrationListener(
            self.create_registration_sync, self.sync_registration
        ).register(EventConsumer(self.messaging.tournament_registration_queue))
        self.queue_consumers: List[QueueConsumer] = []

    @classmethod
    async def create(
        cls,
        settings: Settings,
        publisher: Optional[EventPublisher] = None,
    ) -> "MembershipContainer":
        """Build a container for the configured persistence backend."""
        database = None
        if settings.PERSISTENCE_BACKEND == "memory":
            uow: UnitOfWork = InMemoryUnitOfWork(InMemoryDatabase())
        else:
            database = DatabaseConnectionManager(settings)
            await database.initialize()
            uow = SqlAlchemyUnitOfWork(database.session_factory)

        if publisher is None:
            publisher = KombuEventPublisher(MessagingConfig(settings))

        logger.info(f"Membership container built with {settings.PERSISTENCE_BACKEND} persistence")
        return cls(settings, uow, publisher, database=database)

    def _build_command_handlers(self) -> None:
        uow, ids = self.uow, self.id_generator
        club_queue = self.messaging.club_request_queue
        registration_queue = self.messaging.tournament_registration_queue

        # Users, families and payments
        self.register_user = RegisterUserHandler(uow, ids, self.hashing_service)
        self.login = LoginHandler(uow, self.hashing_service, self.token_service)
        self.refresh_token = RefreshTokenHandler(uow, self.token_service)
        self.add_dependant = AddDependantHandler(uow, ids)
        self.delete_dependant = DeleteDependantHandler(uow)
        self.manage_user_role = ManageUserRoleHandler(uow)
        self.checkout = CheckoutHandler(uow, ids, self.payment_gateway, self.settings.AFFILIATION_FEE_CENTS)
        self.process_payment_update = ProcessPaymentUpdateHandler(uow)

        # Clubs
        self.create_club_request = CreateClubRequestHandler(uow, ids)
        self.approve_club_request = ApproveClubRequestHandler(uow, self.publisher, club_queue)
        self.reject_club_request = RejectClubRequestHandler(uow, self.publisher, club_queue)
        self.create_club = CreateClubHandler(uow, ids, self.token_service)

        # Enrollments
        self.request_enrollment = RequestEnrollmentHandler(uow, ids)
        self.approve_enrollment = ApproveEnrollmentHandler(uow, ids)
        self.reject_enrollment = RejectEnrollmentHandler(uow)
        self.remove_club_member = RemoveClubMemberHandler(uow)

        # Tournaments
        self.create_tournament = CreateTournamentHandler(uow, ids)
        self.update_tournament = UpdateTournamentHandler(uow)
        self.delete_tournament = DeleteTournamentHandler(uow)
        self.request_individual_registration = RequestIndividualRegistrationHandler(
            uow, ids, self.publisher, registration_queue
        )
        self.cancel_registration = CancelRegistrationHandler(uow)
        self.create_registration_sync = CreateRegistrationSyncHandler(
            uow, ids, self.publisher, self.messaging.tournament_integration_queue
        )
        self.sync_registration = SyncRegistrationHandler(uow, ids)

        # Trainings
        self.create_training = CreateTrainingHandler(uow, ids)
        self.update_training = UpdateTrainingHandler(uow)
        self.delete_training = DeleteTrainingHandler(uow)

    def _build_query_handlers(self) -> None:
        uow = self.uow
        self.list_pending_club_requests = ListPendingClubRequestsHandler(uow)
        self.get_user_club_requests = GetUserClubRequestsHandler(uow)
        self.search_clubs = SearchClubsHandler(uow)
        self.list_pending_enrollments = ListPendingEnrollmentsHandler(uow)
        self.list_my_enrollment_requests = ListMyEnrollmentRequestsHandler(uow)
        self.list_club_members = ListClubMembersHandler(uow)
        self.list_tournaments = ListTournamentsHandler(uow)
        self.list_trainings = ListTrainingsHandler(uow)

    @property
    def event_consumers(self) -> List[EventConsumer]:
        return [self.club_request_consumer, self.tournament_registration_consumer]

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def startup(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Start the queue consumers when ENABLE_EVENT_CONSUMERS is set."""
        if not self.settings.ENABLE_EVENT_CONSUMERS:
            logger.info("Event consumers disabled")
            return

        loop = loop or asyncio.get_running_loop()
        for event_consumer in self.event_consumers:
            queue_consumer = QueueConsumer(self.messaging, event_consumer, loop=loop)
            queue_consumer.start()
            self.queue_consumers.append(queue_consumer)
        logger.info(f"{len(self.queue_consumers)} event consumers started")

    async def shutdown(self) -> None:
        for queue_consumer in self.queue_consumers:
            # join() blocks, keep the loop free for in-flight handlers
            await asyncio.to_thread(queue_consumer.stop)
        self.queue_consumers.clear()

        if isinstance(self.publisher, KombuEventPublisher):
            self.publisher.close()

        if self.database is not None:
            await self.database.close()
        logger.info("Membership container shut down")
