# 📄 File: app/modules/membership/application/handlers/training_handlers.py
# 🧭 Purpose (Layman Explanation):
# Lets admins publish, fix and remove the training videos members can watch.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers for the Training aggregate (create, update, hard delete).
#
# 🔗 Dependencies:
# - app.modules.membership.domain (Training, unit of work)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.trainings

__all__ = [
    "CreateTrainingHandler",
    "UpdateTrainingHandler",
    "DeleteTrainingHandler",
]

import logging

from app.shared.core.exceptions import EntityNotFoundError
from app.shared.utils.helpers import IdGenerator

from ...domain.models import Training
from ...domain.services import UnitOfWork
from ..commands import CreateTrainingCommand, DeleteTrainingCommand, UpdateTrainingCommand

logger = logging.getLogger(__name__)


class CreateTrainingHandler:
    def __init__(self, uow: UnitOfWork, id_generator: IdGenerator):
        self._uow = uow
        self._id_generator = id_generator

    async def handle(self, command: CreateTrainingCommand) -> Training:
        async def work() -> Training:
            training = Training.create(
                id=self._id_generator.generate(),
                title=command.title,
                description=command.description,
                youtube_url=command.youtube_url,
            )
            return await self._uow.training_repository.save(training)

        training = await self._uow.execute_in_transaction(work)
        logger.info(f"Training {training.id} created")
        return training


class UpdateTrainingHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: UpdateTrainingCommand) -> Training:
        async def work() -> Training:
            training = await self._uow.training_repository.find(command.training_id)
            if training is None:
                raise EntityNotFoundError("Training", command.training_id)
            training.update(command.title, command.description, command.youtube_url)
            return await self._uow.training_repository.save(training)

        return await self._uow.execute_in_transaction(work)


class DeleteTrainingHandler:
    def __init__(self, uow: UnitOfWork):
        self._uow = uow

    async def handle(self, command: DeleteTrainingCommand) -> None:
        async def work() -> None:
            if not await self._uow.training_repository.delete(command.training_id):
                raise EntityNotFoundError("Training", command.training_id)

        await self._uow.execute_in_transaction(work)
        logger.info(f"Training {command.training_id} deleted")
