# 📄 File: app/modules/membership/presentation/api/v1/trainings.py
# 🧭 Purpose (Layman Explanation):
# The training video catalog: everyone signed in can browse it, administrators keep
# it up to date.
#
# 🧪 Purpose (Technical Summary):
# FastAPI endpoints for listing trainings and admin create/update/delete.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - app.modules.membership.application (commands, queries)
# - app.modules.membership.presentation (schemas, dependencies)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation.api.v1.__init__ (router inclusion)

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ....application.commands import CreateTrainingCommand, DeleteTrainingCommand, UpdateTrainingCommand
from ....application.queries import ListTrainingsQuery
from ....container import MembershipContainer
from ...dependencies import CurrentUser, get_container, get_current_admin_user, get_current_user
from ..schemas import TrainingRequest, TrainingResponse

trainings_router = APIRouter()


@trainings_router.get("/trainings", response_model=List[TrainingResponse], summary="List trainings")
async def list_trainings(
    current_user: CurrentUser = Depends(get_current_user),
    container: MembershipContainer = Depends(get_container),
) -> List[TrainingResponse]:
    trainings = await container.list_trainings.handle(ListTrainingsQuery())
    return [TrainingResponse.model_validate(t) for t in trainings]


@trainings_router.post(
    "/admin/trainings",
    response_model=TrainingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create training",
)
async def create_training(
    body: TrainingRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> TrainingResponse:
    training = await container.create_training.handle(CreateTrainingCommand(**body.model_dump()))
    return TrainingResponse.model_validate(training)


@trainings_router.put(
    "/admin/trainings/{training_id}",
    response_model=TrainingResponse,
    summary="Update training",
)
async def update_training(
    training_id: str,
    body: TrainingRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> TrainingResponse:
    training = await container.update_training.handle(
        UpdateTrainingCommand(training_id=training_id, **body.model_dump())
    )
    return TrainingResponse.model_validate(training)


@trainings_router.delete(
    "/admin/trainings/{training_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete training",
)
async def delete_training(
    training_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: MembershipContainer = Depends(get_container),
) -> Response:
    await container.delete_training.handle(DeleteTrainingCommand(training_id=training_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
