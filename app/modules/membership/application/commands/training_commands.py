# 📄 File: app/modules/membership/application/commands/training_commands.py
# 🧭 Purpose (Layman Explanation):
# Forms for admins to publish, edit and remove training videos.
#
# 🧪 Purpose (Technical Summary):
# CQRS commands for Training administration.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.training_handlers

from pydantic import BaseModel, ConfigDict


class CreateTrainingCommand(BaseModel):
    title: str
    description: str
    youtube_url: str


class UpdateTrainingCommand(BaseModel):
    training_id: str
    title: str
    description: str
    youtube_url: str


class DeleteTrainingCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    training_id: str
