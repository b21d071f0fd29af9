# 📄 File: app/modules/membership/domain/models/training.py
# 🧭 Purpose (Layman Explanation):
# A training video (hosted on YouTube) published by the admins for all members.
# 🧪 Purpose (Technical Summary):
# Training aggregate with title/description length rules and YouTube URL validation.
# 🔗 Dependencies:
# pydantic, app.shared.utils.validators
# 🔄 Connected Modules / Calls From:
# training handlers, training repositories

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import DomainValidationError
from app.shared.utils.helpers import utc_now
from app.shared.utils.validators import validate_text_content, validate_youtube_url


def _check(title: str, description: str, youtube_url: str) -> None:
    for field, result in (
        ("title", validate_text_content(title, "Title", min_length=3, max_length=200)),
        ("description", validate_text_content(description, "Description", min_length=10)),
        ("youtube_url", validate_youtube_url(youtube_url)),
    ):
        if not result.is_valid:
            raise DomainValidationError(result.first_error, field=field)


class Training(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str
    title: str
    description: str
    youtube_url: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def create(cls, id: str, title: str, description: str, youtube_url: str) -> "Training":
        _check(title, description, youtube_url)
        return cls(id=id, title=title.strip(), description=description.strip(), youtube_url=youtube_url)

    def update(self, title: str, description: str, youtube_url: str) -> None:
        _check(title, description, youtube_url)
        self.title = title.strip()
        self.description = description.strip()
        self.youtube_url = youtube_url
        self.updated_at = utc_now()
