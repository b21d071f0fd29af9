# 📄 File: app/modules/membership/application/queries/catalog_queries.py
# 🧭 Purpose (Layman Explanation):
# Listing what the association offers: tournaments and training videos.
#
# 🧪 Purpose (Technical Summary):
# CQRS read queries for tournaments and trainings.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.application.handlers.query_handlers

from pydantic import BaseModel, ConfigDict


class ListTournamentsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    include_deleted: bool = False


class ListTrainingsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)
