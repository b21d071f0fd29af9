# 📄 File: app/modules/membership/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The real database storage of the membership system.
# 🧪 Purpose (Technical Summary):
# Re-exports the SQLAlchemy unit of work; importing this package registers every ORM
# model on the shared declarative Base.
# 🔗 Dependencies:
# models.py, repositories.py, unit_of_work.py
# 🔄 Connected Modules / Calls From:
# app.modules.membership.container, migrations/env.py, tests

from . import models
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = ["models", "SqlAlchemyUnitOfWork"]
