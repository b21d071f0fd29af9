# 📄 File: app/modules/membership/infrastructure/memory/__init__.py
# 🧭 Purpose (Layman Explanation):
# The in-memory storage used by tests and quick local runs.
# 🧪 Purpose (Technical Summary):
# Re-exports InMemoryDatabase and InMemoryUnitOfWork.
# 🔗 Dependencies:
# database.py, unit_of_work.py
# 🔄 Connected Modules / Calls From:
# app.modules.membership.container, tests

from .database import InMemoryDatabase
from .unit_of_work import InMemoryUnitOfWork

__all__ = ["InMemoryDatabase", "InMemoryUnitOfWork"]
