# 📄 File: app/modules/membership/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file sets up the infrastructure layer for membership, which handles how our app
# actually stores and retrieves data: a real database or an in-memory one for tests.
#
# 🧪 Purpose (Technical Summary):
# Infrastructure layer initialization providing the SQLAlchemy and in-memory
# implementations of the membership repositories and unit of work.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (repository and unit of work interfaces)
# - app.shared.infrastructure.database (engine and session factory)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.container (backend selection)

"""
Membership Infrastructure Layer

- database: SQLAlchemy models, repositories and unit of work
- memory: transactional in-memory store for tests and local runs
"""
