# 📄 File: app/modules/membership/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file organizes the application layer for membership, which contains the business
# commands (like "approve club request") and queries (like "list my enrollments").
#
# 🧪 Purpose (Technical Summary):
# Application layer initialization implementing the CQRS pattern with commands, queries,
# handlers and queue listeners for the membership module.
#
# 🔗 Dependencies:
# - app.modules.membership.domain (aggregates, unit of work)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.membership.presentation (API endpoints use application handlers)
# - app.modules.membership.container (handler registration)

"""
Membership Application Layer

Application Components:
- Commands: writes (club requests, enrollments, users, payments, tournaments, trainings)
- Queries: read-only questions
- Handlers: command and query execution inside the unit of work
- Listeners: queue event bindings
"""
