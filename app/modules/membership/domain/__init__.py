# 📄 File: app/modules/membership/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The business rules of the membership system, free of any database or web code.
# 🧪 Purpose (Technical Summary):
# Domain layer: aggregates (models), repository contracts, unit of work contract and
# domain events.
# 🔗 Dependencies:
# pydantic, app.shared.core
# 🔄 Connected Modules / Calls From:
# Application and infrastructure layers of the membership module
