# 📄 File: app/modules/membership/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the membership system of the association: families and their dependants,
# clubs and the requests to open or join them, tournaments and trainings.
# 🧪 Purpose (Technical Summary):
# Package initialization for the membership module implementing domain-driven design with
# a CQRS application layer, a unit of work over SQLAlchemy or memory, and RabbitMQ
# event listeners.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, kombu, pydantic, passlib, python-jose
# 🔄 Connected Modules / Calls From:
# app.main, app.api.v1.router

"""
Membership Module

Architecture follows Domain-Driven Design:
- Domain: aggregates, repository interfaces, unit of work, events
- Application: commands, queries, handlers, queue listeners
- Infrastructure: SQLAlchemy and in-memory persistence
- Presentation: API endpoints and request/response schemas
"""
