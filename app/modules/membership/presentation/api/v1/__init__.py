# 📄 File: app/modules/membership/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Puts all membership web endpoints behind one entrance.
# 🧪 Purpose (Technical Summary):
# Aggregates the membership v1 routers into ``membership_router``.
# 🔗 Dependencies:
# FastAPI APIRouter, endpoint modules
# 🔄 Connected Modules / Calls From:
# app.api.v1.router

from fastapi import APIRouter

from .admin import admin_router
from .auth import auth_router
from .club_management import club_management_router
from .club_requests import club_requests_router
from .clubs import clubs_router
from .enrollments import enrollments_router
from .payments import payments_router
from .tournaments import tournaments_router
from .trainings import trainings_router
from .users import users_router
from .webhooks import webhooks_router

membership_router = APIRouter()

membership_router.include_router(auth_router, tags=["Authentication"])
membership_router.include_router(users_router, tags=["Users"])
membership_router.include_router(club_requests_router, tags=["Club Requests"])
membership_router.include_router(admin_router, tags=["Administration"])
membership_router.include_router(clubs_router, tags=["Clubs"])
membership_router.include_router(enrollments_router, tags=["Enrollments"])
membership_router.include_router(club_management_router, tags=["Club Management"])
membership_router.include_router(tournaments_router, tags=["Tournaments"])
membership_router.include_router(trainings_router, tags=["Trainings"])
membership_router.include_router(payments_router, tags=["Payments"])
membership_router.include_router(webhooks_router, tags=["Webhooks"])

__all__ = ["membership_router"]
