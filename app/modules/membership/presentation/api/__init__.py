# 📄 File: app/modules/membership/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the membership web endpoints and their data formats.
# 🧪 Purpose (Technical Summary):
# API package re-exporting the v1 membership router.
# 🔗 Dependencies:
# v1 routers
# 🔄 Connected Modules / Calls From:
# app.api.v1.router

from .v1 import membership_router

__all__ = ["membership_router"]
