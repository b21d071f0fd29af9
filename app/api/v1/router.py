# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: every request is sent on to the part
# of the membership service that knows how to answer it.
# 🧪 Purpose (Technical Summary):
# Main API v1 router aggregation: health checks plus the membership module router.
# 🔗 Dependencies:
# FastAPI, app.api.v1.health, app.modules.membership.presentation.api
# 🔄 Connected Modules / Calls From:
# app.main

import logging
from typing import Any, Dict

from fastapi import APIRouter

from app.modules.membership.presentation.api import membership_router

from . import get_api_info
from .health import health_router

logger = logging.getLogger(__name__)

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["Health Check"])
api_v1_router.include_router(membership_router)


@api_v1_router.get(
    "/",
    summary="API v1 Information",
    description="Get API v1 version information",
    tags=["API Info"],
)
async def api_v1_info() -> Dict[str, Any]:
    return get_api_info()
