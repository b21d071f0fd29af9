# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# Endpoints that tell the load balancer and monitoring whether the membership service is
# alive and whether its database and background workers are working.
# 🧪 Purpose (Technical Summary):
# Liveness (``/health``) and readiness (``/health/ready``) checks. Readiness runs the
# database health check of the container's connection manager, when one is in use,
# and reports the queue consumer threads.
# 🔗 Dependencies:
# FastAPI, app.shared.config.settings, app.modules.membership.presentation.dependencies
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, load balancers

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.modules.membership.container import MembershipContainer
from app.modules.membership.presentation.dependencies import get_container
from app.shared.utils.helpers import utc_now

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get(
    "/health",
    summary="Basic Health Check",
    description="Liveness check for load balancers",
)
async def health_check(container: MembershipContainer = Depends(get_container)) -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": "ncfca-membership-api",
        "version": container.settings.APP_VERSION,
    }


@health_router.get(
    "/health/ready",
    summary="Readiness Check",
    description="Database and consumer status",
)
async def readiness_check(container: MembershipContainer = Depends(get_container)) -> JSONResponse:
    components: Dict[str, Any] = {}
    overall_status = "healthy"

    if container.database is not None:
        db_health = await container.database.health_check()
        components["database"] = db_health
        if db_health.get("status") != "healthy":
            overall_status = "unhealthy"
    else:
        components["database"] = {"status": "healthy", "backend": container.settings.PERSISTENCE_BACKEND}

    components["consumers"] = {
        consumer.queue_name: "running" if consumer.is_running else "stopped"
        for consumer in container.queue_consumers
    }

    if overall_status != "healthy":
        logger.warning(f"Readiness check failed: {components}")

    return JSONResponse(
        status_code=200 if overall_status == "healthy" else 503,
        content={
            "status": overall_status,
            "timestamp": utc_now().isoformat(),
            "components": components,
        },
    )
