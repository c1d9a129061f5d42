"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_order_repository
from core.domain.repositories import OrderRepository
from core.settings import get_app_settings


router = APIRouter()


@router.get("/health")
async def health_check(repository: OrderRepository = Depends(get_order_repository)):
    """
    Health check endpoint.

    Healthy when the order store answers a trivial query.
    """
    database_ok = await repository.ping()

    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": get_app_settings().service.service_name,
            "checks": {
                "database": "ok" if database_ok else "unreachable",
            },
        },
    )
