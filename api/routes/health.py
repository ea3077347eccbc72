"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from datetime import datetime, timezone
import platform

from fastapi import APIRouter, Request

from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway


router = APIRouter()

SERVICE_NAME = "nativepay-demo"
VERSION = "1.0.0"


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "version": VERSION,
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check(request: Request):
    """
    Readiness check endpoint.

    Ready once the registry and payment gateway are attached to the app.
    """
    state = request.app.state
    repository = getattr(state, "order_repository", None)
    gateway = getattr(state, "payment_gateway", None)
    ready = repository is not None and gateway is not None

    return {
        "status": "ready" if ready else "not_ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "api": "ok",
            "order_repository": "ok" if repository is not None else "missing",
            "payment_gateway": (
                "missing" if gateway is None
                else "mock" if isinstance(gateway, MockPaymentGateway)
                else "ok"
            ),
        }
    }
