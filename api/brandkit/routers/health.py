import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ..models.schemas import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def liveness() -> str:
    """Liveness marker; touches nothing."""
    return "Backend running"


@router.get("/healthz", response_model=HealthResponse)
async def health(request: Request):
    """Readiness check: database ping plus a credential check against the completions endpoint."""
    database = request.app.state.database
    client = request.app.state.completions_client
    services = {
        "database": await asyncio.to_thread(database.ping),
        "completions": await client.health_check(),
    }
    if not all(services.values()):
        logger.warning("Health check degraded", extra={"services": services})
        return HealthResponse(ok=False, status="degraded", services=services)
    return HealthResponse(ok=True, status="healthy", services=services)
