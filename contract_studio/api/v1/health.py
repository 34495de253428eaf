"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from contract_studio import __version__
from contract_studio.api.deps import OrchestratorDep
from contract_studio.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    environment: str
    network: str
    compiler_backends: list[str]
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(orchestrator: OrchestratorDep) -> HealthResponse:
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.app_env,
        network=orchestrator.network.network_name,
        compiler_backends=orchestrator.registry.list_backends(),
        timestamp=datetime.now(timezone.utc),
    )
