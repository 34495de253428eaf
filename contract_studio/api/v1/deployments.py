"""Reports of deployments signed outside the server."""

from fastapi import APIRouter

from contract_studio.api.deps import OrchestratorDep
from contract_studio.core.reporter import external_deployment_response
from contract_studio.models.deployment import (
    ExternalDeploymentRequest,
    ExternalDeploymentResponse,
)

router = APIRouter()


@router.post(
    "/external",
    response_model=ExternalDeploymentResponse,
    response_model_exclude_unset=True,
    summary="Report a wallet-signed deployment",
)
async def report_external_deployment(
    data: ExternalDeploymentRequest,
    orchestrator: OrchestratorDep,
) -> ExternalDeploymentResponse:
    """Attach network links to a browser-wallet deployment, optionally verifying it."""
    result = await orchestrator.record_external_deployment(data)
    return external_deployment_response(result)
