"""Custodial deployment endpoint."""

from fastapi import APIRouter

from contract_studio.api.deps import OrchestratorDep
from contract_studio.core.reporter import deployment_response
from contract_studio.models.deployment import DeployRequest, DeployResponse

router = APIRouter()


@router.post(
    "",
    response_model=DeployResponse,
    response_model_exclude_unset=True,
    summary="Deploy a compiled contract",
    description=(
        "Signs with the request's private key, or the server's configured key, "
        "and waits for one confirmation. Logical failures are reported in the body."
    ),
)
async def deploy_contract(
    data: DeployRequest,
    orchestrator: OrchestratorDep,
) -> DeployResponse:
    """Deploy bytecode and ABI from a previous compilation."""
    result = await orchestrator.deploy(
        data.artifact,
        data.constructor_args,
        private_key=data.private_key,
        wallet_address=data.wallet_address,
    )
    return deployment_response(result)
