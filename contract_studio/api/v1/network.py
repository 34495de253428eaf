"""Network metadata endpoint."""

from fastapi import APIRouter

from contract_studio.api.deps import OrchestratorDep
from contract_studio.models.network import NetworkResponse

router = APIRouter()


@router.get("", response_model=NetworkResponse, summary="Target network")
async def get_network(orchestrator: OrchestratorDep) -> NetworkResponse:
    network = orchestrator.network
    return NetworkResponse(
        chain_id=network.chain_id,
        network_name=network.network_name,
        rpc_url=network.rpc_url,
        explorer_url=network.explorer_url,
    )
