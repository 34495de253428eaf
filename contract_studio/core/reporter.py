"""Mapping of compile and deploy results onto API responses."""

from contract_studio.models.compilation import (
    CompilationResult,
    CompilationSuccess,
    CompileResponse,
)
from contract_studio.models.deployment import (
    DeploymentResult,
    DeploymentSuccess,
    DeployResponse,
    ExternalDeploymentResponse,
    ExternalDeploymentResult,
)
from contract_studio.models.network import NetworkInfo, NetworkInfoResponse

COMPILATION_SUCCESSFUL = "Compilation successful"
COMPILATION_DEGRADED = "Compilation finished without a readable artifact"


def network_snapshot(
    network: NetworkInfo, contract_address: str, transaction_hash: str | None = None
) -> NetworkInfoResponse:
    """Network details with explorer links for a deployed contract."""
    return NetworkInfoResponse(
        chain_id=network.chain_id,
        network_name=network.network_name,
        explorer_url=network.address_url(contract_address),
        tx_explorer_url=network.tx_url(transaction_hash) if transaction_hash else None,
    )


def compilation_response(result: CompilationResult) -> CompileResponse:
    """Flatten a compilation result."""
    if isinstance(result, CompilationSuccess):
        degraded = result.abi is None
        return CompileResponse(
            success=True,
            abi=result.abi,
            bytecode=result.bytecode,
            contract_name=result.contract_name,
            backend=result.backend,
            output=COMPILATION_DEGRADED if degraded else COMPILATION_SUCCESSFUL,
            warnings=result.warnings,
            warning=result.warning,
        )

    return CompileResponse(
        success=False,
        backend=result.backend,
        error=result.error,
        error_kind=result.error_kind,
    )


def deployment_response(result: DeploymentResult) -> DeployResponse:
    """Flatten a custodial deployment result."""
    if isinstance(result, DeploymentSuccess):
        return DeployResponse(
            success=True,
            contract_address=result.contract_address,
            transaction_hash=result.transaction_hash,
            deployer_address=result.deployer_address,
            network_info=network_snapshot(
                result.network, result.contract_address, result.transaction_hash
            ),
        )

    return DeployResponse(
        success=False,
        error=result.message,
        error_kind=result.error_kind,
    )


def external_deployment_response(
    result: ExternalDeploymentResult,
) -> ExternalDeploymentResponse:
    """Flatten the outcome of a wallet-signed deployment report."""
    network_info = None
    if result.network is not None:
        network_info = network_snapshot(
            result.network, result.contract_address, result.transaction_hash
        )

    return ExternalDeploymentResponse(
        success=result.success,
        contract_address=result.contract_address,
        transaction_hash=result.transaction_hash,
        deployer_address=result.deployer_address,
        verified=result.verified,
        network_info=network_info,
        error=result.message,
        error_kind=result.error_kind,
    )
