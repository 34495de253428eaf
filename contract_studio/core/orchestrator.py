"""Compile-Deploy Orchestrator.

Coordinates the compilation backends and the deployment components:

1. compile - normalize the source, try each backend in order
2. deploy - resolve a signer, submit the creation transaction
3. record_external_deployment - report a wallet-signed deployment
"""

from functools import lru_cache
from typing import Any

from contract_studio.compilers.base import CompilationBackend
from contract_studio.compilers.registry import BackendRegistry, build_registry
from contract_studio.config import Settings, get_settings
from contract_studio.core.executor import DeploymentExecutor
from contract_studio.core.normalizer import build_compilation_request
from contract_studio.core.signer import SignerResolver
from contract_studio.core.transport import http_web3_factory
from contract_studio.core.verifier import ExternalDeploymentVerifier
from contract_studio.models.compilation import CompilationFailure, CompilationResult
from contract_studio.models.deployment import (
    CompiledArtifact,
    DeploymentFailure,
    DeploymentResult,
    ExternalDeploymentRequest,
    ExternalDeploymentResult,
    ExternalWallet,
)
from contract_studio.models.errors import ErrorKind
from contract_studio.models.network import NetworkInfo
from contract_studio.utils.logging import get_logger


class ContractOrchestrator:
    """Runs compilations and deployments for the API.

    Every public method returns a tagged result rather than raising.
    """

    def __init__(
        self,
        registry: BackendRegistry,
        resolver: SignerResolver,
        executor: DeploymentExecutor,
        verifier: ExternalDeploymentVerifier,
        optimizer_runs: int = 200,
    ):
        self.registry = registry
        self.resolver = resolver
        self.executor = executor
        self.verifier = verifier
        self.optimizer_runs = optimizer_runs
        self.logger = get_logger("orchestrator")

    @property
    def network(self) -> NetworkInfo:
        return self.executor.network

    async def compile(
        self,
        code: str,
        backends: list[CompilationBackend] | None = None,
    ) -> CompilationResult:
        """Compile ``code`` with the first backend that succeeds.

        Args:
            code: Raw contract source
            backends: Backends to try, in order; defaults to the registry order

        Returns:
            The first success, or the last backend's failure
        """
        request = build_compilation_request(code, optimizer_runs=self.optimizer_runs)
        candidates = backends if backends is not None else self.registry.ordered()

        self.logger.info(
            "orchestrator.compile.started",
            contract=request.contract_name,
            backends=[b.name for b in candidates],
        )

        result: CompilationResult = CompilationFailure(
            error="No compilation backend configured",
            error_kind=ErrorKind.BACKEND_UNAVAILABLE,
        )
        for backend in candidates:
            try:
                result = await backend.compile(request)
            except Exception as e:
                # One broken backend must not stop the rest from running
                self.logger.error(
                    "orchestrator.compile.backend_crashed",
                    backend=backend.name,
                    error=str(e),
                    exc_info=True,
                )
                result = CompilationFailure(
                    error=f"Compilation backend {backend.name} failed unexpectedly",
                    error_kind=ErrorKind.BACKEND_UNAVAILABLE,
                    backend=backend.name,
                )
            if result.success:
                break
            self.logger.warning(
                "orchestrator.compile.backend_failed",
                backend=backend.name,
                error_kind=result.error_kind.value,
            )

        self.logger.info(
            "orchestrator.compile.completed",
            contract=request.contract_name,
            success=result.success,
            backend=result.backend,
        )
        return result

    async def deploy(
        self,
        artifact: CompiledArtifact,
        constructor_args: list[Any] | None = None,
        private_key: str | None = None,
        wallet_address: str | None = None,
    ) -> DeploymentResult:
        """Deploy a compiled artifact with a custodial key.

        A caller holding only a browser wallet gets a credential failure
        pointing it at its own signing flow.
        """
        args = list(constructor_args or [])
        expected = len(artifact.constructor_inputs)
        if expected != len(args):
            return DeploymentFailure(
                error_kind=ErrorKind.INVALID_INPUT,
                message=f"Constructor expects {expected} argument(s), got {len(args)}",
            )

        credential = self.resolver.select_credential(private_key, wallet_address)
        signer = await self.resolver.resolve(credential)

        if isinstance(signer, DeploymentFailure):
            self.logger.info(
                "orchestrator.deploy.signer_unavailable",
                error_kind=signer.error_kind.value,
            )
            return signer

        if isinstance(signer, ExternalWallet):
            return DeploymentFailure(
                error_kind=ErrorKind.CREDENTIAL_MISSING,
                message=(
                    "No server-side signing key available. Deploy from the connected "
                    f"wallet {signer.address} and report the transaction instead."
                ),
            )

        return await self.executor.deploy(signer, artifact, args)

    async def record_external_deployment(
        self, request: ExternalDeploymentRequest
    ) -> ExternalDeploymentResult:
        """Report a deployment the caller signed with its own wallet."""
        return await self.verifier.record(request)


def network_from_settings(config: Settings) -> NetworkInfo:
    """Network descriptor from configuration."""
    return NetworkInfo(
        chain_id=config.chain_id,
        network_name=config.network_name,
        rpc_url=config.rpc_url,
        explorer_url=config.explorer_url,
    )


def create_orchestrator(config: Settings) -> ContractOrchestrator:
    """Wire an orchestrator from configuration."""
    network = network_from_settings(config)
    web3_factory = http_web3_factory(config.rpc_url, timeout=config.rpc_timeout)

    return ContractOrchestrator(
        registry=build_registry(config),
        resolver=SignerResolver(web3_factory, configured_key=config.private_key),
        executor=DeploymentExecutor(
            network,
            gas_limit=config.gas_limit,
            gas_price_gwei=config.gas_price_gwei,
            confirmation_timeout=config.confirmation_timeout,
        ),
        verifier=ExternalDeploymentVerifier(web3_factory, network),
        optimizer_runs=config.optimizer_runs,
    )


@lru_cache
def get_orchestrator() -> ContractOrchestrator:
    """Get the orchestrator built from application settings."""
    return create_orchestrator(get_settings())
