"""Pytest configuration and fixtures."""

import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from contract_studio.api.deps import get_contract_orchestrator
from contract_studio.compilers.hardhat import HardhatBackend
from contract_studio.compilers.registry import BackendRegistry
from contract_studio.compilers.solc import SolcBackend
from contract_studio.core.executor import DeploymentExecutor
from contract_studio.core.orchestrator import ContractOrchestrator
from contract_studio.core.signer import SignerResolver
from contract_studio.core.verifier import ExternalDeploymentVerifier
from contract_studio.main import app
from contract_studio.models.network import NetworkInfo
from tests.fakes import HARDHAT_OK, FakeChain, fake_compile_standard, make_fake_chain


@pytest.fixture
def network() -> NetworkInfo:
    return NetworkInfo(
        chain_id=102031,
        network_name="Creditcoin Testnet",
        rpc_url="https://rpc.cc3-testnet.creditcoin.network",
        explorer_url="https://explorer.cc3-testnet.creditcoin.network",
    )

@pytest.fixture
def fake_chain() -> FakeChain:
    return make_fake_chain()

@pytest.fixture
def solc_backend() -> SolcBackend:
    return SolcBackend(compile_standard=fake_compile_standard)

@pytest.fixture
def build_orchestrator(
    network: NetworkInfo, fake_chain: FakeChain
) -> Callable[..., ContractOrchestrator]:
    """Factory for orchestrators wired to fakes."""

    def build(backends=None, configured_key: str = "", chain: FakeChain | None = None):
        chain = chain or fake_chain
        registry = BackendRegistry(
            backends if backends is not None else [SolcBackend(compile_standard=fake_compile_standard)]
        )
        return ContractOrchestrator(
            registry=registry,
            resolver=SignerResolver(chain.factory, configured_key=configured_key),
            executor=DeploymentExecutor(network),
            verifier=ExternalDeploymentVerifier(chain.factory, network),
        )

    return build

@pytest.fixture
def orchestrator(build_orchestrator) -> ContractOrchestrator:
    return build_orchestrator()

@pytest.fixture
async def client(orchestrator: ContractOrchestrator) -> AsyncClient:
    """Create an async test client talking to a fake-backed orchestrator."""
    app.dependency_overrides[get_contract_orchestrator] = lambda: orchestrator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def hardhat_backend(tmp_path: Path) -> Callable[..., HardhatBackend]:
    """Factory for a Hardhat backend running one of the stand-in scripts."""

    def build(script: str = HARDHAT_OK, timeout: float = 30.0) -> HardhatBackend:
        project_dir = tmp_path / "hardhat"
        project_dir.mkdir(exist_ok=True)
        script_path = tmp_path / "fake_hardhat.py"
        script_path.write_text(textwrap.dedent(script))
        return HardhatBackend(
            project_dir=project_dir,
            command=[sys.executable, str(script_path)],
            timeout=timeout,
            workspace_root=tmp_path / "work",
        )

    return build
