"""Core functionality for Contract Studio."""

from contract_studio.core.exceptions import (
    BackendNotFoundError,
    ContractStudioError,
)
from contract_studio.core.executor import DeploymentExecutor
from contract_studio.core.normalizer import extract_contract_name, normalize_source
from contract_studio.core.orchestrator import (
    ContractOrchestrator,
    create_orchestrator,
    get_orchestrator,
)
from contract_studio.core.signer import CustodialSigner, SignerResolver, load_account
from contract_studio.core.verifier import ExternalDeploymentVerifier

__all__ = [
    "ContractStudioError",
    "BackendNotFoundError",
    "DeploymentExecutor",
    "extract_contract_name",
    "normalize_source",
    "ContractOrchestrator",
    "create_orchestrator",
    "get_orchestrator",
    "CustodialSigner",
    "SignerResolver",
    "load_account",
    "ExternalDeploymentVerifier",
]
