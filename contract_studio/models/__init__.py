"""Data models for Contract Studio."""

from contract_studio.models.compilation import (
    FALLBACK_CONTRACT_NAME,
    VIRTUAL_SOURCE_NAME,
    BackendListResponse,
    CompilationFailure,
    CompilationRequest,
    CompilationResult,
    CompilationSuccess,
    CompileRequest,
    CompileResponse,
    CompilerSettings,
    ContractSource,
    Diagnostic,
)
from contract_studio.models.deployment import (
    CompiledArtifact,
    CustodialKey,
    DeploymentFailure,
    DeploymentResult,
    DeploymentSuccess,
    DeployRequest,
    DeployResponse,
    ExternalDeploymentRequest,
    ExternalDeploymentResponse,
    ExternalDeploymentResult,
    ExternalWallet,
    SigningCredential,
    WalletAddressRequest,
    WalletAddressResponse,
)
from contract_studio.models.errors import ErrorKind
from contract_studio.models.network import (
    NetworkInfo,
    NetworkInfoResponse,
    NetworkResponse,
)

__all__ = [
    # Compilation models
    "FALLBACK_CONTRACT_NAME",
    "VIRTUAL_SOURCE_NAME",
    "ContractSource",
    "CompilerSettings",
    "CompilationRequest",
    "Diagnostic",
    "CompilationSuccess",
    "CompilationFailure",
    "CompilationResult",
    "CompileRequest",
    "CompileResponse",
    "BackendListResponse",
    # Deployment models
    "CompiledArtifact",
    "CustodialKey",
    "ExternalWallet",
    "SigningCredential",
    "DeploymentSuccess",
    "DeploymentFailure",
    "DeploymentResult",
    "DeployRequest",
    "DeployResponse",
    "ExternalDeploymentRequest",
    "ExternalDeploymentResult",
    "ExternalDeploymentResponse",
    "WalletAddressRequest",
    "WalletAddressResponse",
    # Errors
    "ErrorKind",
    # Network models
    "NetworkInfo",
    "NetworkInfoResponse",
    "NetworkResponse",
]
