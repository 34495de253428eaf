"""Deployment data models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from contract_studio.models.errors import ErrorKind
from contract_studio.models.network import NetworkInfo, NetworkInfoResponse


class CompiledArtifact(BaseModel):
    """ABI and creation bytecode from a successful compilation."""

    model_config = ConfigDict(frozen=True)

    abi: list[dict[str, Any]]
    bytecode: str

    @property
    def constructor_inputs(self) -> list[dict[str, Any]]:
        for entry in self.abi:
            if entry.get("type") == "constructor":
                return list(entry.get("inputs", []))
        return []


class CustodialKey(BaseModel):
    """Private key held by the server."""

    model_config = ConfigDict(frozen=True)

    private_key: str = Field(repr=False)


class ExternalWallet(BaseModel):
    """Address of a wallet that signs in the caller's browser."""

    model_config = ConfigDict(frozen=True)

    address: str


SigningCredential = CustodialKey | ExternalWallet


class DeploymentSuccess(BaseModel):
    """Contract mined on the target network."""

    success: Literal[True] = True
    contract_address: str
    transaction_hash: str
    deployer_address: str
    network: NetworkInfo


class DeploymentFailure(BaseModel):
    """Deployment was not carried out, or did not confirm."""

    success: Literal[False] = False
    error_kind: ErrorKind
    message: str


DeploymentResult = DeploymentSuccess | DeploymentFailure


class DeployRequest(BaseModel):
    """Request body for the deploy endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    bytecode: str = Field(..., min_length=1)
    abi: list[dict[str, Any]]
    private_key: str | None = Field(default=None, repr=False)
    wallet_address: str | None = None
    constructor_args: list[Any] = Field(default_factory=list)

    @property
    def artifact(self) -> CompiledArtifact:
        return CompiledArtifact(abi=self.abi, bytecode=self.bytecode)


class DeployResponse(BaseModel):
    """Response body for the deploy endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    contract_address: str | None = None
    transaction_hash: str | None = None
    deployer_address: str | None = None
    network_info: NetworkInfoResponse | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None


class ExternalDeploymentRequest(BaseModel):
    """A deployment signed and submitted by the caller's own wallet."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    contract_address: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    transaction_hash: str = Field(..., pattern=r"^0x[0-9a-fA-F]{64}$")
    deployer_address: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    verify: bool = False


class ExternalDeploymentResult(BaseModel):
    """Outcome of reporting a wallet-signed deployment."""

    success: bool
    contract_address: str
    transaction_hash: str
    deployer_address: str
    verified: bool = False
    network: NetworkInfo | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None


class ExternalDeploymentResponse(BaseModel):
    """Response body for wallet-signed deployment reports."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    contract_address: str
    transaction_hash: str
    deployer_address: str
    verified: bool = False
    network_info: NetworkInfoResponse | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None


class WalletAddressRequest(BaseModel):
    """Private key to inspect."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    private_key: str = Field(..., repr=False)


class WalletAddressResponse(BaseModel):
    """Address derived from a private key, or why it could not be."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool
    address: str | None = None
    error: str | None = None
