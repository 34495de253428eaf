"""Compilation data models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from contract_studio.models.errors import ErrorKind

# Name under which the submitted source is handed to the compiler
VIRTUAL_SOURCE_NAME = "Contract.sol"

FALLBACK_CONTRACT_NAME = "MyContract"


class ContractSource(BaseModel):
    """Raw contract text plus the name of its primary contract."""

    model_config = ConfigDict(frozen=True)

    code: str
    contract_name: str = FALLBACK_CONTRACT_NAME


class CompilerSettings(BaseModel):
    """Fixed settings sent along with every compilation."""

    model_config = ConfigDict(frozen=True)

    optimizer_enabled: bool = True
    optimizer_runs: int = 200
    output_selection: tuple[str, ...] = ("abi", "evm.bytecode")


class CompilationRequest(BaseModel):
    """A source plus the settings used to compile it."""

    model_config = ConfigDict(frozen=True)

    source: ContractSource
    settings: CompilerSettings = Field(default_factory=CompilerSettings)

    @property
    def contract_name(self) -> str:
        return self.source.contract_name

    def to_standard_json(self) -> dict[str, Any]:
        """Build the compiler's standard-JSON input."""
        return {
            "language": "Solidity",
            "sources": {VIRTUAL_SOURCE_NAME: {"content": self.source.code}},
            "settings": {
                "optimizer": {
                    "enabled": self.settings.optimizer_enabled,
                    "runs": self.settings.optimizer_runs,
                },
                "outputSelection": {
                    "*": {"*": list(self.settings.output_selection)},
                },
            },
        }


class Diagnostic(BaseModel):
    """A single compiler message."""

    severity: str
    message: str
    formatted_message: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    @classmethod
    def from_compiler(cls, entry: dict[str, Any]) -> "Diagnostic":
        return cls(
            severity=entry.get("severity", "error"),
            message=entry.get("message", ""),
            formatted_message=entry.get("formattedMessage"),
        )

    def render(self) -> str:
        return self.formatted_message or self.message


class CompilationSuccess(BaseModel):
    """Compiled artifact for the requested contract.

    ``abi`` and ``bytecode`` are both ``None`` when the build tool ran but
    its artifact could not be read; ``warning`` explains why.
    """

    success: Literal[True] = True
    contract_name: str
    backend: str
    abi: list[dict[str, Any]] | None = None
    bytecode: str | None = None
    warnings: list[str] = Field(default_factory=list)
    warning: str | None = None


class CompilationFailure(BaseModel):
    """Compilation did not produce an artifact."""

    success: Literal[False] = False
    error: str
    error_kind: ErrorKind
    backend: str | None = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)


CompilationResult = CompilationSuccess | CompilationFailure


class CompileRequest(BaseModel):
    """Request body for compile endpoints."""

    code: str = Field(..., min_length=1, strict=True)


class CompileResponse(BaseModel):
    """Response body for compile endpoints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    abi: list[dict[str, Any]] | None = None
    bytecode: str | None = None
    contract_name: str | None = None
    backend: str | None = None
    output: str | None = None
    warnings: list[str] | None = None
    warning: str | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None


class BackendListResponse(BaseModel):
    """Configured compilation backends, in fallback order."""

    backends: list[str]
