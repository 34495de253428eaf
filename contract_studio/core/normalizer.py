"""Contract source normalization."""

import re

from contract_studio.models.compilation import (
    FALLBACK_CONTRACT_NAME,
    CompilationRequest,
    CompilerSettings,
    ContractSource,
)

CONTRACT_DECLARATION = re.compile(r"contract\s+(\w+)")


def extract_contract_name(code: str) -> str:
    """Return the identifier of the first contract declaration in ``code``.

    Only used to pick the right unit out of the compiler output, so no
    attempt is made to skip comments or strings.
    """
    match = CONTRACT_DECLARATION.search(code)
    return match.group(1) if match else FALLBACK_CONTRACT_NAME


def normalize_source(code: str) -> ContractSource:
    """Capture ``code`` together with its primary contract name."""
    return ContractSource(code=code, contract_name=extract_contract_name(code))


def build_compilation_request(code: str, optimizer_runs: int = 200) -> CompilationRequest:
    """Wrap raw source into a request with the fixed compiler settings."""
    return CompilationRequest(
        source=normalize_source(code),
        settings=CompilerSettings(optimizer_runs=optimizer_runs),
    )
