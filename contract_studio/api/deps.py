"""Dependency injection for API endpoints."""

from typing import Annotated

from fastapi import Depends

from contract_studio.core.orchestrator import ContractOrchestrator, get_orchestrator


async def get_contract_orchestrator() -> ContractOrchestrator:
    """Get the compile/deploy orchestrator."""
    return get_orchestrator()


# Type aliases for cleaner signatures
OrchestratorDep = Annotated[ContractOrchestrator, Depends(get_contract_orchestrator)]
