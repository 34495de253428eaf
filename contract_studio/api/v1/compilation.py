"""Contract compilation endpoints."""

from fastapi import APIRouter

from contract_studio.api.deps import OrchestratorDep
from contract_studio.core.exceptions import BackendNotFoundError
from contract_studio.core.reporter import compilation_response
from contract_studio.models.compilation import (
    BackendListResponse,
    CompileRequest,
    CompileResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=CompileResponse,
    response_model_exclude_unset=True,
    summary="Compile contract source",
    description="Tries each configured backend in order and returns the first artifact produced.",
)
async def compile_contract(
    data: CompileRequest,
    orchestrator: OrchestratorDep,
) -> CompileResponse:
    """Compile with fallback across backends."""
    result = await orchestrator.compile(data.code)
    return compilation_response(result)


@router.get(
    "/backends",
    response_model=BackendListResponse,
    summary="List compilation backends",
)
async def list_backends(orchestrator: OrchestratorDep) -> BackendListResponse:
    """Return configured backends in fallback order."""
    return BackendListResponse(backends=orchestrator.registry.list_backends())


@router.post(
    "/{backend}",
    response_model=CompileResponse,
    response_model_exclude_unset=True,
    summary="Compile with a single backend",
)
async def compile_with_backend(
    backend: str,
    data: CompileRequest,
    orchestrator: OrchestratorDep,
) -> CompileResponse:
    """Compile with one named backend, without fallback."""
    selected = orchestrator.registry.get(backend)
    if selected is None:
        raise BackendNotFoundError(backend)

    result = await orchestrator.compile(data.code, backends=[selected])
    return compilation_response(result)
