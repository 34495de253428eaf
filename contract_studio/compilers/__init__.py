"""Compilation backends for Contract Studio."""

from contract_studio.compilers.base import CompilationBackend
from contract_studio.compilers.hardhat import HardhatBackend
from contract_studio.compilers.registry import BackendRegistry, build_backend, build_registry
from contract_studio.compilers.scratch import ScratchSource
from contract_studio.compilers.solc import SolcBackend

__all__ = [
    "CompilationBackend",
    "BackendRegistry",
    "build_backend",
    "build_registry",
    "HardhatBackend",
    "ScratchSource",
    "SolcBackend",
]
