"""Registry of configured compilation backends."""

from contract_studio.compilers.base import CompilationBackend
from contract_studio.compilers.hardhat import HardhatBackend
from contract_studio.compilers.solc import SolcBackend
from contract_studio.config import Settings
from contract_studio.utils.logging import get_logger

logger = get_logger(__name__)


class BackendRegistry:
    """Ordered collection of compilation backends.

    Registration order is the fallback order.
    """

    def __init__(self, backends: list[CompilationBackend] | None = None):
        self._backends: dict[str, CompilationBackend] = {}
        for backend in backends or []:
            self.register(backend)

    def register(self, backend: CompilationBackend) -> None:
        """Register a backend instance."""
        if backend.name in self._backends:
            logger.warning(f"Overwriting existing backend: {backend.name}")

        self._backends[backend.name] = backend
        logger.debug(f"Registered backend: {backend.name}")

    def get(self, name: str) -> CompilationBackend | None:
        """Get a backend by name."""
        return self._backends.get(name)

    def ordered(self) -> list[CompilationBackend]:
        """Backends in fallback order."""
        return list(self._backends.values())

    def list_backends(self) -> list[str]:
        """List all registered backend names."""
        return list(self._backends.keys())


def build_backend(name: str, config: Settings) -> CompilationBackend:
    """Instantiate the backend called ``name`` from settings."""
    if name == "solc":
        return SolcBackend(
            solc_version=config.solc_version,
            auto_install=config.solc_auto_install,
        )
    if name == "hardhat":
        return HardhatBackend(
            project_dir=config.hardhat_project_dir,
            command=config.hardhat_command,
            timeout=config.hardhat_timeout,
            workspace_root=config.hardhat_workspace_dir,
        )
    raise ValueError(f"Unknown compilation backend: {name}")


def build_registry(config: Settings) -> BackendRegistry:
    """Registry holding every backend named in ``config.compiler_backends``."""
    return BackendRegistry([build_backend(name, config) for name in config.compiler_backends])
