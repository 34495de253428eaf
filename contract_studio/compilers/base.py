"""Base class for compilation backends."""

from abc import ABC, abstractmethod

from contract_studio.models.compilation import (
    CompilationFailure,
    CompilationRequest,
    CompilationResult,
)
from contract_studio.models.errors import ErrorKind
from contract_studio.utils.logging import get_logger


class CompilationBackend(ABC):
    """A way of turning contract source into ABI and bytecode.

    Backends implement:
    - name: Identifier used in configuration and URLs
    - description: What the backend runs
    - compile(): Produce a CompilationResult, never raise
    """

    def __init__(self):
        self.logger = get_logger(f"compiler.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name/identifier."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the backend."""
        pass

    @abstractmethod
    async def compile(self, request: CompilationRequest) -> CompilationResult:
        """Compile the request's source.

        Args:
            request: Source and compiler settings

        Returns:
            Success with the artifact, or a failure with its kind
        """
        pass

    def unavailable(self, message: str) -> CompilationFailure:
        """Failure for a backend that could not run at all."""
        return CompilationFailure(
            error=message,
            error_kind=ErrorKind.BACKEND_UNAVAILABLE,
            backend=self.name,
        )
