"""Custom exceptions for Contract Studio."""

from typing import Any

from contract_studio.models.errors import ErrorKind


class ContractStudioError(Exception):
    """Base exception for Contract Studio.

    Raised only at the HTTP boundary; the compile and deploy pipelines
    report failures as tagged results instead.
    """

    status_code: int = 500
    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class BackendNotFoundError(ContractStudioError):
    """Requested compilation backend is not configured."""

    status_code = 404
    kind = ErrorKind.BACKEND_UNAVAILABLE

    def __init__(self, backend: str):
        super().__init__(
            f"Compilation backend not found: {backend}",
            {"backend": backend},
        )
        self.backend = backend
