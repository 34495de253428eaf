"""Error categories shared by compile and deploy results."""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable failure categories surfaced to API callers."""

    INVALID_INPUT = "invalid_input"
    COMPILATION_DIAGNOSTIC = "compilation_diagnostic"
    ARTIFACT_NOT_FOUND = "artifact_not_found"
    BACKEND_UNAVAILABLE = "backend_unavailable"
    CREDENTIAL_MISSING = "credential_missing"
    INVALID_CREDENTIAL = "invalid_credential"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"
