"""JSON-RPC transport helpers for the target network."""

from typing import Callable

import requests
from web3 import Web3
from web3.exceptions import ProviderConnectionError, TimeExhausted

from contract_studio.models.deployment import DeploymentFailure
from contract_studio.models.errors import ErrorKind

INSUFFICIENT_FUNDS_MESSAGE = "Insufficient funds for deployment"
NETWORK_ERROR_MESSAGE = "Network connection error"
CONFIRMATION_TIMEOUT_MESSAGE = "Timed out waiting for deployment confirmation"

NETWORK_EXCEPTIONS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    ProviderConnectionError,
    ConnectionError,
    TimeoutError,
)

Web3Factory = Callable[[], Web3]


def http_web3_factory(rpc_url: str, timeout: float = 30.0) -> Web3Factory:
    """Factory producing HTTP-connected Web3 clients with a request timeout."""

    def factory() -> Web3:
        return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))

    return factory


def classify_transport_error(
    exc: BaseException, fallback: str = "Deployment failed"
) -> DeploymentFailure:
    """Map an exception raised while talking to the chain to a failure.

    Nodes report underfunded transactions as RPC errors whose message
    contains "insufficient funds"; connectivity problems surface as
    transport exceptions. Everything else keeps its own message.
    """
    if "insufficient funds" in str(exc).lower():
        return DeploymentFailure(
            error_kind=ErrorKind.INSUFFICIENT_FUNDS,
            message=INSUFFICIENT_FUNDS_MESSAGE,
        )
    if isinstance(exc, TimeExhausted):
        return DeploymentFailure(
            error_kind=ErrorKind.NETWORK_ERROR,
            message=CONFIRMATION_TIMEOUT_MESSAGE,
        )
    if isinstance(exc, NETWORK_EXCEPTIONS):
        return DeploymentFailure(
            error_kind=ErrorKind.NETWORK_ERROR,
            message=NETWORK_ERROR_MESSAGE,
        )
    return DeploymentFailure(
        error_kind=ErrorKind.UNKNOWN,
        message=str(exc) or fallback,
    )
