"""Checks for deployments signed in the caller's own wallet."""

import asyncio

from web3.exceptions import TransactionNotFound

from contract_studio.core.transport import Web3Factory, classify_transport_error
from contract_studio.models.deployment import (
    ExternalDeploymentRequest,
    ExternalDeploymentResult,
)
from contract_studio.models.errors import ErrorKind
from contract_studio.models.network import NetworkInfo
from contract_studio.utils.logging import get_logger

logger = get_logger(__name__)


class ExternalDeploymentVerifier:
    """Reports wallet-signed deployments, optionally confirming them on chain.

    The server never signs these transactions; it only looks up the
    receipt the caller points at.
    """

    def __init__(self, web3_factory: Web3Factory, network: NetworkInfo):
        self._web3_factory = web3_factory
        self.network = network

    async def record(self, request: ExternalDeploymentRequest) -> ExternalDeploymentResult:
        """Build the report, verifying the receipt when asked to."""
        if not request.verify:
            logger.info(
                "external_deploy.reported",
                contract_address=request.contract_address,
                transaction_hash=request.transaction_hash,
            )
            return self._result(request, success=True)

        web3 = self._web3_factory()
        try:
            receipt = await asyncio.to_thread(
                web3.eth.get_transaction_receipt, request.transaction_hash
            )
        except TransactionNotFound:
            return self._result(
                request,
                success=False,
                error_kind=ErrorKind.UNKNOWN,
                message=f"Transaction not found on {self.network.network_name}",
            )
        except Exception as e:
            failure = classify_transport_error(e, fallback="Verification failed")
            logger.error(
                "external_deploy.verification_failed",
                transaction_hash=request.transaction_hash,
                error=str(e),
            )
            return self._result(
                request,
                success=False,
                error_kind=failure.error_kind,
                message=failure.message,
            )

        mismatch = self._check_receipt(request, receipt)
        if mismatch:
            logger.warning(
                "external_deploy.mismatch",
                transaction_hash=request.transaction_hash,
                reason=mismatch,
            )
            return self._result(
                request, success=False, error_kind=ErrorKind.UNKNOWN, message=mismatch
            )

        logger.info(
            "external_deploy.verified",
            contract_address=request.contract_address,
            transaction_hash=request.transaction_hash,
        )
        return self._result(request, success=True, verified=True)

    def _check_receipt(self, request: ExternalDeploymentRequest, receipt) -> str | None:
        if receipt.get("status") == 0:
            return "Contract deployment reverted"
        deployed = receipt.get("contractAddress") or ""
        if deployed.lower() != request.contract_address.lower():
            return "Transaction did not create the reported contract"
        sender = receipt.get("from") or ""
        if sender and sender.lower() != request.deployer_address.lower():
            return "Transaction was not sent by the reported deployer"
        return None

    def _result(
        self,
        request: ExternalDeploymentRequest,
        success: bool,
        verified: bool = False,
        error_kind: ErrorKind | None = None,
        message: str | None = None,
    ) -> ExternalDeploymentResult:
        return ExternalDeploymentResult(
            success=success,
            contract_address=request.contract_address,
            transaction_hash=request.transaction_hash,
            deployer_address=request.deployer_address,
            verified=verified,
            network=self.network if success else None,
            error_kind=error_kind,
            message=message,
        )
