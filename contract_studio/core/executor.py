"""Contract-creation transactions signed by a custodial account."""

import asyncio
from typing import Any

from web3 import Web3

from contract_studio.core.signer import CustodialSigner
from contract_studio.core.transport import classify_transport_error
from contract_studio.models.deployment import (
    CompiledArtifact,
    DeploymentFailure,
    DeploymentResult,
    DeploymentSuccess,
)
from contract_studio.models.errors import ErrorKind
from contract_studio.models.network import NetworkInfo
from contract_studio.utils.logging import get_logger

logger = get_logger(__name__)

REVERTED_MESSAGE = "Contract deployment reverted"


class DeploymentExecutor:
    """Builds, signs and submits deployments, then waits for confirmation.

    Args:
        network: Chain the transaction targets
        gas_limit: Gas ceiling for the creation transaction
        gas_price_gwei: Legacy gas price
        confirmation_timeout: Seconds to wait for the receipt
    """

    def __init__(
        self,
        network: NetworkInfo,
        gas_limit: int = 3_000_000,
        gas_price_gwei: int = 20,
        confirmation_timeout: float = 120.0,
    ):
        self.network = network
        self.gas_limit = gas_limit
        self.gas_price = Web3.to_wei(gas_price_gwei, "gwei")
        self.confirmation_timeout = confirmation_timeout

    async def deploy(
        self,
        signer: CustodialSigner,
        artifact: CompiledArtifact,
        constructor_args: list[Any] | None = None,
    ) -> DeploymentResult:
        """Deploy ``artifact`` and wait for one confirmation."""
        args = list(constructor_args or [])
        logger.info(
            "deploy.started",
            deployer=signer.address,
            chain_id=self.network.chain_id,
            constructor_args=len(args),
        )

        try:
            tx_hash, receipt = await asyncio.to_thread(
                self._submit_and_wait, signer, artifact, args
            )
        except Exception as e:
            failure = classify_transport_error(e)
            logger.error(
                "deploy.failed",
                deployer=signer.address,
                error_kind=failure.error_kind.value,
                error=str(e),
            )
            return failure

        if receipt.get("status") == 0:
            logger.error("deploy.reverted", transaction_hash=tx_hash)
            return DeploymentFailure(
                error_kind=ErrorKind.UNKNOWN,
                message=REVERTED_MESSAGE,
            )

        contract_address = receipt["contractAddress"]
        logger.info(
            "deploy.confirmed",
            contract_address=contract_address,
            transaction_hash=tx_hash,
            block=receipt.get("blockNumber"),
        )
        return DeploymentSuccess(
            contract_address=contract_address,
            transaction_hash=tx_hash,
            deployer_address=signer.address,
            network=self.network,
        )

    def build_transaction(
        self,
        signer: CustodialSigner,
        artifact: CompiledArtifact,
        args: list[Any],
    ) -> dict[str, Any]:
        """Creation transaction with constructor args in ABI order."""
        web3 = signer.web3
        contract = web3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        return contract.constructor(*args).build_transaction(
            {
                "from": signer.address,
                "nonce": web3.eth.get_transaction_count(signer.address),
                "gas": self.gas_limit,
                "gasPrice": self.gas_price,
                "chainId": self.network.chain_id,
            }
        )

    def _submit_and_wait(
        self,
        signer: CustodialSigner,
        artifact: CompiledArtifact,
        args: list[Any],
    ) -> tuple[str, Any]:
        """Blocking part of a deployment; runs in a worker thread."""
        web3 = signer.web3
        tx = self.build_transaction(signer, artifact, args)
        signed = signer.account.sign_transaction(tx)
        raw_hash = web3.eth.send_raw_transaction(signed.raw_transaction)
        tx_hash = Web3.to_hex(raw_hash)
        logger.info("deploy.submitted", transaction_hash=tx_hash)

        receipt = web3.eth.wait_for_transaction_receipt(
            raw_hash, timeout=self.confirmation_timeout
        )
        return tx_hash, receipt
