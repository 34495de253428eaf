"""Signer resolution for deployments.

Decides which credential a deployment uses and, for custodial keys,
produces an account bound to a network-connected Web3 client.
"""

import asyncio
import re
from dataclasses import dataclass

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_keys.exceptions import ValidationError as KeyValidationError
from web3 import Web3

from contract_studio.core.transport import Web3Factory, classify_transport_error
from contract_studio.models.deployment import (
    CustodialKey,
    DeploymentFailure,
    ExternalWallet,
    SigningCredential,
)
from contract_studio.models.errors import ErrorKind
from contract_studio.utils.logging import get_logger

logger = get_logger(__name__)

PRIVATE_KEY_PATTERN = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")

CREDENTIAL_MISSING_MESSAGE = (
    "Private key not configured. Please set PRIVATE_KEY environment variable."
)
INVALID_KEY_MESSAGE = "Invalid private key format"


@dataclass(frozen=True)
class CustodialSigner:
    """Server-held account plus the client used to reach the network."""

    account: LocalAccount
    web3: Web3

    @property
    def address(self) -> str:
        return self.account.address


def load_account(private_key: str) -> LocalAccount | DeploymentFailure:
    """Validate key material and derive its account without any network use."""
    key = private_key.strip()
    if not PRIVATE_KEY_PATTERN.match(key):
        return DeploymentFailure(
            error_kind=ErrorKind.INVALID_CREDENTIAL,
            message=INVALID_KEY_MESSAGE,
        )
    if not key.startswith("0x"):
        key = "0x" + key
    try:
        return Account.from_key(key)
    except (ValueError, KeyValidationError):
        # 64 hex digits but outside the curve order
        return DeploymentFailure(
            error_kind=ErrorKind.INVALID_CREDENTIAL,
            message=INVALID_KEY_MESSAGE,
        )


class SignerResolver:
    """Picks the signing credential for a deployment.

    Args:
        web3_factory: Builds the client custodial signers use
        configured_key: Server-wide key used when a request brings none
    """

    def __init__(self, web3_factory: Web3Factory, configured_key: str = ""):
        self._web3_factory = web3_factory
        self._configured_key = configured_key

    def select_credential(
        self,
        private_key: str | None = None,
        wallet_address: str | None = None,
    ) -> SigningCredential | None:
        """Choose exactly one credential; a non-empty key always wins."""
        key = (private_key or "").strip() or self._configured_key.strip()
        if key:
            return CustodialKey(private_key=key)
        if wallet_address and wallet_address.strip():
            return ExternalWallet(address=wallet_address.strip())
        return None

    async def resolve(
        self, credential: SigningCredential | None
    ) -> CustodialSigner | ExternalWallet | DeploymentFailure:
        """Turn a credential into something that can deploy.

        Custodial keys are validated, connected and checked for a non-zero
        balance. External wallets are returned as-is since signing happens
        in the caller's browser.
        """
        if credential is None:
            return DeploymentFailure(
                error_kind=ErrorKind.CREDENTIAL_MISSING,
                message=CREDENTIAL_MISSING_MESSAGE,
            )

        if isinstance(credential, ExternalWallet):
            return credential

        account = load_account(credential.private_key)
        if isinstance(account, DeploymentFailure):
            logger.warning("signer.invalid_key")
            return account

        web3 = self._web3_factory()
        try:
            balance = await asyncio.to_thread(web3.eth.get_balance, account.address)
        except Exception as e:
            logger.error(
                "signer.balance_check_failed",
                address=account.address,
                error=str(e),
            )
            return classify_transport_error(e)

        if balance == 0:
            logger.info("signer.unfunded", address=account.address)
            return DeploymentFailure(
                error_kind=ErrorKind.INSUFFICIENT_FUNDS,
                message=f"Insufficient balance. Please fund your wallet: {account.address}",
            )

        logger.info("signer.resolved", address=account.address)
        return CustodialSigner(account=account, web3=web3)
