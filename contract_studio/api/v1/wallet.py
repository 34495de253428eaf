"""Wallet key inspection."""

from fastapi import APIRouter

from contract_studio.core.signer import load_account
from contract_studio.models.deployment import (
    DeploymentFailure,
    WalletAddressRequest,
    WalletAddressResponse,
)

router = APIRouter()


@router.post(
    "/address",
    response_model=WalletAddressResponse,
    response_model_exclude_none=True,
    summary="Derive the address of a private key",
)
async def derive_address(data: WalletAddressRequest) -> WalletAddressResponse:
    """Validate a key and return its address. Never touches the network."""
    account = load_account(data.private_key)
    if isinstance(account, DeploymentFailure):
        return WalletAddressResponse(valid=False, error=account.message)
    return WalletAddressResponse(valid=True, address=account.address)
