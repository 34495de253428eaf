"""Target network descriptor."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class NetworkInfo(BaseModel):
    """Static description of the chain contracts are deployed to."""

    model_config = ConfigDict(frozen=True)

    chain_id: int
    network_name: str
    rpc_url: str
    explorer_url: str

    def address_url(self, address: str) -> str:
        """Explorer page for an account or contract."""
        return f"{self.explorer_url.rstrip('/')}/address/{address}"

    def tx_url(self, tx_hash: str) -> str:
        """Explorer page for a transaction."""
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"


class NetworkInfoResponse(BaseModel):
    """Network snapshot attached to a deployment response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    chain_id: int
    network_name: str
    explorer_url: str
    tx_explorer_url: str | None = None


class NetworkResponse(BaseModel):
    """Response for the network metadata endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    chain_id: int
    network_name: str
    rpc_url: str
    explorer_url: str
