"""Unit tests for the deployment executor and transport error mapping."""

import pytest
import requests
from eth_account import Account
from web3 import Web3
from web3.exceptions import ProviderConnectionError, TimeExhausted

from contract_studio.core.executor import REVERTED_MESSAGE, DeploymentExecutor
from contract_studio.core.signer import CustodialSigner
from contract_studio.core.transport import (
    CONFIRMATION_TIMEOUT_MESSAGE,
    INSUFFICIENT_FUNDS_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    classify_transport_error,
    http_web3_factory,
)
from contract_studio.models.deployment import CompiledArtifact, DeploymentSuccess
from contract_studio.models.errors import ErrorKind
from tests.fakes import (
    CONSTRUCTOR_ABI,
    DEPLOYED_ADDRESS,
    FUNDED_ADDRESS,
    FUNDED_KEY,
    MINIMAL_CREATION_CODE,
    TX_HASH,
    make_fake_chain,
)

ARTIFACT = CompiledArtifact(abi=[CONSTRUCTOR_ABI], bytecode=MINIMAL_CREATION_CODE)


def signer_for(chain) -> CustodialSigner:
    return CustodialSigner(account=Account.from_key(FUNDED_KEY), web3=chain.web3)


class TestClassifyTransportError:
    """Tests for classify_transport_error."""

    @pytest.mark.parametrize(
        "exc",
        [
            ValueError({"code": -32000, "message": "insufficient funds for gas * price + value"}),
            Exception("Insufficient Funds"),
        ],
    )
    def test_insufficient_funds(self, exc):
        failure = classify_transport_error(exc)
        assert failure.error_kind == ErrorKind.INSUFFICIENT_FUNDS
        assert failure.message == INSUFFICIENT_FUNDS_MESSAGE

    @pytest.mark.parametrize(
        "exc",
        [
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.ReadTimeout("slow"),
            ProviderConnectionError("down"),
            ConnectionResetError("reset"),
            TimeoutError(),
        ],
    )
    def test_network_errors(self, exc):
        failure = classify_transport_error(exc)
        assert failure.error_kind == ErrorKind.NETWORK_ERROR
        assert failure.message == NETWORK_ERROR_MESSAGE

    def test_confirmation_timeout(self):
        failure = classify_transport_error(TimeExhausted("no receipt"))
        assert failure.error_kind == ErrorKind.NETWORK_ERROR
        assert failure.message == CONFIRMATION_TIMEOUT_MESSAGE

    def test_other_errors_keep_message(self):
        failure = classify_transport_error(RuntimeError("nonce too low"))
        assert failure.error_kind == ErrorKind.UNKNOWN
        assert failure.message == "nonce too low"

    def test_empty_message_uses_fallback(self):
        failure = classify_transport_error(RuntimeError(), fallback="Deployment failed")
        assert failure.message == "Deployment failed"


def test_http_web3_factory():
    factory = http_web3_factory("http://127.0.0.1:8545", timeout=5)
    web3 = factory()
    assert isinstance(web3, Web3)
    assert web3.provider.endpoint_uri == "http://127.0.0.1:8545"
    assert factory() is not web3


class TestDeploymentExecutor:
    """Tests for DeploymentExecutor."""

    @pytest.mark.asyncio
    async def test_deploy_success(self, network):
        chain = make_fake_chain()
        executor = DeploymentExecutor(network)

        result = await executor.deploy(signer_for(chain), ARTIFACT, [])

        assert isinstance(result, DeploymentSuccess)
        assert result.contract_address == DEPLOYED_ADDRESS
        assert result.transaction_hash == TX_HASH
        assert result.deployer_address == FUNDED_ADDRESS
        assert result.network == network
        chain.web3.eth.send_raw_transaction.assert_called_once()

    @pytest.mark.asyncio
    async def test_transaction_parameters(self, network):
        """Test the creation transaction carries fixed gas, price and chain id."""
        chain = make_fake_chain()
        chain.web3.eth.get_transaction_count.return_value = 7
        executor = DeploymentExecutor(network, gas_limit=3_000_000, gas_price_gwei=20)

        await executor.deploy(signer_for(chain), ARTIFACT, [])

        chain.web3.eth.contract.assert_called_once_with(
            abi=ARTIFACT.abi, bytecode=ARTIFACT.bytecode
        )
        build = chain.web3.eth.contract.return_value.constructor.return_value.build_transaction
        params = build.call_args.args[0]
        assert params == {
            "from": FUNDED_ADDRESS,
            "nonce": 7,
            "gas": 3_000_000,
            "gasPrice": 20 * 10**9,
            "chainId": 102031,
        }

    @pytest.mark.asyncio
    async def test_constructor_args_in_order(self, network):
        chain = make_fake_chain()
        executor = DeploymentExecutor(network)

        await executor.deploy(signer_for(chain), ARTIFACT, ["Token", 18])

        chain.web3.eth.contract.return_value.constructor.assert_called_once_with("Token", 18)

    @pytest.mark.asyncio
    async def test_waits_with_timeout(self, network):
        chain = make_fake_chain()
        executor = DeploymentExecutor(network, confirmation_timeout=45)

        await executor.deploy(signer_for(chain), ARTIFACT, [])

        wait = chain.web3.eth.wait_for_transaction_receipt
        assert wait.call_args.kwargs["timeout"] == 45

    @pytest.mark.asyncio
    async def test_insufficient_funds_on_submit(self, network):
        chain = make_fake_chain()
        chain.web3.eth.send_raw_transaction.side_effect = ValueError(
            {"code": -32000, "message": "insufficient funds for gas * price + value"}
        )
        executor = DeploymentExecutor(network)

        result = await executor.deploy(signer_for(chain), ARTIFACT, [])

        assert result.error_kind == ErrorKind.INSUFFICIENT_FUNDS
        assert result.message == INSUFFICIENT_FUNDS_MESSAGE

    @pytest.mark.asyncio
    async def test_network_error(self, network):
        chain = make_fake_chain()
        chain.web3.eth.get_transaction_count.side_effect = requests.exceptions.ConnectionError()
        executor = DeploymentExecutor(network)

        result = await executor.deploy(signer_for(chain), ARTIFACT, [])

        assert result.error_kind == ErrorKind.NETWORK_ERROR
        chain.web3.eth.send_raw_transaction.assert_not_called()

    @pytest.mark.asyncio
    async def test_confirmation_timeout(self, network):
        chain = make_fake_chain()
        chain.web3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("gave up")
        executor = DeploymentExecutor(network)

        result = await executor.deploy(signer_for(chain), ARTIFACT, [])

        assert result.error_kind == ErrorKind.NETWORK_ERROR
        assert result.message == CONFIRMATION_TIMEOUT_MESSAGE

    @pytest.mark.asyncio
    async def test_reverted(self, network):
        chain = make_fake_chain(status=0)
        executor = DeploymentExecutor(network)

        result = await executor.deploy(signer_for(chain), ARTIFACT, [])

        assert result.success is False
        assert result.error_kind == ErrorKind.UNKNOWN
        assert result.message == REVERTED_MESSAGE
