"""Fake compilers, chain clients and build scripts shared by the tests."""

import re
from dataclasses import dataclass
from typing import Any
from unittest.mock import MagicMock

from solcx.exceptions import SolcError

# Well-known test key (never holds real funds)
FUNDED_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
FUNDED_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TX_HASH_BYTES = bytes.fromhex("ab" * 32)
TX_HASH = "0x" + "ab" * 32

CONSTRUCTOR_ABI = {"type": "constructor", "inputs": [], "stateMutability": "nonpayable"}

# Creation code that deploys a contract whose runtime is a single STOP
MINIMAL_CREATION_CODE = "0x6001600c60003960016000f300"


def unit_bytecode(name: str) -> str:
    """Deterministic per-contract payload used by the fake compilers."""
    return "6080" + name.encode().hex()


def fake_compile_standard(input_data: dict[str, Any]) -> dict[str, Any]:
    """Stand-in for solcx.compile_standard.

    Source containing ``!!`` fails the way solc does, by raising with the
    error diagnostics attached.
    """
    code = input_data["sources"]["Contract.sol"]["content"]
    if "!!" in code:
        raise SolcError(
            message="ParserError",
            error_dict=[
                {
                    "severity": "error",
                    "message": "Expected ';' but got '!'",
                    "formattedMessage": "ParserError: Expected ';' but got '!'",
                },
                {
                    "severity": "warning",
                    "message": "SPDX license identifier not provided",
                    "formattedMessage": "Warning: SPDX license identifier not provided",
                },
            ],
        )

    units = {
        name: {
            "abi": [CONSTRUCTOR_ABI],
            "evm": {"bytecode": {"object": unit_bytecode(name)}},
        }
        for name in re.findall(r"contract\s+(\w+)", code)
    }
    return {
        "contracts": {"Contract.sol": units},
        "errors": [
            {
                "severity": "warning",
                "message": "SPDX license identifier not provided",
                "formattedMessage": "Warning: SPDX license identifier not provided",
            }
        ],
    }


@dataclass
class FakeChain:
    """Mocked Web3 client plus the factory handing it out."""

    web3: MagicMock
    factory: MagicMock

    def set_balance(self, balance: int) -> None:
        self.web3.eth.get_balance.return_value = balance


def make_fake_chain(
    balance: int = 10**18,
    contract_address: str = DEPLOYED_ADDRESS,
    status: int = 1,
) -> FakeChain:
    web3 = MagicMock(name="web3")
    web3.eth.get_balance.return_value = balance
    web3.eth.get_transaction_count.return_value = 0

    def build_transaction(params: dict[str, Any]) -> dict[str, Any]:
        return {**params, "value": 0, "data": MINIMAL_CREATION_CODE}

    constructor = web3.eth.contract.return_value.constructor
    constructor.return_value.build_transaction.side_effect = build_transaction

    web3.eth.send_raw_transaction.return_value = TX_HASH_BYTES
    web3.eth.wait_for_transaction_receipt.return_value = {
        "status": status,
        "contractAddress": contract_address,
        "blockNumber": 1,
        "transactionHash": TX_HASH_BYTES,
    }
    return FakeChain(web3=web3, factory=MagicMock(return_value=web3))


# Stand-ins for `npx hardhat compile`, run with the current interpreter

HARDHAT_OK = '''
import json, os, pathlib, re

root = pathlib.Path.cwd()
for source in sorted((root / "contracts").glob("*.sol")):
    try:
        code = source.read_text()
    except OSError:
        continue
    for name in re.findall(r"contract\\s+(\\w+)", code):
        out = root / "artifacts" / "contracts" / source.name
        artifact = {
            "contractName": name,
            "abi": [{"type": "constructor", "inputs": [], "stateMutability": "nonpayable"}],
            "bytecode": "0x6080" + name.encode().hex(),
        }
        try:
            out.mkdir(parents=True, exist_ok=True)
            tmp = out / (name + "." + str(os.getpid()) + ".tmp")
            tmp.write_text(json.dumps(artifact))
            os.replace(tmp, out / (name + ".json"))
        except OSError:
            continue
'''

HARDHAT_FAIL = '''
import sys

sys.stderr.write("Error HH600: Compilation failed\\n")
sys.exit(1)
'''

HARDHAT_SLOW = '''
import time

time.sleep(30)
'''

HARDHAT_NO_ARTIFACT = '''
print("Nothing to compile")
'''

# Builds every source it finds and fails the whole run if any is broken
HARDHAT_STRICT = '''
import json, pathlib, re, sys

root = pathlib.Path.cwd()
sources = sorted((root / "contracts").glob("*.sol"))
broken = [s for s in sources if "!!" in s.read_text()]
if broken:
    for source in broken:
        sys.stderr.write("ParserError in " + source.name + "\\n")
    sys.exit(1)
for source in sources:
    for name in re.findall(r"contract\\s+(\\w+)", source.read_text()):
        out = root / "artifacts" / "contracts" / source.name
        out.mkdir(parents=True, exist_ok=True)
        (out / (name + ".json")).write_text(json.dumps({
            "contractName": name,
            "abi": [],
            "bytecode": "0x6080" + name.encode().hex(),
        }))
'''
