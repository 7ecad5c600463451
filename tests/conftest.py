"""
Shared fixtures: an in-memory Web3 stand-in with stub contracts.

Stub contracts answer ``functions.<name>(*args).call()`` from a handler
table (a value, or a callable receiving the call args) and record every
call so tests can assert on them.
"""

from typing import Any, Dict, List, Optional

import pytest
from eth_account import Account
from web3 import Web3

from contractkit.constants import INTERFACE_ID_IERC721, INTERFACE_ID_IERC1155
from contractkit.core.wrapper import ContractWrapper
from contractkit.errors import StorageError

# =============================================================================
# Test Constants
# =============================================================================

# Private key for tests (DO NOT USE IN PRODUCTION)
PRIVATE_KEY = "0x" + "11" * 32
SIGNER = Account.from_key(PRIVATE_KEY).address

MARKETPLACE = Web3.to_checksum_address("0x" + "aa" * 20)
TOKEN = Web3.to_checksum_address("0x" + "20" * 20)
ERC20_CURRENCY = Web3.to_checksum_address("0x" + "c0" * 20)
NFT_721 = Web3.to_checksum_address("0x" + "72" * 20)
NFT_1155 = Web3.to_checksum_address("0x" + "15" * 20)
NOT_AN_NFT = Web3.to_checksum_address("0x" + "99" * 20)
SELLER = Web3.to_checksum_address("0x" + "5e" * 20)
BUYER = Web3.to_checksum_address("0x" + "b0" * 20)

BLOCK_TIMESTAMP = 1_700_000_000


# =============================================================================
# Stubs
# =============================================================================


class StubCall:
    def __init__(self, contract: "StubContract", fn_name: str, args: tuple):
        self.contract = contract
        self.fn_name = fn_name
        self.args = args

    def call(self, *_args, **_kwargs):
        handler = self.contract.handlers[self.fn_name]
        if callable(handler):
            return handler(*self.args)
        return handler

    def estimate_gas(self, *_args, **_kwargs):
        return 100_000

    def build_transaction(self, tx_meta):
        # Return both the meta and name so assertions can inspect calls
        return {"fn": self.fn_name, "args": self.args, "meta": tx_meta}


class StubFunctions:
    def __init__(self, contract: "StubContract"):
        self._contract = contract

    def __getattr__(self, fn_name):
        contract = self._contract

        def _bind(*args):
            contract.calls.append((fn_name, args))
            return StubCall(contract, fn_name, args)

        return _bind


class StubEvent:
    def __init__(self, logs: List[dict]):
        self._logs = logs

    def process_receipt(self, _receipt, errors=None):
        return list(self._logs)


class StubEvents:
    def __init__(self, contract: "StubContract"):
        self._contract = contract

    def __getattr__(self, event_name):
        logs = self._contract.event_logs.get(event_name, [])
        return lambda: StubEvent(logs)


class StubContract:
    def __init__(self, address: str, handlers: Optional[Dict[str, Any]] = None):
        self.address = Web3.to_checksum_address(address)
        self.handlers: Dict[str, Any] = dict(handlers or {})
        self.calls: List[tuple] = []
        self.encoded: List[tuple] = []
        self.event_logs: Dict[str, List[dict]] = {}
        self.functions = StubFunctions(self)
        self.events = StubEvents(self)

    def encodeABI(self, fn_name, args=None):
        self.encoded.append((fn_name, list(args or [])))
        return "0x" + format(len(self.encoded), "08x")


class StubEth:
    def __init__(self, chain_id: int):
        self.chain_id = chain_id
        self.contracts: Dict[str, StubContract] = {}
        self.block_timestamp = BLOCK_TIMESTAMP
        self.base_fee = 10
        self.nonce_lookups = 0

    def contract(self, address=None, abi=None):
        key = address.lower()
        if key not in self.contracts:
            self.contracts[key] = StubContract(address)
        return self.contracts[key]

    def get_block(self, _block_identifier):
        return {"timestamp": self.block_timestamp, "baseFeePerGas": self.base_fee}

    def get_transaction_count(self, _address, _block_identifier=None):
        self.nonce_lookups += 1
        return 7


class StubWeb3:
    """Only the parts of ``web3.Web3`` the SDK touches."""

    to_wei = staticmethod(Web3.to_wei)

    def __init__(self, chain_id: int = 137):
        self.eth = StubEth(chain_id)

    def register(self, address: str, handlers: Optional[Dict[str, Any]] = None) -> StubContract:
        contract = self.eth.contract(address=address)
        contract.handlers.update(handlers or {})
        return contract


class StubStorage:
    def __init__(self, documents: Optional[Dict[str, dict]] = None):
        self.documents = dict(documents or {})
        self.requested: List[str] = []

    def download_json(self, uri: str) -> Dict[str, Any]:
        self.requested.append(uri)
        if uri not in self.documents:
            raise StorageError(f"Not found: {uri}", uri=uri)
        return self.documents[uri]


def erc20_handlers(name="USD Coin", symbol="USDC", decimals=6, **extra) -> Dict[str, Any]:
    return {"name": name, "symbol": symbol, "decimals": decimals, **extra}


def erc721_handlers(owner=SELLER, approved_for_all=True, approved=None, token_uri="ipfs://meta/0", **extra):
    return {
        "supportsInterface": lambda iid: iid == INTERFACE_ID_IERC721,
        "ownerOf": lambda _token_id: owner,
        "isApprovedForAll": lambda _owner, _operator: approved_for_all,
        "getApproved": lambda _token_id: approved or "0x0000000000000000000000000000000000000000",
        "tokenURI": lambda _token_id: token_uri,
        **extra,
    }


def erc1155_handlers(balance=10, approved_for_all=True, uri="ipfs://meta/{id}.json", **extra):
    return {
        "supportsInterface": lambda iid: iid == INTERFACE_ID_IERC1155,
        "balanceOf": lambda _owner, _token_id: balance,
        "isApprovedForAll": lambda _owner, _operator: approved_for_all,
        "uri": lambda _token_id: uri,
        **extra,
    }


def record_sends(monkeypatch, wrapper: ContractWrapper) -> List[dict]:
    """Replace the signing pipeline of ``wrapper`` with a recorder."""
    sent: List[dict] = []

    def _fake_send(contract, fn_name, args, overrides=None):
        sent.append(
            {
                "contract": contract.address,
                "fn": fn_name,
                "args": list(args),
                "overrides": dict(overrides or {}),
            }
        )
        return {"status": 1, "fn": fn_name}

    monkeypatch.setattr(wrapper, "send_contract_transaction", _fake_send)
    return sent


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture()
def w3():
    return StubWeb3(chain_id=137)


@pytest.fixture()
def storage():
    return StubStorage()
