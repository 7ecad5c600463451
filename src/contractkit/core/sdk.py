"""Entry point: connect once, then get typed handles on deployed contracts.

Example:
    >>> from contractkit import ContractKitSDK, Network
    >>> sdk = ContractKitSDK(Network.POLYGON, private_key="0x...")
    >>> token = sdk.get_token("0x...")
    >>> token.mint_batch.to([{"to_address": "0x...", "amount": "1.5"}])
    >>> market = sdk.get_marketplace("0x...")
    >>> listing = market.direct.get_listing(0)
"""
from typing import Optional

from web3 import Web3

from contractkit.config import Network, get_network_config
from contractkit.constants import PROVIDER_TIMEOUT_SECONDS
from contractkit.core.classes import (
    ContractPlatformFee,
    ContractPrimarySale,
    Erc20,
    Erc20BatchMintable,
    MarketplaceDirect,
)
from contractkit.core.wrapper import ContractWrapper
from contractkit.storage import GatewayStorage, Storage
from contractkit.utils.logging import get_logger

_logger = get_logger(__name__)


class Token:
    """ERC20 token contract with batch minting, sales and fee settings."""

    contract_abi = "token_erc20.json"

    def __init__(self, contract_wrapper: ContractWrapper):
        self.contract_wrapper = contract_wrapper
        self.erc20 = Erc20(contract_wrapper)
        self.mint_batch = Erc20BatchMintable(self.erc20, contract_wrapper)
        self.sales = ContractPrimarySale(contract_wrapper)
        self.platform_fees = ContractPlatformFee(contract_wrapper)

    def get_address(self) -> str:
        return self.contract_wrapper.get_address()


class Marketplace:
    """Marketplace contract: direct listings and platform fee settings."""

    contract_abi = "marketplace.json"

    def __init__(self, contract_wrapper: ContractWrapper, storage: Storage):
        self.contract_wrapper = contract_wrapper
        self.direct = MarketplaceDirect(contract_wrapper, storage)
        self.platform_fees = ContractPlatformFee(contract_wrapper)

    def get_address(self) -> str:
        return self.contract_wrapper.get_address()


class ContractKitSDK:
    """
    Holds the Web3 connection, signer and storage shared by contract handles.

    Without a private key every handle is read-only: write methods raise
    ValidationError.
    """

    def __init__(
        self,
        network: Network,
        private_key: Optional[str] = None,
        rpc_url: Optional[str] = None,
        web3: Optional[Web3] = None,
        storage: Optional[Storage] = None,
        tx_overrides: Optional[dict] = None,
        manual_nonce: bool = False,
        timeout: int = PROVIDER_TIMEOUT_SECONDS,
    ):
        self.config = get_network_config(network, rpc_url)
        self.w3 = web3 or Web3(Web3.HTTPProvider(
            self.config.rpc_url,
            request_kwargs={"timeout": timeout}
        ))
        self.storage: Storage = storage or GatewayStorage()
        self._private_key = private_key
        self.tx_overrides = tx_overrides or {}
        self.manual_nonce = manual_nonce
        self._wrappers: dict = {}

    def get_token(self, address: str) -> Token:
        return Token(self._get_wrapper(address, Token.contract_abi))

    def get_marketplace(self, address: str) -> Marketplace:
        return Marketplace(self._get_wrapper(address, Marketplace.contract_abi), self.storage)

    def _get_wrapper(self, address: str, abi_name: str) -> ContractWrapper:
        # one wrapper per contract so manual nonces stay consistent
        key = (address.lower(), abi_name)
        if key not in self._wrappers:
            _logger.debug(
                "Binding contract",
                extra={"address": address, "abi": abi_name, "network": self.config.name.value},
            )
            self._wrappers[key] = ContractWrapper(
                self.w3,
                address,
                abi_name,
                private_key=self._private_key,
                tx_overrides=self.tx_overrides,
                manual_nonce=self.manual_nonce,
            )
        return self._wrappers[key]
