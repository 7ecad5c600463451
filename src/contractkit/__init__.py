"""
contractkit - typed Python client for deployed token and marketplace contracts.

Quick Start:
    >>> from contractkit import ContractKitSDK, Network
    >>>
    >>> sdk = ContractKitSDK(Network.POLYGON, private_key="0x...")
    >>> token = sdk.get_token("0x...")
    >>> token.erc20.balance().display_value
    '12.5'
    >>> token.mint_batch.to([
    ...     {"to_address": "0x...", "amount": "1.5"},
    ...     {"to_address": "0x...", "amount": 2},
    ... ])

Amounts are human-readable everywhere ("1.5", 2, 0.25) and converted to
base units with the decimals of the currency involved.

Modules:
- `core`: ContractKitSDK, ContractWrapper and the contract feature classes
- `common`: currency, marketplace, NFT and claim condition helpers
- `schema`: pydantic input/output schemas
- `types`: domain types returned by the SDK
- `storage`: metadata download through an IPFS gateway
- `errors`: exception hierarchy
- `utils`: logging helpers
"""

from contractkit.version import __version__, __version_info__

from contractkit.config import NETWORKS, Network, NetworkConfig, get_network_config
from contractkit.constants import ADDRESS_ZERO, MAX_BPS, MAX_UINT256, NATIVE_TOKEN_ADDRESS
from contractkit.core.classes import (
    ContractPlatformFee,
    ContractPrimarySale,
    Erc20,
    Erc20BatchMintable,
    MarketplaceDirect,
)
from contractkit.core.sdk import ContractKitSDK, Marketplace, Token
from contractkit.core.wrapper import ContractWrapper
from contractkit.errors import (
    ContractKitError,
    InvalidListingError,
    ListingNotFoundError,
    RpcError,
    StorageError,
    TransactionError,
    ValidationError,
    WrongListingTypeError,
)
from contractkit.storage import GatewayStorage, Storage, StorageConfig
from contractkit.types import (
    ClaimCondition,
    Currency,
    CurrencyValue,
    DirectListing,
    NativeToken,
    Offer,
    TransactionResult,
    TransactionResultWithId,
)

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # SDK
    "ContractKitSDK",
    "Token",
    "Marketplace",
    "ContractWrapper",
    # Features
    "Erc20",
    "Erc20BatchMintable",
    "ContractPrimarySale",
    "ContractPlatformFee",
    "MarketplaceDirect",
    # Config
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    # Constants
    "ADDRESS_ZERO",
    "MAX_BPS",
    "MAX_UINT256",
    "NATIVE_TOKEN_ADDRESS",
    # Storage
    "GatewayStorage",
    "Storage",
    "StorageConfig",
    # Types
    "Currency",
    "CurrencyValue",
    "NativeToken",
    "DirectListing",
    "Offer",
    "ClaimCondition",
    "TransactionResult",
    "TransactionResultWithId",
    # Errors
    "ContractKitError",
    "ValidationError",
    "TransactionError",
    "RpcError",
    "StorageError",
    "ListingNotFoundError",
    "WrongListingTypeError",
    "InvalidListingError",
]
