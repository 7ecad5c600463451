"""Constants for the contractkit SDK.

This module defines all constant values used across the SDK,
including ABI encoding constants, gas parameters, well-known
addresses and ERC165 interface identifiers.
"""

# ABI Encoding Constants
ABI_SELECTOR_LENGTH = 4
REVERT_SELECTOR = "0x08c379a0"

# Ethereum Constants
ADDRESS_ZERO = "0x0000000000000000000000000000000000000000"
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"
MAX_UINT256 = 2**256 - 1
NATIVE_DECIMALS = 18

# Default trusted forwarder used by gasless contract deployments
FORWARDER_ADDRESS = "0xc82BbE41f2cF04e3a8efA18F7032BDD7f6d98a81"

# ERC165 interface identifiers
INTERFACE_ID_IERC721 = bytes.fromhex("80ac58cd")
INTERFACE_ID_IERC1155 = bytes.fromhex("d9b67a26")

# Gas Constants
DEFAULT_GAS_LIMIT = 300_000
CREATE_LISTING_GAS_LIMIT = 500_000  # createListing writes a full Listing struct
GAS_ESTIMATION_BUFFER = 1.15
MAX_FEE_MULTIPLIER = 2
MIN_MAX_FEE_GWEI = "0.01"
PRIORITY_FEE_GWEI = "0.001"
MAX_GAS_LIMIT = 5_000_000  # multicall batches can be large

# Basis points (1 bps = 0.01%)
MAX_BPS = 10_000

# Network Constants
PROVIDER_TIMEOUT_SECONDS = 30

# Storage Constants
DEFAULT_IPFS_GATEWAY = "https://ipfs.io/ipfs/"
MAX_METADATA_DOWNLOAD_SIZE = 5 * 1024 * 1024  # 5MB

__all__ = [
    "ABI_SELECTOR_LENGTH",
    "REVERT_SELECTOR",
    "ADDRESS_ZERO",
    "NATIVE_TOKEN_ADDRESS",
    "MAX_UINT256",
    "NATIVE_DECIMALS",
    "FORWARDER_ADDRESS",
    "INTERFACE_ID_IERC721",
    "INTERFACE_ID_IERC1155",
    "DEFAULT_GAS_LIMIT",
    "CREATE_LISTING_GAS_LIMIT",
    "GAS_ESTIMATION_BUFFER",
    "MAX_FEE_MULTIPLIER",
    "MIN_MAX_FEE_GWEI",
    "PRIORITY_FEE_GWEI",
    "MAX_GAS_LIMIT",
    "MAX_BPS",
    "PROVIDER_TIMEOUT_SECONDS",
    "DEFAULT_IPFS_GATEWAY",
    "MAX_METADATA_DOWNLOAD_SIZE",
]
