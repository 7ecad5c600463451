from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import NATIVE_DECIMALS

__all__ = [
    "Network",
    "NetworkConfig",
    "NativeTokenInfo",
    "NETWORKS",
    "get_network_config",
    "get_native_token_by_chain_id",
]


class Network(str, Enum):
    ETHEREUM = "ethereum"
    GOERLI = "goerli"
    POLYGON = "polygon"
    MUMBAI = "mumbai"
    BASE = "base"
    BASE_SEPOLIA = "base-sepolia"


@dataclass(frozen=True)
class NativeTokenInfo:
    name: str
    symbol: str
    decimals: int
    wrapped_address: str
    wrapped_name: str
    wrapped_symbol: str


@dataclass
class NetworkConfig:
    name: Network
    chain_id: int
    rpc_url: str
    native_token: NativeTokenInfo


_ETHER = NativeTokenInfo(
    name="Ether",
    symbol="ETH",
    decimals=NATIVE_DECIMALS,
    wrapped_address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
    wrapped_name="Wrapped Ether",
    wrapped_symbol="WETH",
)

NETWORKS: dict[Network, NetworkConfig] = {
    Network.ETHEREUM: NetworkConfig(
        name=Network.ETHEREUM,
        chain_id=1,
        rpc_url="https://eth.llamarpc.com",
        native_token=_ETHER,
    ),
    Network.GOERLI: NetworkConfig(
        name=Network.GOERLI,
        chain_id=5,
        rpc_url="https://rpc.ankr.com/eth_goerli",
        native_token=NativeTokenInfo(
            name="Görli Ether",
            symbol="GOR",
            decimals=NATIVE_DECIMALS,
            wrapped_address="0xb4FBF271143F4FBf7B91A5ded31805e42b2208d6",
            wrapped_name="Wrapped Ether",
            wrapped_symbol="WETH",
        ),
    ),
    Network.POLYGON: NetworkConfig(
        name=Network.POLYGON,
        chain_id=137,
        rpc_url="https://polygon-rpc.com",
        native_token=NativeTokenInfo(
            name="Matic",
            symbol="MATIC",
            decimals=NATIVE_DECIMALS,
            wrapped_address="0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
            wrapped_name="Wrapped Matic",
            wrapped_symbol="WMATIC",
        ),
    ),
    Network.MUMBAI: NetworkConfig(
        name=Network.MUMBAI,
        chain_id=80001,
        rpc_url="https://rpc-mumbai.maticvigil.com",
        native_token=NativeTokenInfo(
            name="Matic",
            symbol="MATIC",
            decimals=NATIVE_DECIMALS,
            wrapped_address="0x9c3C9283D3e44854697Cd22D3Faa240Cfb032889",
            wrapped_name="Wrapped Matic",
            wrapped_symbol="WMATIC",
        ),
    ),
    Network.BASE: NetworkConfig(
        name=Network.BASE,
        chain_id=8453,
        rpc_url="https://mainnet.base.org",
        native_token=NativeTokenInfo(
            name="Ether",
            symbol="ETH",
            decimals=NATIVE_DECIMALS,
            wrapped_address="0x4200000000000000000000000000000000000006",
            wrapped_name="Wrapped Ether",
            wrapped_symbol="WETH",
        ),
    ),
    Network.BASE_SEPOLIA: NetworkConfig(
        name=Network.BASE_SEPOLIA,
        chain_id=84532,
        rpc_url="https://sepolia.base.org",
        native_token=NativeTokenInfo(
            name="Sepolia Ether",
            symbol="ETH",
            decimals=NATIVE_DECIMALS,
            wrapped_address="0x4200000000000000000000000000000000000006",
            wrapped_name="Wrapped Ether",
            wrapped_symbol="WETH",
        ),
    ),
}


def get_network_config(network: Network, rpc_url: Optional[str] = None) -> NetworkConfig:
    cfg = NETWORKS[network]
    if rpc_url:
        return NetworkConfig(
            name=cfg.name,
            chain_id=cfg.chain_id,
            rpc_url=rpc_url,
            native_token=cfg.native_token,
        )
    return cfg


def get_native_token_by_chain_id(chain_id: int) -> NativeTokenInfo:
    """Native token info for a chain, Ether for chains we don't know."""
    for cfg in NETWORKS.values():
        if cfg.chain_id == chain_id:
            return cfg.native_token
    return _ETHER
