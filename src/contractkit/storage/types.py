"""
Storage Types

Configuration for resolving token and contract metadata URIs.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol

from pydantic import BaseModel, ConfigDict, Field

from contractkit.constants import DEFAULT_IPFS_GATEWAY, MAX_METADATA_DOWNLOAD_SIZE


class StorageConfig(BaseModel):
    """
    Configuration for the gateway storage client.

    Example:
        ```python
        config = StorageConfig(gateway_url="https://ipfs.filebase.io/ipfs/")
        ```
    """

    model_config = ConfigDict(frozen=True)

    gateway_url: str = Field(
        default=DEFAULT_IPFS_GATEWAY,
        description="IPFS gateway used to resolve ipfs:// URIs",
    )
    timeout: int = Field(
        default=15000,
        ge=1000,
        description="Request timeout in milliseconds",
    )
    max_download_size: int = Field(
        default=MAX_METADATA_DOWNLOAD_SIZE,
        ge=1,
        description="Maximum metadata size in bytes",
    )


class Storage(Protocol):
    """Anything that can turn a metadata URI into a JSON object."""

    def download_json(self, uri: str) -> Dict[str, Any]:
        ...
