"""
Metadata storage.

Example:
    ```python
    from contractkit.storage import GatewayStorage, StorageConfig

    storage = GatewayStorage(StorageConfig(gateway_url="https://cloudflare-ipfs.com/ipfs/"))
    ```
"""

from contractkit.storage.gateway import GatewayStorage
from contractkit.storage.types import Storage, StorageConfig

__all__ = ["GatewayStorage", "Storage", "StorageConfig"]
