"""
Gateway storage client.

Resolves ``ipfs://`` URIs through an HTTP gateway and downloads JSON
metadata with a size cap. Plain ``http(s)://`` URIs are fetched as-is.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx

from contractkit.errors import StorageError
from contractkit.storage.types import StorageConfig
from contractkit.utils.logging import get_logger

_logger = get_logger(__name__)

_IPFS_SCHEME = "ipfs://"


class GatewayStorage:
    """
    Read-only metadata storage backed by an IPFS HTTP gateway.

    Example:
        ```python
        storage = GatewayStorage()
        metadata = storage.download_json("ipfs://QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG/0")
        ```
    """

    def __init__(
        self,
        config: Optional[StorageConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or StorageConfig()
        self._transport = transport

    @property
    def gateway_url(self) -> str:
        return self._config.gateway_url

    def resolve_uri(self, uri: str) -> str:
        """
        Turn a metadata URI into a fetchable HTTP URL.

        Raises:
            StorageError: For unsupported URI schemes
        """
        if uri.startswith(_IPFS_SCHEME):
            path = uri[len(_IPFS_SCHEME):]
            if path.startswith("ipfs/"):
                path = path[len("ipfs/"):]
            return f"{self._config.gateway_url.rstrip('/')}/{path}"
        if uri.startswith(("https://", "http://")):
            return uri
        raise StorageError(f"Unsupported metadata URI scheme: {uri}", uri=uri)

    def download(self, uri: str) -> bytes:
        """
        Download raw bytes behind a metadata URI.

        Raises:
            StorageError: On HTTP errors, transport failures, or oversized content
        """
        url = self.resolve_uri(uri)
        max_size = self._config.max_download_size
        try:
            with httpx.Client(
                timeout=httpx.Timeout(self._config.timeout / 1000),
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                with client.stream("GET", url) as response:
                    if response.status_code != 200:
                        raise StorageError(
                            f"Download failed: HTTP {response.status_code}",
                            uri=uri,
                            details={"status_code": response.status_code},
                        )

                    content_length = response.headers.get("Content-Length")
                    if content_length and int(content_length) > max_size:
                        raise StorageError(
                            f"Content size {content_length} exceeds limit {max_size}",
                            uri=uri,
                        )

                    chunks = []
                    total_size = 0
                    for chunk in response.iter_bytes(chunk_size=8192):
                        total_size += len(chunk)
                        if total_size > max_size:
                            raise StorageError(f"Content size exceeds limit {max_size}", uri=uri)
                        chunks.append(chunk)
        except httpx.HTTPError as e:
            raise StorageError(f"Download failed: {e}", uri=uri) from e

        _logger.debug("Downloaded metadata", extra={"uri": uri, "size": total_size})
        return b"".join(chunks)

    def download_json(self, uri: str) -> Dict[str, Any]:
        """
        Download and parse a JSON document.

        Raises:
            StorageError: If the download fails or the body is not a JSON object
        """
        data = self.download(uri)
        try:
            parsed = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError("Metadata is not valid JSON", uri=uri) from e
        if not isinstance(parsed, dict):
            raise StorageError("Metadata must be a JSON object", uri=uri)
        return parsed
