"""
NFT helpers.

Token standard detection and token metadata resolution for asset
contracts referenced by marketplace listings.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from web3 import Web3
from web3.contract import Contract
from web3.exceptions import Web3Exception

from contractkit.constants import INTERFACE_ID_IERC721, INTERFACE_ID_IERC1155
from contractkit.core.wrapper import load_abi
from contractkit.errors import StorageError, ValidationError
from contractkit.storage.types import Storage
from contractkit.types.marketplace import TokenType
from contractkit.utils.logging import get_logger

_logger = get_logger(__name__)

__all__ = ["bind_contract", "detect_token_type", "fetch_token_metadata", "fetch_token_metadata_for_contract"]


def bind_contract(w3: Web3, address: str, abi_name: str) -> Contract:
    return w3.eth.contract(address=Web3.to_checksum_address(address), abi=load_abi(abi_name))


def detect_token_type(w3: Web3, asset_contract: str) -> Optional[TokenType]:
    """
    Detect whether an asset contract is ERC721 or ERC1155 via ERC165.

    Returns:
        TokenType, or None when the contract implements neither
    """
    erc165 = bind_contract(w3, asset_contract, "erc165.json")
    if erc165.functions.supportsInterface(INTERFACE_ID_IERC721).call():
        return TokenType.ERC721
    if erc165.functions.supportsInterface(INTERFACE_ID_IERC1155).call():
        return TokenType.ERC1155
    return None


def fetch_token_metadata(token_id: int, token_uri: str, storage: Storage) -> Dict[str, Any]:
    """
    Download metadata for one token.

    ERC1155 ``{id}`` placeholders are substituted with the 64 char hex id,
    then with the decimal id if the hex form cannot be fetched. Metadata
    that cannot be fetched at all yields only ``id`` and ``uri``.
    """
    candidates = [token_uri.replace("{id}", format(int(token_id), "064x"))]
    decimal_uri = token_uri.replace("{id}", str(int(token_id)))
    if decimal_uri not in candidates:
        candidates.append(decimal_uri)

    metadata: Dict[str, Any] = {}
    last_error: Optional[StorageError] = None
    for uri in candidates:
        try:
            metadata = storage.download_json(uri)
            break
        except StorageError as e:
            last_error = e
    else:
        _logger.warning(
            "Failed to get token metadata",
            extra={"token_id": int(token_id), "uri": token_uri, "error": str(last_error)},
        )

    return {**metadata, "id": str(int(token_id)), "uri": token_uri}


def fetch_token_metadata_for_contract(
    asset_contract: str,
    w3: Web3,
    token_id: int,
    storage: Storage,
) -> Dict[str, Any]:
    """
    Resolve the metadata of ``token_id`` on an ERC721 or ERC1155 contract.

    A token whose URI cannot be read (burned, or a reverting ``tokenURI``)
    yields only ``id`` and an empty ``uri``.

    Raises:
        ValidationError: If the contract implements neither standard
    """
    token_type = detect_token_type(w3, asset_contract)
    if token_type == TokenType.ERC721:
        uri_call = bind_contract(w3, asset_contract, "erc721.json").functions.tokenURI(token_id)
    elif token_type == TokenType.ERC1155:
        uri_call = bind_contract(w3, asset_contract, "erc1155.json").functions.uri(token_id)
    else:
        raise ValidationError("Contract does not implement ERC 1155 or ERC 721.", field="asset_contract")

    try:
        uri = uri_call.call()
    except (Web3Exception, ValueError) as e:
        _logger.warning(
            "Failed to read token URI",
            extra={"asset_contract": asset_contract, "token_id": int(token_id), "error": str(e)},
        )
        return {"id": str(int(token_id)), "uri": ""}
    return fetch_token_metadata(token_id, uri, storage)
