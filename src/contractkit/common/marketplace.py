"""
Marketplace helpers.

Marketplace approval checks, new listing validation and offer mapping.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

from pydantic import ValidationError as PydanticValidationError
from web3 import Web3

from contractkit.common.currency import fetch_currency_value
from contractkit.common.nft import bind_contract, detect_token_type
from contractkit.core.wrapper import ContractWrapper
from contractkit.errors import ValidationError
from contractkit.schema.marketplace import NewDirectListing
from contractkit.schema.shared import to_validation_error
from contractkit.types.marketplace import Offer, TokenType
from contractkit.utils.logging import get_logger

_logger = get_logger(__name__)

__all__ = [
    "is_token_approved_for_marketplace",
    "handle_token_approval",
    "validate_new_listing_param",
    "map_offer",
]


def is_token_approved_for_marketplace(
    w3: Web3,
    marketplace_address: str,
    asset_contract: str,
    token_id: int,
    owner: str,
) -> bool:
    """
    Check whether the marketplace may move ``token_id`` on behalf of ``owner``.

    ERC721 accepts either an operator approval or a per-token approval.
    ERC1155 only has operator approvals.
    """
    token_type = detect_token_type(w3, asset_contract)
    if token_type == TokenType.ERC721:
        asset = bind_contract(w3, asset_contract, "erc721.json")
        if asset.functions.isApprovedForAll(owner, marketplace_address).call():
            return True
        approved = asset.functions.getApproved(token_id).call()
        return approved.lower() == marketplace_address.lower()
    if token_type == TokenType.ERC1155:
        asset = bind_contract(w3, asset_contract, "erc1155.json")
        return bool(asset.functions.isApprovedForAll(owner, marketplace_address).call())

    _logger.error(
        "Contract does not implement ERC 1155 or ERC 721.",
        extra={"asset_contract": asset_contract},
    )
    return False


def handle_token_approval(
    wrapper: ContractWrapper,
    marketplace_address: str,
    asset_contract: str,
    token_id: int,
    owner: str,
) -> None:
    """
    Grant the marketplace operator approval on ``asset_contract`` if missing.

    Raises:
        ValidationError: If the asset is neither ERC721 nor ERC1155
    """
    w3 = wrapper.get_provider()
    token_type = detect_token_type(w3, asset_contract)
    if token_type == TokenType.ERC721:
        asset = wrapper.get_contract(asset_contract, "erc721.json")
        approved = asset.functions.isApprovedForAll(owner, marketplace_address).call()
        if not approved:
            is_token_approved = asset.functions.getApproved(token_id).call()
            approved = is_token_approved.lower() == marketplace_address.lower()
    elif token_type == TokenType.ERC1155:
        asset = wrapper.get_contract(asset_contract, "erc1155.json")
        approved = asset.functions.isApprovedForAll(owner, marketplace_address).call()
    else:
        raise ValidationError("Contract does not implement ERC 1155 or ERC 721.", field="asset_contract_address")

    if not approved:
        _logger.info(
            "Approving marketplace for asset contract",
            extra={"asset_contract": asset_contract, "marketplace": marketplace_address},
        )
        wrapper.send_contract_transaction(asset, "setApprovalForAll", [marketplace_address, True])


def validate_new_listing_param(listing: Union[NewDirectListing, dict]) -> NewDirectListing:
    """
    Validate new listing parameters.

    Args:
        listing: NewDirectListing model or a dict with the same fields

    Returns:
        The validated NewDirectListing

    Raises:
        ValidationError: Naming the first offending field
    """
    try:
        if isinstance(listing, NewDirectListing):
            return NewDirectListing.model_validate(listing.model_dump())
        return NewDirectListing.model_validate(listing)
    except PydanticValidationError as e:
        raise to_validation_error(e) from None


def map_offer(w3: Web3, listing_id: int, offer: Sequence[Any]) -> Offer:
    """
    Map a raw ``offers(listingId, offeror)`` result to an Offer.

    Raw layout: (listingId, offeror, quantityWanted, currency,
    pricePerToken, expirationTimestamp).
    """
    _, offeror, quantity_wanted, currency, price_per_token, expiration = offer
    return Offer(
        listing_id=int(listing_id),
        buyer_address=offeror,
        quantity_desired=quantity_wanted,
        price_per_token=price_per_token,
        currency_contract_address=currency,
        currency_value=fetch_currency_value(w3, currency, quantity_wanted * price_per_token),
        expiration_timestamp=expiration,
    )
