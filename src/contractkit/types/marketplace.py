from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict

from contractkit.types.currency import CurrencyValue

__all__ = ["ListingType", "TokenType", "DirectListing", "Offer"]


class ListingType(IntEnum):
    DIRECT = 0
    AUCTION = 1


class TokenType(IntEnum):
    ERC1155 = 0
    ERC721 = 1


@dataclass
class DirectListing:
    """
    A direct (fixed price) marketplace listing.

    Attributes:
        id: Listing id as a decimal string
        asset_contract_address: Contract holding the listed asset
        token_id: Listed token id
        asset: Token metadata resolved from the asset contract
        start_time_in_seconds: Unix timestamp the listing opens
        seconds_until_end: Unix timestamp the listing closes (the contract's endTime)
        quantity: Number of tokens listed
        currency_contract_address: Currency accepted for payment
        buyout_currency_value_per_token: Buyout price with currency metadata
        buyout_price: Buyout price per token in base units
        seller_address: Owner of the listed tokens
    """

    id: str
    asset_contract_address: str
    token_id: int
    start_time_in_seconds: int
    seconds_until_end: int
    quantity: int
    currency_contract_address: str
    buyout_currency_value_per_token: CurrencyValue
    buyout_price: int
    seller_address: str
    asset: Dict[str, Any] = field(default_factory=dict)
    type: ListingType = ListingType.DIRECT


@dataclass
class Offer:
    listing_id: int
    buyer_address: str
    quantity_desired: int
    price_per_token: int
    currency_contract_address: str
    currency_value: CurrencyValue
    expiration_timestamp: int
