"""Marketplace input schemas."""

from __future__ import annotations

from pydantic import AwareDatetime, BaseModel, Field

from contractkit.schema.shared import AddressSchema, PriceSchema


class NewDirectListing(BaseModel):
    """
    Parameters for a new direct listing.

    Example:
        ```python
        listing = NewDirectListing(
            asset_contract_address="0x...",
            token_id=0,
            start_timestamp=datetime.now(timezone.utc),
            listing_duration_in_seconds=86400,
            quantity=1,
            currency_contract_address=NATIVE_TOKEN_ADDRESS,
            buyout_price_per_token="1.5",
        )
        ```
    """

    asset_contract_address: AddressSchema = Field(
        ...,
        description="Contract holding the listed asset",
    )
    token_id: int = Field(..., ge=0)
    start_timestamp: AwareDatetime = Field(
        ...,
        description="When the listing opens (timezone-aware); past times are clamped to the latest block",
    )
    listing_duration_in_seconds: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    currency_contract_address: AddressSchema = Field(
        ...,
        description="Currency accepted for payment (NATIVE_TOKEN_ADDRESS for the chain's native token)",
    )
    buyout_price_per_token: PriceSchema = Field(
        ...,
        description='Human-readable price per token, e.g. "1.5"',
    )
