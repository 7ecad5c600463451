"""Token input schemas."""

from __future__ import annotations

from pydantic import BaseModel

from contractkit.schema.shared import AddressSchema, AmountSchema


class TokenMintInput(BaseModel):
    """
    A mint destination and a human-readable amount.

    Example:
        >>> TokenMintInput(to_address="0x...", amount=0.2)
    """

    to_address: AddressSchema
    amount: AmountSchema
