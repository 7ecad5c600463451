"""Currency types."""

from __future__ import annotations

from decimal import Decimal
from typing import Union

from contractkit.schema.currency import CurrencySchema, CurrencyValueSchema

__all__ = ["Currency", "CurrencyValue", "NativeToken", "Price", "Amount"]

Currency = CurrencySchema

CurrencyValue = CurrencyValueSchema

Price = Union[str, int, float, Decimal]
"""A human-readable price, e.g. "1" for 1 ether."""

Amount = Price


class NativeToken(CurrencySchema):
    """Native currency of a chain and its wrapped ERC20 counterpart."""

    wrapped_address: str
    wrapped_name: str
    wrapped_symbol: str
