from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from contractkit.types.currency import CurrencyValue

__all__ = ["PublicClaimCondition", "ClaimCondition"]


@dataclass
class PublicClaimCondition:
    """Claim condition exactly as returned by a drop contract."""

    start_timestamp: int
    max_mint_supply: int
    current_mint_supply: int
    quantity_limit_per_transaction: int
    wait_time_seconds_limit_per_transaction: int
    price_per_token: int
    currency: str
    merkle_root: bytes


@dataclass
class ClaimCondition:
    """Claim condition with readable supplies and resolved currency metadata."""

    start_timestamp: datetime
    max_mint_supply: str
    current_mint_supply: str
    available_supply: str
    quantity_limit_per_transaction: str
    wait_time_seconds_limit_per_transaction: str
    price: int
    price_per_token: int
    currency: str
    currency_contract: str
    currency_metadata: Optional[CurrencyValue]
    merkle_root: bytes
