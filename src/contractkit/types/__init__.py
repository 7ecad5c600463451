from contractkit.types.claim_conditions import ClaimCondition, PublicClaimCondition
from contractkit.types.currency import (
    Amount,
    Currency,
    CurrencyValue,
    NativeToken,
    Price,
)
from contractkit.types.marketplace import DirectListing, ListingType, Offer, TokenType
from contractkit.types.transactions import TransactionResult, TransactionResultWithId

__all__ = [
    "Amount",
    "Currency",
    "CurrencyValue",
    "NativeToken",
    "Price",
    "ListingType",
    "TokenType",
    "DirectListing",
    "Offer",
    "PublicClaimCondition",
    "ClaimCondition",
    "TransactionResult",
    "TransactionResultWithId",
]
