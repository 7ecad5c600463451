from contractkit.schema.contracts import (
    CommonContractOutputSchema,
    CommonContractSchema,
    CommonPlatformFeeSchema,
    CommonPrimarySaleSchema,
    CommonRoyaltySchema,
    CommonSymbolSchema,
    CommonTrustedForwarderSchema,
)
from contractkit.schema.currency import CurrencySchema, CurrencyValueSchema
from contractkit.schema.marketplace import NewDirectListing
from contractkit.schema.shared import (
    AddressSchema,
    AmountSchema,
    BasisPointsSchema,
    PriceSchema,
    to_validation_error,
    validate_address,
    validate_price,
)
from contractkit.schema.tokens import TokenMintInput

__all__ = [
    "AddressSchema",
    "AmountSchema",
    "BasisPointsSchema",
    "PriceSchema",
    "to_validation_error",
    "validate_address",
    "validate_price",
    "CommonContractSchema",
    "CommonContractOutputSchema",
    "CommonRoyaltySchema",
    "CommonPrimarySaleSchema",
    "CommonPlatformFeeSchema",
    "CommonTrustedForwarderSchema",
    "CommonSymbolSchema",
    "CurrencySchema",
    "CurrencyValueSchema",
    "TokenMintInput",
    "NewDirectListing",
]
