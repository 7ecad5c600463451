from contractkit.common.claim_conditions import transform_result_to_claim_condition
from contractkit.common.currency import (
    fetch_currency_metadata,
    fetch_currency_value,
    format_units,
    get_native_token,
    is_native_token,
    normalize_price_value,
    parse_units,
    set_erc20_allowance,
)
from contractkit.common.marketplace import (
    handle_token_approval,
    is_token_approved_for_marketplace,
    map_offer,
    validate_new_listing_param,
)
from contractkit.common.nft import (
    detect_token_type,
    fetch_token_metadata,
    fetch_token_metadata_for_contract,
)

__all__ = [
    # Currency
    "is_native_token",
    "get_native_token",
    "parse_units",
    "format_units",
    "fetch_currency_metadata",
    "fetch_currency_value",
    "normalize_price_value",
    "set_erc20_allowance",
    # Marketplace
    "is_token_approved_for_marketplace",
    "handle_token_approval",
    "validate_new_listing_param",
    "map_offer",
    # NFT
    "detect_token_type",
    "fetch_token_metadata",
    "fetch_token_metadata_for_contract",
    # Claim conditions
    "transform_result_to_claim_condition",
]
