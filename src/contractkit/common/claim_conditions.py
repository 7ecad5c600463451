"""Claim condition mapping for drop contracts."""
from datetime import datetime, timezone

from web3 import Web3

from contractkit.common.currency import fetch_currency_value
from contractkit.types.claim_conditions import ClaimCondition, PublicClaimCondition

__all__ = ["transform_result_to_claim_condition"]


def transform_result_to_claim_condition(w3: Web3, pm: PublicClaimCondition) -> ClaimCondition:
    """
    Map a raw claim condition into a ClaimCondition.

    Supplies are rendered as decimal strings because they may exceed what
    JSON consumers can represent. The currency is resolved to metadata and
    the price per token is attached as a CurrencyValue.

    Args:
        w3: Web3 connection used to resolve the currency
        pm: Claim condition as returned by the contract

    Returns:
        ClaimCondition with ``available_supply = max - current``
    """
    currency_value = fetch_currency_value(w3, pm.currency, pm.price_per_token)
    return ClaimCondition(
        start_timestamp=datetime.fromtimestamp(pm.start_timestamp, tz=timezone.utc),
        max_mint_supply=str(pm.max_mint_supply),
        current_mint_supply=str(pm.current_mint_supply),
        available_supply=str(pm.max_mint_supply - pm.current_mint_supply),
        quantity_limit_per_transaction=str(pm.quantity_limit_per_transaction),
        wait_time_seconds_limit_per_transaction=str(pm.wait_time_seconds_limit_per_transaction),
        price=pm.price_per_token,
        price_per_token=pm.price_per_token,
        currency=pm.currency,
        currency_contract=pm.currency,
        currency_metadata=currency_value,
        merkle_root=pm.merkle_root,
    )
