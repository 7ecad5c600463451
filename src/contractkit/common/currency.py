"""
Currency helpers.

Converts between human-readable amounts ("1.5") and on-chain integer
base units, resolves currency metadata for native and ERC20 currencies,
and tops up ERC20 allowances before marketplace payments.
"""

from __future__ import annotations

from typing import Any, Dict

from web3 import Web3
from web3.exceptions import Web3Exception

from contractkit.config import get_native_token_by_chain_id
from contractkit.constants import ADDRESS_ZERO, NATIVE_TOKEN_ADDRESS
from contractkit.core.wrapper import ContractWrapper, load_abi
from contractkit.errors import ValidationError
from contractkit.schema.shared import validate_price
from contractkit.types.currency import Currency, CurrencyValue, NativeToken, Price
from contractkit.utils.logging import get_logger

_logger = get_logger(__name__)

__all__ = [
    "is_native_token",
    "get_native_token",
    "parse_units",
    "format_units",
    "fetch_currency_metadata",
    "fetch_currency_value",
    "normalize_price_value",
    "set_erc20_allowance",
]


def is_native_token(token_address: str) -> bool:
    """True for the native-token sentinel address or the zero address."""
    address = (token_address or "").lower()
    return address in (NATIVE_TOKEN_ADDRESS.lower(), ADDRESS_ZERO)


def get_native_token(chain_id: int) -> NativeToken:
    info = get_native_token_by_chain_id(chain_id)
    return NativeToken(
        name=info.name,
        symbol=info.symbol,
        decimals=info.decimals,
        wrapped_address=info.wrapped_address,
        wrapped_name=info.wrapped_name,
        wrapped_symbol=info.wrapped_symbol,
    )


def parse_units(value: Price, decimals: int) -> int:
    """
    Convert a human-readable amount into integer base units.

    Args:
        value: Non-negative decimal string or number ("1.5", 2, 0.25)
        decimals: Currency decimals

    Returns:
        Amount in base units (``value * 10**decimals``), computed exactly

    Raises:
        ValidationError: If the value is invalid or has more fractional
            digits than ``decimals``

    Example:
        >>> parse_units("1.5", 6)
        1500000
    """
    if decimals < 0:
        raise ValidationError("decimals must be non-negative", field="decimals")

    text = validate_price(value, "amount")
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")
    if len(fraction) > decimals:
        raise ValidationError(
            f"Amount {text} has more fractional digits than the currency supports ({decimals})",
            field="amount",
        )
    return int(whole or "0") * 10**decimals + int(fraction.ljust(decimals, "0") or "0")


def format_units(value: int, decimals: int) -> str:
    """
    Render integer base units as a decimal string.

    Trailing fractional zeros are trimmed down to a single ``0``.

    Example:
        >>> format_units(1_500_000, 6)
        '1.5'
        >>> format_units(10**18, 18)
        '1.0'
    """
    negative = value < 0
    value = abs(value)
    if decimals == 0:
        rendered = str(value)
    else:
        multiplier = 10**decimals
        fraction = str(value % multiplier).rjust(decimals, "0").rstrip("0") or "0"
        rendered = f"{value // multiplier}.{fraction}"
    return f"-{rendered}" if negative else rendered


def fetch_currency_metadata(w3: Web3, asset: str) -> Currency:
    """
    Resolve name, symbol and decimals of a currency.

    Args:
        w3: Web3 connection
        asset: ERC20 address, or the native-token address

    Raises:
        ValidationError: If the address is not an ERC20 contract
    """
    if is_native_token(asset):
        native = get_native_token(w3.eth.chain_id)
        return Currency(name=native.name, symbol=native.symbol, decimals=native.decimals)

    if not Web3.is_address(asset):
        raise ValidationError("currency address must be a valid address", field="currency")

    erc20 = w3.eth.contract(address=Web3.to_checksum_address(asset), abi=load_abi("erc20.json"))
    try:
        name = erc20.functions.name().call()
        symbol = erc20.functions.symbol().call()
        decimals = erc20.functions.decimals().call()
    except (Web3Exception, ValueError) as e:
        raise ValidationError(
            f"Invalid token address: {asset}. Could not fetch currency metadata",
            field="currency",
            details={"error": str(e)},
        ) from e
    return Currency(name=name, symbol=symbol, decimals=decimals)


def fetch_currency_value(w3: Web3, asset: str, price: int) -> CurrencyValue:
    """Currency metadata plus ``price`` (base units) and its display form."""
    metadata = fetch_currency_metadata(w3, asset)
    return CurrencyValue(
        **metadata.model_dump(),
        value=int(price),
        display_value=format_units(int(price), metadata.decimals),
    )


def normalize_price_value(w3: Web3, price: Price, currency_address: str) -> int:
    """
    Convert a human-readable price into base units of ``currency_address``.

    Example:
        >>> normalize_price_value(w3, "0.1", NATIVE_TOKEN_ADDRESS)
        100000000000000000
    """
    metadata = fetch_currency_metadata(w3, currency_address)
    return parse_units(price, metadata.decimals)


def set_erc20_allowance(
    wrapper: ContractWrapper,
    value: int,
    currency_address: str,
    overrides: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Prepare payment of ``value`` to the wrapped contract.

    Native currency is attached to the call as ``overrides["value"]``.
    For ERC20 currencies the signer's allowance to the wrapped contract
    is topped up when it is short of ``value``.

    Args:
        wrapper: Transport of the contract being paid
        value: Amount in base units
        currency_address: Payment currency
        overrides: Transaction overrides, mutated in place

    Returns:
        The overrides dict
    """
    if is_native_token(currency_address):
        overrides["value"] = value
        return overrides

    erc20 = wrapper.get_contract(currency_address, "erc20.json")
    owner = wrapper.get_signer_address()
    spender = wrapper.get_address()
    allowance = erc20.functions.allowance(owner, spender).call()
    if allowance < value:
        _logger.info(
            "Approving ERC20 allowance",
            extra={"currency": currency_address, "spender": spender, "amount": allowance + value},
        )
        # additive: existing allowance stays available
        wrapper.send_contract_transaction(erc20, "approve", [spender, allowance + value])
    return overrides
