"""
Shared schema primitives.

Annotated pydantic types reused by every contract schema: addresses,
basis points, human-readable prices, and raw JSON values.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Annotated, Any, Optional, Union

from pydantic import BeforeValidator, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from web3 import Web3

from contractkit.constants import MAX_BPS
from contractkit.errors import ValidationError

# Non-negative decimal number without sign or exponent: "1", "1.", "1.5", ".5"
_PRICE_PATTERN = re.compile(r"^([0-9]+\.?[0-9]*|\.[0-9]+)$")


def _checksum_address(value: Any) -> str:
    if not isinstance(value, str) or not Web3.is_address(value):
        raise ValueError(f"{value!r} is not a valid address")
    return Web3.to_checksum_address(value)


def _to_price_string(value: Any) -> str:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool):
        raise ValueError("price must be a number or a numeric string")

    if isinstance(value, (int, float, Decimal)):
        if isinstance(value, Decimal) and not value.is_finite():
            raise ValueError("price must be finite")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("price must be finite")
        if value < 0:
            raise ValueError("price must be non-negative")
        if isinstance(value, int):
            return str(value)
        # repr() of a float is the shortest string that round-trips
        dec = Decimal(repr(value)) if isinstance(value, float) else value
        return format(dec, "f")

    if isinstance(value, str):
        text = value.strip()
        if not _PRICE_PATTERN.match(text):
            raise ValueError(f"{value!r} is not a valid non-negative decimal price")
        return text

    raise ValueError("price must be a number or a numeric string")


AddressSchema = Annotated[str, BeforeValidator(_checksum_address)]
"""Any valid hex address, normalized to its checksum form."""

BasisPointsSchema = Annotated[int, Field(ge=0, le=MAX_BPS)]
"""Basis points: 1 bps = 0.01%, 10000 bps = 100%."""

PriceSchema = Annotated[str, BeforeValidator(_to_price_string)]
"""Human-readable price ("1.5" for 1.5 ether), normalized to a plain decimal string."""

AmountSchema = PriceSchema
"""Human-readable token amount, same rules as a price."""

FileBufferOrStringSchema = Union[bytes, str]

JsonSchema = Any

_PRICE_ADAPTER: TypeAdapter[str] = TypeAdapter(PriceSchema)
_ADDRESS_ADAPTER: TypeAdapter[str] = TypeAdapter(AddressSchema)


def _first_error(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    return str(errors[0].get("msg", exc))


def to_validation_error(
    exc: PydanticValidationError,
    prefix: Optional[str] = None,
    field: Optional[str] = None,
) -> ValidationError:
    """
    Convert the first pydantic error into a ValidationError.

    The field path is the error location joined with dots, under ``prefix``
    when given (``args[1].amount``). Pass ``field`` to report a caller-facing
    parameter name instead of the schema attribute.

    Example:
        >>> try:
        ...     NewDirectListing.model_validate(data)
        ... except PydanticValidationError as e:
        ...     raise to_validation_error(e) from None
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    if field is None:
        path = ".".join(str(part) for part in first.get("loc", ()))
        field = ".".join(part for part in (prefix, path) if part) or None
    if first.get("type") == "missing":
        message = f"{field} is required"
    else:
        message = f"{field}: {first.get('msg', exc)}"
    return ValidationError(message, field=field)


def validate_price(value: Any, field: str = "price") -> str:
    """
    Validate a human-readable price and return it as a decimal string.

    Raises:
        ValidationError: If the value is negative, non-numeric, or not finite
    """
    try:
        return _PRICE_ADAPTER.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(f"{field} is invalid: {_first_error(e)}", field=field) from None


def validate_address(value: Any, field: str = "address") -> str:
    """
    Validate an address and return its checksum form.

    Raises:
        ValidationError: If the value is not a valid address
    """
    try:
        return _ADDRESS_ADAPTER.validate_python(value)
    except PydanticValidationError:
        raise ValidationError(f"{field} must be a valid address", field=field) from None


