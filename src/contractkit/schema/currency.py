"""Currency metadata schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CurrencySchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    decimals: int = Field(ge=0, le=255)


class CurrencyValueSchema(CurrencySchema):
    """Currency metadata plus an amount in base units and its display form."""

    value: int = Field(ge=0)
    display_value: str
