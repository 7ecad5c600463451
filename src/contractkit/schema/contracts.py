"""
Common contract settings schemas.

Metadata, royalty, primary sale, platform fee, trusted forwarder and
symbol settings shared by deployable contracts.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from contractkit.constants import ADDRESS_ZERO, FORWARDER_ADDRESS
from contractkit.schema.shared import (
    AddressSchema,
    BasisPointsSchema,
    FileBufferOrStringSchema,
)


class CommonContractSchema(BaseModel):
    """Contract-level metadata supplied at deploy time."""

    name: str
    description: Optional[str] = None
    image: Optional[FileBufferOrStringSchema] = None
    external_link: Optional[HttpUrl] = None


class CommonContractOutputSchema(CommonContractSchema):
    """
    Contract-level metadata as read back from storage.

    The image is always a resolved URI and unknown keys are preserved.
    """

    model_config = ConfigDict(extra="allow")

    image: Optional[str] = None


class CommonRoyaltySchema(BaseModel):
    seller_fee_basis_points: BasisPointsSchema = Field(
        default=0,
        description="Royalty on secondary sales in basis points (100 = 1%)",
    )
    fee_recipient: AddressSchema = Field(
        default=ADDRESS_ZERO,
        description="Address receiving all royalties",
    )


class CommonPrimarySaleSchema(BaseModel):
    primary_sale_recipient: AddressSchema = Field(
        ...,
        description="Address receiving primary sale proceeds",
    )


class CommonPlatformFeeSchema(BaseModel):
    platform_fee_basis_points: BasisPointsSchema = Field(
        default=0,
        description="Platform fee in basis points",
    )
    platform_fee_recipient: AddressSchema = Field(
        default=ADDRESS_ZERO,
        description="Address receiving platform fees",
    )


class CommonTrustedForwarderSchema(BaseModel):
    trusted_forwarder: AddressSchema = Field(default=FORWARDER_ADDRESS)


class CommonSymbolSchema(BaseModel):
    symbol: str = ""
