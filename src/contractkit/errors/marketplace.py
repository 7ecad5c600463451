"""
Marketplace-related exceptions.

These exceptions are raised when a listing cannot be read, has an
unexpected type, or can no longer be fulfilled.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from contractkit.errors.base import ContractKitError


class ListingNotFoundError(ContractKitError):
    """
    Raised when a listing id does not exist on a marketplace.

    Example:
        >>> raise ListingNotFoundError("0xMarket...", "42")
    """

    def __init__(
        self,
        marketplace_address: str,
        listing_id: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["marketplace_address"] = marketplace_address
        message = f"Could not find listing at marketplace contract: {marketplace_address}"
        if listing_id is not None:
            details["listing_id"] = listing_id
            message = f"Could not find listing {listing_id} at marketplace contract: {marketplace_address}"
        super().__init__(message, code="LISTING_NOT_FOUND", details=details)
        self.marketplace_address = marketplace_address
        self.listing_id = listing_id


class WrongListingTypeError(ContractKitError):
    """
    Raised when a listing exists but is not of the requested type.

    Example:
        >>> raise WrongListingTypeError("0xMarket...", "42", "Auction", "Direct")
    """

    def __init__(
        self,
        marketplace_address: str,
        listing_id: str,
        actual_type: str,
        expected_type: str,
    ) -> None:
        super().__init__(
            f"Incorrect listing type. Are you sure you're using the right method?. "
            f"Expected {expected_type} listing, but found {actual_type} listing "
            f"(listing {listing_id} at {marketplace_address})",
            code="WRONG_LISTING_TYPE",
            details={
                "marketplace_address": marketplace_address,
                "listing_id": listing_id,
                "actual_type": actual_type,
                "expected_type": expected_type,
            },
        )
        self.marketplace_address = marketplace_address
        self.listing_id = listing_id
        self.actual_type = actual_type
        self.expected_type = expected_type


class InvalidListingError(ContractKitError):
    """
    Raised when a listing can no longer be fulfilled.

    The seller moved, burned, or un-approved the listed asset.
    """

    def __init__(self, listing_id: str, *, reason: Optional[str] = None) -> None:
        message = (
            "The asset on this listing has been moved from the lister's wallet, "
            "this listing is now invalid"
        )
        details: Dict[str, Any] = {"listing_id": listing_id}
        if reason:
            details["reason"] = reason
        super().__init__(message, code="INVALID_LISTING", details=details)
        self.listing_id = listing_id
        self.reason = reason
