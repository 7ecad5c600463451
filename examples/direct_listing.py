#!/usr/bin/env python3
"""
Direct Listing Example

Lists an NFT on a marketplace for a fixed price, reads the listing back,
and optionally buys it out from a second wallet.

Run with: python examples/direct_listing.py

Environment Variables:
    SELLER_PRIVATE_KEY: Wallet owning the NFT
    BUYER_PRIVATE_KEY: Wallet buying the listing (optional)
    MARKETPLACE_ADDRESS: Deployed marketplace contract
    NFT_ADDRESS: ERC721 or ERC1155 contract
    TOKEN_ID: Token to list (default 0)
    RPC_URL: Polygon RPC URL (optional)
"""

import os
import sys
from datetime import datetime, timezone

from contractkit import NATIVE_TOKEN_ADDRESS, ContractKitError, ContractKitSDK, Network
from contractkit.schema import NewDirectListing

SELLER_PRIVATE_KEY = os.getenv("SELLER_PRIVATE_KEY", "")
BUYER_PRIVATE_KEY = os.getenv("BUYER_PRIVATE_KEY", "")
MARKETPLACE_ADDRESS = os.getenv("MARKETPLACE_ADDRESS", "")
NFT_ADDRESS = os.getenv("NFT_ADDRESS", "")
TOKEN_ID = int(os.getenv("TOKEN_ID", "0"))
RPC_URL = os.getenv("RPC_URL")


def main() -> None:
    if not SELLER_PRIVATE_KEY or not MARKETPLACE_ADDRESS or not NFT_ADDRESS:
        print("Set: SELLER_PRIVATE_KEY, MARKETPLACE_ADDRESS and NFT_ADDRESS")
        sys.exit(1)

    seller = ContractKitSDK(Network.POLYGON, private_key=SELLER_PRIVATE_KEY, rpc_url=RPC_URL)
    marketplace = seller.get_marketplace(MARKETPLACE_ADDRESS)

    print("Creating listing...")
    created = marketplace.direct.create_listing(
        NewDirectListing(
            asset_contract_address=NFT_ADDRESS,
            token_id=TOKEN_ID,
            start_timestamp=datetime.now(timezone.utc),
            listing_duration_in_seconds=24 * 60 * 60,
            quantity=1,
            currency_contract_address=NATIVE_TOKEN_ADDRESS,
            buyout_price_per_token="0.01",
        )
    )
    listing = marketplace.direct.get_listing(created.id)
    price = listing.buyout_currency_value_per_token
    print(f"Listing {listing.id}: {listing.asset.get('name', 'unnamed')} for {price.display_value} {price.symbol}")

    if not BUYER_PRIVATE_KEY:
        return

    buyer = ContractKitSDK(Network.POLYGON, private_key=BUYER_PRIVATE_KEY, rpc_url=RPC_URL)
    try:
        buyer.get_marketplace(MARKETPLACE_ADDRESS).direct.buyout_listing(created.id, quantity_desired=1)
    except ContractKitError as e:
        print(f"Buyout failed: {e}")
        sys.exit(1)
    print("Bought!")


if __name__ == "__main__":
    main()
