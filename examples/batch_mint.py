#!/usr/bin/env python3
"""
Batch Mint Example

Mints a token to several wallets in one multicall transaction, then
prints the resulting balances.

Run with: python examples/batch_mint.py

Environment Variables:
    PRIVATE_KEY: Key of a wallet holding the minter role
    TOKEN_ADDRESS: Deployed token contract
    RECIPIENTS: Comma separated wallet addresses
    RPC_URL: Polygon RPC URL (optional)
"""

import os
import sys

from contractkit import ContractKitSDK, Network, ValidationError
from contractkit.utils.logging import configure_logging

PRIVATE_KEY = os.getenv("PRIVATE_KEY", "")
TOKEN_ADDRESS = os.getenv("TOKEN_ADDRESS", "")
RECIPIENTS = [r.strip() for r in os.getenv("RECIPIENTS", "").split(",") if r.strip()]


def main() -> None:
    if not PRIVATE_KEY or not TOKEN_ADDRESS or not RECIPIENTS:
        print("Set: PRIVATE_KEY, TOKEN_ADDRESS and RECIPIENTS")
        sys.exit(1)

    configure_logging(level="INFO")
    sdk = ContractKitSDK(Network.POLYGON, private_key=PRIVATE_KEY, rpc_url=os.getenv("RPC_URL"))
    token = sdk.get_token(TOKEN_ADDRESS)

    metadata = token.erc20.get()
    print(f"Token: {metadata.name} ({metadata.symbol}), {metadata.decimals} decimals")

    mints = [{"to_address": recipient, "amount": "1.5"} for recipient in RECIPIENTS]
    try:
        result = token.mint_batch.to(mints)
    except ValidationError as e:
        print(f"Invalid mint: {e}")
        sys.exit(1)

    print(f"Minted in tx {result.receipt['transactionHash'].hex()}")
    for recipient in RECIPIENTS:
        balance = token.erc20.balance_of(recipient)
        print(f"  {recipient}: {balance.display_value} {balance.symbol}")


if __name__ == "__main__":
    main()
