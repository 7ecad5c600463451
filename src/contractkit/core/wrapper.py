"""Contract-call transport shared by every feature class.

A ContractWrapper binds one deployed contract (address + ABI) to a Web3
connection and an optional signing key. Feature classes never talk to
Web3 directly for writes: they go through ``send_transaction`` which
handles gas estimation, EIP-1559 fee metadata, nonce tracking, signing
and revert decoding.

Example:
    >>> from web3 import Web3
    >>> w3 = Web3(Web3.HTTPProvider("https://polygon-rpc.com"))
    >>> wrapper = ContractWrapper(w3, "0x...", "marketplace.json", private_key="0x...")
    >>> receipt = wrapper.send_transaction("cancelDirectListing", [3])
"""
import json
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract
from web3.logs import DISCARD
from web3.types import TxParams

from contractkit.constants import (
    ABI_SELECTOR_LENGTH,
    DEFAULT_GAS_LIMIT,
    GAS_ESTIMATION_BUFFER,
    MAX_FEE_MULTIPLIER,
    MAX_GAS_LIMIT,
    MIN_MAX_FEE_GWEI,
    PRIORITY_FEE_GWEI,
    REVERT_SELECTOR,
)
from contractkit.errors import RpcError, TransactionError, ValidationError
from contractkit.utils.logging import get_logger

_logger = get_logger(__name__)

# ABI file directory
ABI_DIR = Path(__file__).resolve().parent.parent / "abis"

# ABI loading cache
_ABI_CACHE: dict[str, list] = {}


def load_abi(name: str) -> list:
    """Load ABI JSON with caching.

    Args:
        name: ABI filename (e.g., "marketplace.json")

    Returns:
        Parsed ABI list
    """
    if name not in _ABI_CACHE:
        _ABI_CACHE[name] = json.loads((ABI_DIR / name).read_text())
    return _ABI_CACHE[name]


def decode_revert_reason(raw: str) -> Optional[str]:
    """Decode Solidity revert reason from error data.

    Args:
        raw: Hex-encoded error data string

    Returns:
        Decoded revert reason string, or None if decoding fails
    """
    # Error(string): selector 0x08c379a0 followed by the ABI-encoded string
    if not raw.startswith(REVERT_SELECTOR):
        return None
    try:
        payload = bytes.fromhex(raw[2 + 2 * ABI_SELECTOR_LENGTH :])
        (reason,) = decode(["string"], payload)
    except (ValueError, DecodingError):
        return None
    return reason


def rpc_error_from(e: ValueError) -> RpcError:
    """Map a provider ValueError to RpcError, decoding any revert reason.

    Providers raise ``ValueError({"message": ..., "data": "0x08c379a0..."})``
    for reverted calls; web3's ContractLogicError carries the payload in
    ``.data`` instead.
    """
    reason = None
    data = getattr(e, "data", None)
    if e.args and isinstance(e.args[0], dict):
        reason = e.args[0].get("message") or e.args[0].get("reason")
        data = e.args[0].get("data", data)
    if isinstance(data, str):
        decoded = decode_revert_reason(data)
        if decoded:
            reason = decoded
    return RpcError(reason or str(e), reason=reason)


class ContractWrapper:
    """Binds one contract to a Web3 connection and an optional signer."""

    def __init__(
        self,
        w3: Web3,
        address: str,
        abi: Union[str, list],
        private_key: Optional[str] = None,
        tx_overrides: Optional[dict] = None,
        manual_nonce: bool = False,
    ):
        if not Web3.is_address(address):
            raise ValidationError("contract address must be a valid address", field="address")
        self.w3 = w3
        self.abi = load_abi(abi) if isinstance(abi, str) else abi
        self.read_contract: Contract = w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=self.abi,
        )
        self.account: Optional[LocalAccount] = None
        if private_key:
            # never echo the key
            try:
                self.account = Account.from_key(private_key)
            except Exception:
                raise ValidationError("Invalid private key format (key not shown for security)") from None
        self.tx_overrides = tx_overrides or {}
        self.manual_nonce = manual_nonce
        self._next_nonce: Optional[int] = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def get_address(self) -> str:
        return self.read_contract.address

    def get_provider(self) -> Web3:
        return self.w3

    def get_chain_id(self) -> int:
        return self.w3.eth.chain_id

    def get_signer_address(self) -> str:
        """Address of the signing account.

        Raises:
            ValidationError: If the wrapper was built without a private key
        """
        if self.account is None:
            raise ValidationError("This action requires a signer; pass private_key to the SDK")
        return self.account.address

    def get_call_overrides(self) -> dict:
        """Fresh copy of the user transaction overrides; callers may add ``value``."""
        return dict(self.tx_overrides)

    def get_contract(self, address: str, abi_name: str) -> Contract:
        """Bind another contract (asset, currency) on the same connection."""
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=load_abi(abi_name))

    # ------------------------------------------------------------------
    # Encoding / decoding
    # ------------------------------------------------------------------
    def encode_function_data(self, fn_name: str, args: Sequence[Any]) -> str:
        """ABI-encode a call to the wrapped contract (selector + args) as hex."""
        return self.read_contract.encodeABI(fn_name=fn_name, args=list(args))

    def parse_logs(self, event_name: str, receipt) -> list:
        """Decode all ``event_name`` events emitted by the wrapped contract in a receipt."""
        event = getattr(self.read_contract.events, event_name)
        return list(event().process_receipt(receipt, errors=DISCARD))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def send_transaction(self, fn_name: str, args: Sequence[Any], overrides: Optional[dict] = None):
        """Call ``fn_name`` on the wrapped contract and wait for the receipt."""
        return self.send_contract_transaction(self.read_contract, fn_name, args, overrides)

    def send_contract_transaction(
        self,
        contract: Contract,
        fn_name: str,
        args: Sequence[Any],
        overrides: Optional[dict] = None,
    ):
        """Call ``fn_name`` on any contract with this wrapper's signer.

        Args:
            contract: Bound web3 contract
            fn_name: Contract function name
            args: Positional function arguments
            overrides: Transaction params (``value``, ``gas``, fee fields)

        Returns:
            Transaction receipt

        Raises:
            TransactionError: If the transaction reverted on-chain
            RpcError: If the provider rejected the call
            ValidationError: If no signer is configured or gas exceeds the cap
        """
        self.get_signer_address()
        overrides = dict(overrides or {})
        func = getattr(contract.functions, fn_name)(*args)

        gas = overrides.pop("gas", None)
        if gas is None:
            gas = self._estimate_gas(func, value=overrides.get("value", 0))

        _logger.debug(
            "Sending transaction",
            extra={"contract": contract.address, "fn": fn_name, "gas": gas},
        )
        tx = func.build_transaction(self._tx_meta(gas, overrides))
        return self._build_and_send(tx)

    def multi_call(self, encoded: Sequence[Union[str, bytes]], overrides: Optional[dict] = None):
        """Execute several encoded calls on the wrapped contract in one ``multicall``."""
        if not encoded:
            raise ValidationError("multicall requires at least one encoded call")
        payload = [Web3.to_bytes(hexstr=data) if isinstance(data, str) else bytes(data) for data in encoded]
        return self.send_transaction("multicall", [payload], overrides)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_and_send(self, tx: TxParams):
        """Sign and send a transaction, waiting for receipt.

        Args:
            tx: Transaction parameters dict

        Returns:
            Transaction receipt

        Raises:
            TransactionError: If transaction fails (status != 1)
            RpcError: If RPC call fails or reverts
        """
        try:
            signed = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.rawTransaction)
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)
            if receipt["status"] != 1:
                raise TransactionError(f"Transaction failed: {tx_hash.hex()}", tx_hash=tx_hash.hex())
            return receipt
        except TransactionError:
            raise
        except ValueError as e:
            raise rpc_error_from(e) from e
        except Exception as e:
            raise RpcError(str(e)) from e

    def _tx_meta(self, gas: Optional[int] = None, overrides: Optional[dict] = None) -> TxParams:
        """Build transaction metadata with dynamic gas pricing.

        Args:
            gas: Gas limit (DEFAULT_GAS_LIMIT if not provided)
            overrides: Additional transaction parameters

        Returns:
            Transaction parameters dict
        """
        address = self.get_signer_address()
        if self.manual_nonce:
            if self._next_nonce is None:
                self._next_nonce = self.w3.eth.get_transaction_count(address, "pending")
            nonce = self._next_nonce
            self._next_nonce += 1
        else:
            nonce = self.w3.eth.get_transaction_count(address, "pending")

        latest_block = self.w3.eth.get_block("latest")
        base_fee = latest_block.get("baseFeePerGas", 0)

        # maxFeePerGas = 2x base fee, floored for near-zero L2 fees
        max_fee_per_gas = max(base_fee * MAX_FEE_MULTIPLIER, self.w3.to_wei(MIN_MAX_FEE_GWEI, "gwei"))
        max_priority_fee = self.w3.to_wei(PRIORITY_FEE_GWEI, "gwei")

        meta: TxParams = {
            "from": address,
            "nonce": nonce,
            "chainId": self.get_chain_id(),
            "gas": gas or DEFAULT_GAS_LIMIT,
            "maxFeePerGas": max_fee_per_gas,
            "maxPriorityFeePerGas": max_priority_fee,
        }
        merged = {**meta, **self.tx_overrides, **(overrides or {})}

        if merged.get("gas", 0) > MAX_GAS_LIMIT:
            raise ValidationError(f"Gas limit ({merged['gas']}) exceeds maximum ({MAX_GAS_LIMIT})")

        return merged

    def _estimate_gas(self, func, value: int = 0, buffer: float = GAS_ESTIMATION_BUFFER) -> int:
        """Estimate gas for a contract function call with buffer.

        Args:
            func: Web3 contract function call
            value: Native value sent with the call
            buffer: Multiplier buffer for safety margin (default 1.15 = 15%)

        Returns:
            Estimated gas with buffer applied, capped at MAX_GAS_LIMIT
        """
        params: dict = {"from": self.get_signer_address()}
        if value:
            params["value"] = value
        try:
            base = func.estimate_gas(params)
        except ValueError as e:
            raise rpc_error_from(e) from e
        return min(int(base * buffer), MAX_GAS_LIMIT)
