"""Standard ERC20 token functionality.

Amounts passed to and returned from this class are human-readable
("1.5" tokens); conversion to base units uses the token's decimals.
"""
from typing import Optional

from contractkit.common.currency import fetch_currency_metadata, format_units, parse_units
from contractkit.core.wrapper import ContractWrapper
from contractkit.schema.shared import validate_address
from contractkit.types.currency import Amount, Currency, CurrencyValue
from contractkit.types.transactions import TransactionResult


class Erc20:
    def __init__(self, contract_wrapper: ContractWrapper):
        self.contract_wrapper = contract_wrapper
        self._metadata: Optional[Currency] = None

    def get_address(self) -> str:
        return self.contract_wrapper.get_address()

    def get(self) -> Currency:
        """Name, symbol and decimals of the token (cached after the first read)."""
        if self._metadata is None:
            self._metadata = fetch_currency_metadata(self.contract_wrapper.get_provider(), self.get_address())
        return self._metadata

    def balance(self) -> CurrencyValue:
        """Token balance of the connected signer."""
        return self.balance_of(self.contract_wrapper.get_signer_address())

    def balance_of(self, address: str) -> CurrencyValue:
        address = validate_address(address)
        raw = self.contract_wrapper.read_contract.functions.balanceOf(address).call()
        return self._to_currency_value(raw)

    def total_supply(self) -> CurrencyValue:
        raw = self.contract_wrapper.read_contract.functions.totalSupply().call()
        return self._to_currency_value(raw)

    def allowance(self, spender: str) -> CurrencyValue:
        """How much ``spender`` may transfer on behalf of the connected signer."""
        return self.allowance_of(self.contract_wrapper.get_signer_address(), spender)

    def allowance_of(self, owner: str, spender: str) -> CurrencyValue:
        raw = self.contract_wrapper.read_contract.functions.allowance(
            validate_address(owner, "owner"), validate_address(spender, "spender")
        ).call()
        return self._to_currency_value(raw)

    def normalize_amount(self, amount: Amount) -> int:
        """Convert a human-readable amount to base units of this token.

        Example:
            >>> token.normalize_amount("1.5")  # 18 decimals
            1500000000000000000
        """
        return parse_units(amount, self.get().decimals)

    def transfer(self, to: str, amount: Amount) -> TransactionResult:
        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "transfer", [validate_address(to, "to"), self.normalize_amount(amount)]
            )
        )

    def set_allowance(self, spender: str, amount: Amount) -> TransactionResult:
        """Approve ``spender`` for exactly ``amount`` (replaces any previous allowance)."""
        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "approve", [validate_address(spender, "spender"), self.normalize_amount(amount)]
            )
        )

    def mint_to(self, to: str, amount: Amount) -> TransactionResult:
        """Mint tokens to a wallet. Requires the minter role on the contract."""
        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "mintTo", [validate_address(to, "to"), self.normalize_amount(amount)]
            )
        )

    def _to_currency_value(self, raw: int) -> CurrencyValue:
        metadata = self.get()
        return CurrencyValue(
            **metadata.model_dump(),
            value=int(raw),
            display_value=format_units(int(raw), metadata.decimals),
        )
