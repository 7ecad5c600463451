"""Mint tokens to many wallets in a single transaction."""
from typing import Iterable, Union

from pydantic import ValidationError as PydanticValidationError

from contractkit.core.classes.erc20 import Erc20
from contractkit.core.wrapper import ContractWrapper
from contractkit.errors import ValidationError
from contractkit.schema.shared import to_validation_error
from contractkit.schema.tokens import TokenMintInput
from contractkit.types.transactions import TransactionResult
from contractkit.utils.logging import get_logger

_logger = get_logger(__name__)


class Erc20BatchMintable:
    """
    Token batch minting that handles unit parsing for you.

    Each mint is encoded as ``mintTo(to, amount)`` and all of them are
    executed through the token's ``multicall``.

    Example:
        >>> token.mint_batch.to([
        ...     {"to_address": "0x...", "amount": 0.2},
        ...     {"to_address": "0x...", "amount": "1.4"},
        ... ])
    """

    def __init__(self, erc20: Erc20, contract_wrapper: ContractWrapper):
        self.erc20 = erc20
        self.contract_wrapper = contract_wrapper

    def to(self, args: Iterable[Union[TokenMintInput, dict]]) -> TransactionResult:
        """Mint tokens to many wallets in one transaction.

        Args:
            args: Mint destinations and human-readable amounts

        Raises:
            ValidationError: If the list is empty or an entry is invalid
        """
        mints = [self._parse(i, arg) for i, arg in enumerate(args)]
        if not mints:
            raise ValidationError("At least one mint is required", field="args")

        encoded = [
            self.contract_wrapper.encode_function_data(
                "mintTo", [mint.to_address, self.erc20.normalize_amount(mint.amount)]
            )
            for mint in mints
        ]
        _logger.debug("Batch minting", extra={"token": self.erc20.get_address(), "count": len(encoded)})
        return TransactionResult(receipt=self.contract_wrapper.multi_call(encoded))

    @staticmethod
    def _parse(index: int, arg: Union[TokenMintInput, dict]) -> TokenMintInput:
        if isinstance(arg, TokenMintInput):
            return arg
        try:
            return TokenMintInput.model_validate(arg)
        except PydanticValidationError as e:
            raise to_validation_error(e, prefix=f"args[{index}]") from None
