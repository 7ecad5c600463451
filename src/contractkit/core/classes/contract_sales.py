"""Primary sale recipient of a contract.

Example:
    >>> recipient = token.sales.get_recipient()
    >>> token.sales.set_recipient("0x...")
"""
from pydantic import ValidationError as PydanticValidationError

from contractkit.core.wrapper import ContractWrapper
from contractkit.schema.shared import to_validation_error
from contractkit.schema.contracts import CommonPrimarySaleSchema
from contractkit.types.transactions import TransactionResult


class ContractPrimarySale:
    feature_name = "PrimarySale"

    def __init__(self, contract_wrapper: ContractWrapper):
        self.contract_wrapper = contract_wrapper

    def get_recipient(self) -> str:
        """Get the primary sale recipient wallet address."""
        return self.contract_wrapper.read_contract.functions.primarySaleRecipient().call()

    def set_recipient(self, recipient: str) -> TransactionResult:
        """Set the primary sale recipient."""
        try:
            settings = CommonPrimarySaleSchema(primary_sale_recipient=recipient)
        except PydanticValidationError as e:
            raise to_validation_error(e, field="recipient") from None
        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "setPrimarySaleRecipient", [settings.primary_sale_recipient]
            )
        )
