"""Platform fee settings of a contract."""
from pydantic import ValidationError as PydanticValidationError

from contractkit.core.wrapper import ContractWrapper
from contractkit.schema.shared import to_validation_error
from contractkit.schema.contracts import CommonPlatformFeeSchema
from contractkit.types.transactions import TransactionResult


class ContractPlatformFee:
    """
    Read and update the platform fee taken on every sale.

    Example:
        >>> fees = marketplace.platform_fees.get()
        >>> marketplace.platform_fees.set(platform_fee_basis_points=250, platform_fee_recipient="0x...")
    """

    feature_name = "PlatformFee"

    def __init__(self, contract_wrapper: ContractWrapper):
        self.contract_wrapper = contract_wrapper

    def get(self) -> CommonPlatformFeeSchema:
        recipient, bps = self.contract_wrapper.read_contract.functions.getPlatformFeeInfo().call()
        return CommonPlatformFeeSchema(
            platform_fee_recipient=recipient,
            platform_fee_basis_points=bps,
        )

    def set(self, **platform_fee_info) -> TransactionResult:
        """Set platform fee basis points (0-10000) and recipient."""
        try:
            parsed = CommonPlatformFeeSchema(**platform_fee_info)
        except PydanticValidationError as e:
            raise to_validation_error(e) from None
        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "setPlatformFeeInfo",
                [parsed.platform_fee_recipient, parsed.platform_fee_basis_points],
            )
        )
