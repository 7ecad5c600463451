from contractkit.core.classes.contract_platform_fee import ContractPlatformFee
from contractkit.core.classes.contract_sales import ContractPrimarySale
from contractkit.core.classes.erc20 import Erc20
from contractkit.core.classes.erc20_batch_mintable import Erc20BatchMintable
from contractkit.core.classes.marketplace_direct import MarketplaceDirect

__all__ = [
    "ContractPlatformFee",
    "ContractPrimarySale",
    "Erc20",
    "Erc20BatchMintable",
    "MarketplaceDirect",
]
