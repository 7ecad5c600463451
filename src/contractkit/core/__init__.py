from contractkit.core.wrapper import ContractWrapper, load_abi

__all__ = ["ContractWrapper", "load_abi"]
