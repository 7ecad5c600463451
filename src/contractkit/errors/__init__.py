"""
contractkit exception hierarchy.

    ContractKitError
    ├── ValidationError
    ├── TransactionError
    ├── RpcError
    ├── StorageError
    ├── ListingNotFoundError
    ├── WrongListingTypeError
    └── InvalidListingError
"""

from contractkit.errors.base import (
    ContractKitError,
    RpcError,
    StorageError,
    TransactionError,
    ValidationError,
)
from contractkit.errors.marketplace import (
    InvalidListingError,
    ListingNotFoundError,
    WrongListingTypeError,
)

__all__ = [
    "ContractKitError",
    "ValidationError",
    "TransactionError",
    "RpcError",
    "StorageError",
    "ListingNotFoundError",
    "WrongListingTypeError",
    "InvalidListingError",
]
