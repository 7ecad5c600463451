"""
Base exception classes for the contractkit SDK.

All SDK exceptions inherit from ContractKitError, which provides
structured error information including error codes, transaction hashes,
and additional context details.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ContractKitError(Exception):
    """
    Base exception for all contractkit errors.

    Provides structured error information that can be serialized and logged.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "LISTING_NOT_FOUND").
        tx_hash: Optional transaction hash related to the error.
        details: Optional dictionary with additional error context.

    Example:
        >>> raise ContractKitError(
        ...     "Transaction failed",
        ...     code="TX_FAILED",
        ...     tx_hash="0x123...",
        ...     details={"gas_used": 21000}
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "CONTRACTKIT_ERROR",
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.tx_hash = tx_hash
        self.details = details or {}

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.tx_hash:
            parts.append(f"(tx: {self.tx_hash[:10]}...)")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"tx_hash={self.tx_hash!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "tx_hash": self.tx_hash,
            "details": self.details,
        }


class ValidationError(ContractKitError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class TransactionError(ContractKitError):
    """Raised when a mined transaction reverted (receipt status != 1)."""

    def __init__(
        self,
        message: str,
        *,
        tx_hash: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="TRANSACTION_FAILED", tx_hash=tx_hash, details=details)


class RpcError(ContractKitError):
    """Raised when an RPC/provider request fails."""

    def __init__(
        self,
        message: str,
        *,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if reason:
            details["reason"] = reason
        super().__init__(message, code="RPC_ERROR", details=details)
        self.reason = reason


class StorageError(ContractKitError):
    """
    Raised when metadata cannot be fetched from storage.

    Example:
        >>> raise StorageError("Gateway returned HTTP 502", uri="ipfs://Qm...")
    """

    def __init__(
        self,
        message: str,
        *,
        uri: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if uri:
            details["uri"] = uri
        super().__init__(message, code="STORAGE_ERROR", details=details)
        self.uri = uri
