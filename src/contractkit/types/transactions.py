from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

__all__ = ["TransactionResult", "TransactionResultWithId"]

T = TypeVar("T")


@dataclass
class TransactionResult:
    receipt: Any


@dataclass
class TransactionResultWithId(TransactionResult, Generic[T]):
    id: T
