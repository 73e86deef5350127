from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Discriminator carried by every domain error and failed result."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    NO_OP = "no_op"
    NO_CHANGE = "no_change"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    STORAGE = "storage"


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Reported (not raised) outcome of a write operation."""

    success: bool
    data: Optional[T] = None
    message: str = ""
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Optional[T] = None, message: str = "") -> "OperationResult[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: Exception) -> "OperationResult[T]":
        kind = getattr(error, "kind", ErrorKind.STORAGE)
        return cls(success=False, message=str(error), kind=kind)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            body["data"] = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        if self.message:
            body["message"] = self.message
        return body
