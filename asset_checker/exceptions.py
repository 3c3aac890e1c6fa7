"""
Custom exceptions for the asset checker.

Each exception carries a message plus structured context so callers can
report the failure without parsing strings.
"""
from __future__ import annotations

from typing import Any, Sequence


class AssetCheckerError(Exception):
    """Base exception for asset checker failures."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        error_dict: dict[str, Any] = {"success": False, "error": self.message}
        if self.context:
            error_dict["context"] = self.context
        return error_dict


class HeaderMappingError(AssetCheckerError):
    """Raised when a header row cannot be mapped onto the expected fields."""


class MalformedRowError(AssetCheckerError):
    """Raised when a data row fails type coercion; aborts the whole batch."""

    def __init__(self, row_index: int, row: Sequence[object], reason: str) -> None:
        self.row_index = row_index
        self.row = list(row)
        super().__init__(
            message=f"Malformed row {row_index}: {reason}",
            context={"row_index": row_index, "row": [str(cell) for cell in self.row], "reason": reason},
        )


class MissingPhoneNumberError(AssetCheckerError):
    """Raised when a message is requested for a person without a phone number."""

    def __init__(self, full_name: str) -> None:
        super().__init__(
            message=f"No phone number for {full_name}",
            context={"full_name": full_name},
        )
