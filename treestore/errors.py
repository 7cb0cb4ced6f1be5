"""Errors raised by the storage engine."""

from __future__ import annotations

import enum


class ErrorCode(enum.IntEnum):
    """Error codes reported by the storage engine."""

    GENERIC_ERROR = -1

    @property
    def description(self) -> str:
        """A short human-readable description of the code."""
        if self is ErrorCode.GENERIC_ERROR:
            return "generic error"
        return "unknown value"


class StorageEngineError(Exception):
    """Raised when a storage engine operation fails."""

    category = "treestore.StorageEngine"

    def __init__(self, message: str, code: ErrorCode = ErrorCode.GENERIC_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)

    def __str__(self) -> str:
        return f"{self.message} ({self.code.description})"