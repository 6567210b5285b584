"""Custom exception types for ledgerdesk."""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for every reported ledger failure."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.detail = message


class ValidationFailed(LedgerError, ValueError):
    """Raised when input fails local validation before reaching the store."""

    kind = "validation"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NetworkFailure(LedgerError):
    """Raised when the transport fails before a response is received."""

    kind = "network"


class ServerRejected(LedgerError):
    """Raised when the server answers with a non-2xx status."""

    kind = "server"

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code

    def __str__(self) -> str:
        if self.detail:
            return f"HTTP {self.status_code}: {self.detail}"
        return f"HTTP {self.status_code}"
