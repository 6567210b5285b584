"""Public ledgerdesk package exports."""

from __future__ import annotations

from ledgerdesk.__version__ import __version__
from ledgerdesk.aggregation import LedgerAnalytics, aggregate, filter_transactions
from ledgerdesk.cache import LedgerCache
from ledgerdesk.config import ClientConfig, load_config
from ledgerdesk.exceptions import (
    LedgerError,
    NetworkFailure,
    ServerRejected,
    ValidationFailed,
)
from ledgerdesk.models import (
    Account,
    Counterparty,
    CounterpartyDTO,
    DailyRegister,
    LoginResult,
    OperationResult,
    Summary,
    Totals,
    Transaction,
    TransactionDTO,
    TransactionView,
)
from ledgerdesk.remote import RemoteStoreClient
from ledgerdesk.schema import ResourceKind, TransactionType
from ledgerdesk.sequence import SecretSequenceDetector

__all__ = [
    "__version__",
    "Account",
    "ClientConfig",
    "Counterparty",
    "CounterpartyDTO",
    "DailyRegister",
    "LedgerAnalytics",
    "LedgerCache",
    "LedgerError",
    "LoginResult",
    "NetworkFailure",
    "OperationResult",
    "RemoteStoreClient",
    "ResourceKind",
    "SecretSequenceDetector",
    "ServerRejected",
    "Summary",
    "Totals",
    "Transaction",
    "TransactionDTO",
    "TransactionType",
    "TransactionView",
    "ValidationFailed",
    "aggregate",
    "filter_transactions",
    "load_config",
]
