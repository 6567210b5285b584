"""Local ledger cache synchronized with the remote store."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterable, Mapping, TypeVar
import logging
import os

from ledgerdesk.exceptions import LedgerError, ValidationFailed
from ledgerdesk.models import (
    Account,
    Counterparty,
    CounterpartyDTO,
    OperationResult,
    Transaction,
    TransactionDTO,
    TransactionView,
)
from ledgerdesk.remote import RemoteStoreClient
from ledgerdesk.schema import REVOKE_VERB, ResourceKind

T = TypeVar("T")

# Configure logging
logger = logging.getLogger(__name__)
log_level = os.environ.get('LOGGING_LEVEL', 'INFO').upper()
logger.setLevel(getattr(logging, log_level, logging.INFO))
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
    logger.addHandler(handler)


def _unique_by_id(records: Iterable[T], label: str) -> list[T]:
    """Keep the first record per id, preserving arrival order."""
    seen: set[int] = set()
    unique: list[T] = []
    for record in records:
        record_id = record.id  # type: ignore[attr-defined]
        if record_id in seen:
            logger.warning("Dropping duplicate %s id %s from server list", label, record_id)
            continue
        seen.add(record_id)
        unique.append(record)
    return unique


class LedgerCache:
    """Hold the local copy of counterparties, transactions and accounts.

    Collections are replaced wholesale on refresh (atomic swap) and are only
    mutated here. Every store failure is caught at the call site and reported
    through an ``OperationResult``; on failure the collections are exactly as
    they were before the attempt.
    """

    def __init__(self, store: RemoteStoreClient) -> None:
        self.store = store
        self._counterparties: list[Counterparty] = []
        self._transactions: list[TransactionView] = []
        self._accounts: list[Account] = []

    @property
    def counterparties(self) -> tuple[Counterparty, ...]:
        return tuple(self._counterparties)

    @property
    def transactions(self) -> tuple[TransactionView, ...]:
        return tuple(self._transactions)

    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._accounts)

    def counterparty_names(self) -> dict[int, str]:
        """Map counterparty id to display name from the current collection."""
        return {party.id: party.name for party in self._counterparties}

    def find_transaction(self, transaction_id: int) -> TransactionView | None:
        for view in self._transactions:
            if view.id == transaction_id:
                return view
        return None

    async def _attempt(
        self,
        description: str,
        call: Callable[[], Awaitable[T]],
    ) -> OperationResult[T]:
        """Await a store call, converting ledger errors into a failed result."""
        try:
            value = await call()
        except LedgerError as exc:
            logger.warning("%s failed: %s", description, exc)
            return OperationResult.failure(exc)
        return OperationResult.success(value)

    @staticmethod
    def _rejected(error: ValidationFailed) -> OperationResult[Any]:
        logger.info("Validation failed: %s", error)
        return OperationResult.failure(error)

    async def load(self, include_accounts: bool = False) -> OperationResult[None]:
        """Run the initial load: counterparties, transactions, then accounts.

        Transactions are joined against the counterparties loaded just before
        them. Accounts are only listed for privileged sessions. Stops at the
        first failed refresh and reports it.
        """
        steps = [self.refresh_counterparties, self.refresh_transactions]
        if include_accounts:
            steps.append(self.refresh_accounts)
        for step in steps:
            result = await step()
            if not result.ok:
                return OperationResult.failure(result.error)
        return OperationResult.success()

    async def refresh_counterparties(self) -> OperationResult[tuple[Counterparty, ...]]:
        """Replace the counterparty collection with a fresh server list."""
        result = await self._attempt(
            "Counterparty refresh", lambda: self.store.list(ResourceKind.COUNTERPARTY)
        )
        if not result.ok:
            return result
        self._counterparties = _unique_by_id(result.value, "counterparty")
        logger.debug("Loaded %d counterparties", len(self._counterparties))
        return OperationResult.success(self.counterparties)

    async def refresh_transactions(self) -> OperationResult[tuple[TransactionView, ...]]:
        """Replace the transaction collection, joining counterparty names."""
        result = await self._attempt(
            "Transaction refresh", lambda: self.store.list(ResourceKind.TRANSACTION)
        )
        if not result.ok:
            return result
        names = self.counterparty_names()
        records = _unique_by_id(result.value, "transaction")
        self._transactions = [TransactionView.join(record, names) for record in records]
        logger.debug("Loaded %d transactions", len(self._transactions))
        return OperationResult.success(self.transactions)

    async def refresh_accounts(self) -> OperationResult[tuple[Account, ...]]:
        """Replace the account collection with a fresh server list."""
        result = await self._attempt(
            "Account refresh", lambda: self.store.list(ResourceKind.ACCOUNT)
        )
        if not result.ok:
            return result
        self._accounts = _unique_by_id(result.value, "account")
        logger.debug("Loaded %d accounts", len(self._accounts))
        return OperationResult.success(self.accounts)

    async def refresh_transaction(self, transaction_id: int) -> OperationResult[TransactionView | None]:
        """Re-fetch one transaction and replace its cached entry in place.

        Returns the refreshed view, or None when the id is not cached (the
        cache only changes through a full refresh for unknown ids).
        """
        result = await self._attempt(
            f"Transaction {transaction_id} refresh",
            lambda: self.store.get(ResourceKind.TRANSACTION, transaction_id),
        )
        if not result.ok:
            return result
        record: Transaction = result.value
        view = TransactionView.join(record, self.counterparty_names())
        replaced = self._replace_transaction(transaction_id, view)
        return OperationResult.success(view if replaced else None)

    def _replace_transaction(self, transaction_id: int, view: TransactionView) -> bool:
        for index, current in enumerate(self._transactions):
            if current.id == transaction_id:
                updated = list(self._transactions)
                updated[index] = view
                self._transactions = updated
                return True
        return False

    async def create_counterparty(
        self, fields: Mapping[str, Any] | CounterpartyDTO
    ) -> OperationResult[Counterparty]:
        """Validate and create a counterparty.

        The cache is not patched; callers re-run ``refresh_counterparties``
        so the collection reflects the server-assigned id and ordering.
        """
        try:
            dto = fields if isinstance(fields, CounterpartyDTO) else CounterpartyDTO(
                name=fields.get("name"),
                address=fields.get("address") or "",
                phone=fields.get("phone") or "",
            )
        except ValidationFailed as exc:
            return self._rejected(exc)
        return await self._attempt(
            "Counterparty create",
            lambda: self.store.create(ResourceKind.COUNTERPARTY, dto.to_payload()),
        )

    def _validate_transaction(
        self, fields: Mapping[str, Any] | TransactionDTO
    ) -> TransactionDTO:
        dto = fields if isinstance(fields, TransactionDTO) else TransactionDTO.from_fields(fields)
        if dto.counterparty_id not in self.counterparty_names():
            raise ValidationFailed(
                f"Counterparty {dto.counterparty_id} does not exist", field="counterparty"
            )
        return dto

    async def create_transaction(
        self, fields: Mapping[str, Any] | TransactionDTO
    ) -> OperationResult[Transaction]:
        """Validate and create a transaction without patching the cache."""
        try:
            dto = self._validate_transaction(fields)
        except ValidationFailed as exc:
            return self._rejected(exc)
        return await self._attempt(
            "Transaction create",
            lambda: self.store.create(ResourceKind.TRANSACTION, dto.to_payload()),
        )

    async def update_transaction(
        self, transaction_id: int, fields: Mapping[str, Any] | TransactionDTO
    ) -> OperationResult[TransactionView | None]:
        """Replace a transaction server-side, then patch the cached entry.

        The submitted values fully replace the record. On success the cached
        view (if any) takes the submitted values and a freshly joined name;
        an id that is not cached stays absent. On failure nothing changes.
        """
        try:
            dto = self._validate_transaction(fields)
        except ValidationFailed as exc:
            return self._rejected(exc)
        result = await self._attempt(
            f"Transaction {transaction_id} update",
            lambda: self.store.update(ResourceKind.TRANSACTION, transaction_id, dto.to_payload()),
        )
        if not result.ok:
            return result
        current = self.find_transaction(transaction_id)
        if current is None:
            logger.debug("Transaction %s not cached; nothing to patch", transaction_id)
            return OperationResult.success(None)
        view = current.patched(dto, self.counterparty_names())
        self._replace_transaction(transaction_id, view)
        return OperationResult.success(view)

    async def delete_transaction(
        self, transaction_id: int
    ) -> OperationResult[tuple[TransactionView, ...]]:
        """Delete a transaction and reload the transaction collection."""
        result = await self._attempt(
            f"Transaction {transaction_id} delete",
            lambda: self.store.delete(ResourceKind.TRANSACTION, transaction_id),
        )
        if not result.ok:
            return result
        return await self.refresh_transactions()

    async def revoke_account(self, account_id: int) -> OperationResult[tuple[Account, ...]]:
        """Ask the server to revoke access, then reload the account collection."""
        result = await self._attempt(
            f"Account {account_id} revoke",
            lambda: self.store.action(ResourceKind.ACCOUNT, account_id, REVOKE_VERB),
        )
        if not result.ok:
            return result
        return await self.refresh_accounts()

    async def wipe(self) -> OperationResult[None]:
        """Erase all server data and clear the local collections to match."""
        result = await self._attempt("Server wipe", self.store.wipe)
        if not result.ok:
            return result
        self._counterparties = []
        self._transactions = []
        self._accounts = []
        logger.info("Server data wiped; local cache cleared")
        return OperationResult.success()
