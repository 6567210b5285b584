"""Ledger filtering and credit/debit aggregation."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Iterable, Sequence

from ledgerdesk.cache import LedgerCache
from ledgerdesk.models import (
    ZERO,
    DailyRegister,
    LedgerReport,
    Summary,
    Totals,
    TransactionView,
)
from ledgerdesk.schema import TransactionType


def _day(value: dt.date | dt.datetime) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def filter_transactions(
    transactions: Iterable[TransactionView],
    counterparty_id: int | None = None,
    start: dt.date | dt.datetime | None = None,
    end: dt.date | dt.datetime | None = None,
) -> list[TransactionView]:
    """Return entries matching every supplied predicate, in input order.

    Dates compare as calendar days; an omitted bound matches everything.
    """
    start_day = _day(start) if start is not None else None
    end_day = _day(end) if end is not None else None
    return [
        view
        for view in transactions
        if (counterparty_id is None or view.counterparty_id == counterparty_id)
        and (start_day is None or _day(view.date) >= start_day)
        and (end_day is None or _day(view.date) <= end_day)
    ]


def aggregate(transactions: Iterable[TransactionView]) -> Totals:
    """Sum credits and debits exactly; other types count toward neither."""
    total_credit = ZERO
    total_debit = ZERO
    for view in transactions:
        if view.direction is TransactionType.CREDIT:
            total_credit += view.amount
        elif view.direction is TransactionType.DEBIT:
            total_debit += view.amount
    return Totals(
        total_credit=total_credit,
        total_debit=total_debit,
        balance=total_credit - total_debit,
    )


def running_balance(
    transactions: Iterable[TransactionView],
) -> list[tuple[TransactionView, Decimal]]:
    """Pair each entry with the cumulative balance after it."""
    balance = ZERO
    rows: list[tuple[TransactionView, Decimal]] = []
    for view in transactions:
        if view.direction is TransactionType.CREDIT:
            balance += view.amount
        elif view.direction is TransactionType.DEBIT:
            balance -= view.amount
        rows.append((view, balance))
    return rows


def totals_by_counterparty(transactions: Iterable[TransactionView]) -> dict[int, Totals]:
    """Aggregate per counterparty id, keyed in first-seen order."""
    grouped: dict[int, list[TransactionView]] = {}
    for view in transactions:
        grouped.setdefault(view.counterparty_id, []).append(view)
    return {party_id: aggregate(views) for party_id, views in grouped.items()}


class LedgerAnalytics:
    """Read-only views over a ``LedgerCache``.

    Every call recomputes from the current cache contents; nothing is
    carried between calls.
    """

    def __init__(self, cache: LedgerCache) -> None:
        self.cache = cache

    def filter_transactions(
        self,
        counterparty_id: int | None = None,
        start: dt.date | dt.datetime | None = None,
        end: dt.date | dt.datetime | None = None,
    ) -> list[TransactionView]:
        return filter_transactions(self.cache.transactions, counterparty_id, start, end)

    def ledger(
        self,
        counterparty_id: int | None = None,
        start: dt.date | dt.datetime | None = None,
        end: dt.date | dt.datetime | None = None,
    ) -> LedgerReport:
        """Filtered ledger entries together with their totals."""
        entries = self.filter_transactions(counterparty_id, start, end)
        return LedgerReport(transactions=tuple(entries), totals=aggregate(entries))

    def summary(self) -> Summary:
        """Counts and totals over the whole cache."""
        transactions: Sequence[TransactionView] = self.cache.transactions
        return Summary(
            counterparty_count=len(self.cache.counterparties),
            transaction_count=len(transactions),
            totals=aggregate(transactions),
        )

    def by_exact_date(self, day: dt.date | dt.datetime) -> DailyRegister:
        """Daily register for one calendar day."""
        entries = self.filter_transactions(start=day, end=day)
        totals = aggregate(entries)
        return DailyRegister(
            day=_day(day),
            transactions=tuple(entries),
            total_credit=totals.total_credit,
            total_debit=totals.total_debit,
        )

    def balances_by_counterparty(self) -> list[tuple[int, str, Totals]]:
        """Per-counterparty totals with display names, in cache order."""
        names = self.cache.counterparty_names()
        return [
            (party_id, names.get(party_id, ""), totals)
            for party_id, totals in totals_by_counterparty(self.cache.transactions).items()
        ]
