from __future__ import annotations

from decimal import Decimal

from ledgerdesk.models import Totals


def assert_totals(totals: Totals, credit: str, debit: str, balance: str) -> None:
    expected = Totals(
        total_credit=Decimal(credit),
        total_debit=Decimal(debit),
        balance=Decimal(balance),
    )
    if totals != expected:
        raise AssertionError(f"Expected {expected}, got {totals}")
