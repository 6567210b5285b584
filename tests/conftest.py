"""Pytest configuration and shared fixtures.

Component tests run the cache against ``FakeStore``, an in-process stand-in
for the remote store that keeps wire-format payloads.
"""
from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import sys

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src" / "python"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from tests.utils.fake_store import FakeStore  # noqa: E402


@pytest.fixture()
def acme_counterparties() -> list[dict]:
    return [{"id": 1, "name": "Acme", "address": "1 Main St", "phone": "555-0100"}]


@pytest.fixture()
def acme_transactions() -> list[dict]:
    return [
        {
            "id": 10,
            "counterpartyId": 1,
            "amount": Decimal("100.00"),
            "type": "Credit",
            "date": "2024-01-05T00:00:00",
            "description": "Invoice 1",
        },
        {
            "id": 11,
            "counterpartyId": 1,
            "amount": Decimal("40.00"),
            "type": "Debit",
            "date": "2024-01-06T00:00:00",
            "description": "Refund",
        },
    ]


@pytest.fixture()
def sample_accounts() -> list[dict]:
    return [
        {"id": 1, "username": "admin", "role": "Admin", "isActive": True},
        {"id": 2, "username": "clerk", "role": "Standard", "isActive": True},
    ]


@pytest.fixture()
def fake_store(acme_counterparties, acme_transactions, sample_accounts) -> FakeStore:
    """Store seeded with the Acme counterparty and two transactions."""
    return FakeStore(
        counterparties=acme_counterparties,
        transactions=acme_transactions,
        accounts=sample_accounts,
    )
