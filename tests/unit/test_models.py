from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from ledgerdesk.exceptions import ValidationFailed
from ledgerdesk.models import (
    Account,
    Counterparty,
    CounterpartyDTO,
    Transaction,
    TransactionDTO,
    TransactionView,
)
from ledgerdesk.schema import TransactionType


def test_counterparty_dto_requires_name() -> None:
    with pytest.raises(ValidationFailed) as excinfo:
        CounterpartyDTO(name="   ")

    assert excinfo.value.field == "Name"


def test_counterparty_dto_trims_fields() -> None:
    dto = CounterpartyDTO(name="  Acme ", address=" 1 Main St ", phone=None)

    assert dto.to_payload() == {"name": "Acme", "address": "1 Main St", "phone": ""}


def test_transaction_dto_normalizes_type_and_amount() -> None:
    dto = TransactionDTO(
        counterparty_id="3",
        amount="12.50",
        type="credit",
        date=dt.datetime(2024, 1, 5, 15, 30),
    )

    assert dto.counterparty_id == 3
    assert dto.amount == Decimal("12.50")
    assert dto.type == "Credit"
    assert dto.date == dt.date(2024, 1, 5)
    assert dto.description == ""


def test_transaction_dto_defaults_date_to_today() -> None:
    dto = TransactionDTO(counterparty_id=1, amount="1", type="Debit")

    assert dto.date == dt.date.today()


@pytest.mark.parametrize(
    ("kwargs", "field"),
    [
        ({"counterparty_id": None, "amount": "1", "type": "Credit"}, "counterparty"),
        ({"counterparty_id": 1, "amount": "1", "type": None}, "type"),
        ({"counterparty_id": 1, "amount": "1", "type": "Transfer"}, "type"),
        ({"counterparty_id": 1, "amount": "abc", "type": "Credit"}, "Amount"),
        ({"counterparty_id": 1, "amount": "", "type": "Credit"}, "Amount"),
        ({"counterparty_id": 1, "amount": "NaN", "type": "Credit"}, "Amount"),
    ],
)
def test_transaction_dto_validation(kwargs: dict, field: str) -> None:
    with pytest.raises(ValidationFailed) as excinfo:
        TransactionDTO(**kwargs)

    assert excinfo.value.field == field


def test_transaction_dto_accepts_negative_amount() -> None:
    dto = TransactionDTO(counterparty_id=1, amount="-5", type="Debit")

    assert dto.amount == Decimal("-5")


def test_transaction_dto_payload_uses_wire_names() -> None:
    dto = TransactionDTO(
        counterparty_id=1,
        amount=Decimal("40.00"),
        type="DEBIT",
        date=dt.date(2024, 1, 6),
        description="Refund",
    )

    assert dto.to_payload() == {
        "counterpartyId": 1,
        "amount": "40.00",
        "type": "Debit",
        "date": "2024-01-06",
        "description": "Refund",
    }


def test_transaction_from_payload_is_case_insensitive() -> None:
    record = Transaction.from_payload(
        {
            "Id": 7,
            "PartyId": 2,
            "Amount": Decimal("9.99"),
            "Type": "Credit",
            "Date": "2024-03-01T18:45:00",
            "Description": None,
        }
    )

    assert record.id == 7
    assert record.counterparty_id == 2
    assert record.amount == Decimal("9.99")
    assert record.date == dt.date(2024, 3, 1)
    assert record.description == ""


def test_transaction_view_join_falls_back_to_empty_name() -> None:
    record = Transaction(
        id=1, counterparty_id=99, amount=Decimal("5"), type="cReDiT", date=dt.date(2024, 1, 1)
    )

    view = TransactionView.join(record, {1: "Acme"})

    assert view.counterparty_name == ""
    assert view.direction is TransactionType.CREDIT


def test_transaction_view_unknown_type_has_no_direction() -> None:
    view = TransactionView(
        id=1,
        counterparty_id=1,
        counterparty_name="Acme",
        amount=Decimal("5"),
        type="Adjustment",
        date=dt.date(2024, 1, 1),
    )

    assert view.direction is None


def test_transaction_from_payload_keeps_type_padding() -> None:
    record = Transaction.from_payload(
        {"id": 3, "counterpartyId": 1, "amount": "5", "type": " Credit ", "date": "2024-01-01"}
    )

    view = TransactionView.join(record, {1: "Acme"})

    assert record.type == " Credit "
    assert view.direction is None


def test_transaction_dto_trims_entered_type() -> None:
    dto = TransactionDTO(counterparty_id=1, amount="5", type="  debit ")

    assert dto.type == "Debit"


def test_transaction_dto_payload_keeps_full_precision() -> None:
    dto = TransactionDTO(counterparty_id=1, amount="12345678901234567.89", type="Credit")

    amount = dto.to_payload()["amount"]

    assert amount == "12345678901234567.89"
    assert Decimal(amount) == dto.amount


def test_account_and_counterparty_from_payload() -> None:
    account = Account.from_payload({"id": 4, "username": "root", "role": "admin", "isActive": True})
    party = Counterparty.from_payload({"id": 3, "name": "Beta Ltd"})

    assert account.is_admin
    assert account.is_active is True
    assert party.address == ""
    assert party.phone == ""
