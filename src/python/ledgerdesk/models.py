"""Domain models and data transfer objects."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, Mapping, TypeVar

from ledgerdesk.exceptions import LedgerError, ValidationFailed
from ledgerdesk.schema import FIELD_ALIASES, ROLE_ADMIN, TransactionType

T = TypeVar("T")

ZERO = Decimal("0")


def _field(payload: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """Look up a payload key case-insensitively, honouring legacy aliases."""
    candidates = (name, *FIELD_ALIASES.get(name, ()))
    folded = {str(key).casefold(): value for key, value in payload.items()}
    for candidate in candidates:
        if candidate.casefold() in folded:
            return folded[candidate.casefold()]
    return default


def _ensure_date(value: dt.date | dt.datetime | str) -> dt.date:
    """Normalize a date, datetime or ISO string to a date."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return dt.date.fromisoformat(text[:10])
        except ValueError:
            pass
    raise ValueError(f"Invalid date: {value!r}")


def _ensure_non_empty(value: str | None, field_name: str) -> str:
    """Validate required text fields."""
    if value is None or not str(value).strip():
        raise ValidationFailed(f"{field_name} is required", field=field_name)
    return str(value).strip()


def _ensure_decimal(value: Decimal | str | int | float | None, field_name: str) -> Decimal:
    """Parse a finite decimal amount; the sign is left to the caller."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationFailed(f"{field_name} is required", field=field_name)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationFailed(f"{field_name} must be a decimal", field=field_name) from exc
    if not amount.is_finite():
        raise ValidationFailed(f"{field_name} must be a decimal", field=field_name)
    return amount


def _optional_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _raw_text(value: Any) -> str:
    # Server-assigned types are matched as sent, padding included.
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Counterparty:
    """Vendor or customer record owned by the server."""
    id: int
    name: str
    address: str = ""
    phone: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Counterparty":
        return cls(
            id=int(_field(payload, "id")),
            name=_optional_text(_field(payload, "name")),
            address=_optional_text(_field(payload, "address")),
            phone=_optional_text(_field(payload, "phone")),
        )


@dataclass(frozen=True)
class Transaction:
    """Transaction record as returned by the server."""
    id: int
    counterparty_id: int
    amount: Decimal
    type: str
    date: dt.date
    description: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Transaction":
        amount = _field(payload, "amount", ZERO)
        return cls(
            id=int(_field(payload, "id")),
            counterparty_id=int(_field(payload, "counterpartyId")),
            amount=amount if isinstance(amount, Decimal) else Decimal(str(amount)),
            type=_raw_text(_field(payload, "type")),
            date=_ensure_date(_field(payload, "date")),
            description=_optional_text(_field(payload, "description")),
        )


@dataclass(frozen=True)
class TransactionView:
    """Transaction joined with the display name of its counterparty.

    ``counterparty_name`` is derived from the counterparty collection at join
    time and is empty when the id does not resolve. ``direction`` is the
    case-folded ``type``; it is None for types that are neither Credit nor
    Debit, which keeps those entries out of every credit/debit sum.
    """
    id: int
    counterparty_id: int
    counterparty_name: str
    amount: Decimal
    type: str
    date: dt.date
    description: str = ""
    direction: TransactionType | None = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", TransactionType.parse(self.type))

    @classmethod
    def join(cls, record: Transaction, names: Mapping[int, str]) -> "TransactionView":
        return cls(
            id=record.id,
            counterparty_id=record.counterparty_id,
            counterparty_name=names.get(record.counterparty_id, ""),
            amount=record.amount,
            type=record.type,
            date=record.date,
            description=record.description,
        )

    def patched(self, values: "TransactionDTO", names: Mapping[int, str]) -> "TransactionView":
        """Return a copy carrying the submitted values and a fresh name."""
        return replace(
            self,
            counterparty_id=values.counterparty_id,
            counterparty_name=names.get(values.counterparty_id, ""),
            amount=values.amount,
            type=values.type,
            date=values.date,
            description=values.description,
        )


@dataclass(frozen=True)
class Account:
    """User account visible to privileged users."""
    id: int
    username: str
    role: str
    is_active: bool

    @property
    def is_admin(self) -> bool:
        return self.role.casefold() == ROLE_ADMIN.casefold()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Account":
        return cls(
            id=int(_field(payload, "id")),
            username=_optional_text(_field(payload, "username")),
            role=_optional_text(_field(payload, "role")),
            is_active=bool(_field(payload, "isActive", False)),
        )


@dataclass(frozen=True)
class CounterpartyDTO:
    """Validated counterparty input for the create call."""
    name: str
    address: str = ""
    phone: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _ensure_non_empty(self.name, "Name"))
        object.__setattr__(self, "address", _optional_text(self.address))
        object.__setattr__(self, "phone", _optional_text(self.phone))

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "address": self.address, "phone": self.phone}


@dataclass(frozen=True)
class TransactionDTO:
    """Validated transaction input for create and update calls.

    ``type`` is normalized to the canonical Credit/Debit spelling and
    ``date`` defaults to today, matching the entry form defaults.
    """
    counterparty_id: int | None
    amount: Decimal | str | int | float | None
    type: str | None
    date: dt.date | dt.datetime | str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.counterparty_id is None:
            raise ValidationFailed("Counterparty is required", field="counterparty")
        try:
            counterparty_id = int(self.counterparty_id)
        except (TypeError, ValueError) as exc:
            raise ValidationFailed(
                "Counterparty must be an id", field="counterparty"
            ) from exc
        object.__setattr__(self, "counterparty_id", counterparty_id)

        if self.type is None or not str(self.type).strip():
            raise ValidationFailed("Transaction type is required", field="type")
        direction = TransactionType.parse(str(self.type).strip())
        if direction is None:
            raise ValidationFailed(
                f"Transaction type must be Credit or Debit, got {self.type!r}", field="type"
            )
        object.__setattr__(self, "type", direction.value)

        object.__setattr__(self, "amount", _ensure_decimal(self.amount, "Amount"))

        if self.date is None:
            object.__setattr__(self, "date", dt.date.today())
        else:
            try:
                object.__setattr__(self, "date", _ensure_date(self.date))
            except ValueError as exc:
                raise ValidationFailed(str(exc), field="date") from exc
        object.__setattr__(self, "description", _optional_text(self.description))

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "TransactionDTO":
        """Build from a loose mapping using either wire or Python field names."""
        counterparty_id = fields.get("counterparty_id", _field(fields, "counterpartyId"))
        return cls(
            counterparty_id=counterparty_id,
            amount=fields.get("amount"),
            type=fields.get("type"),
            date=fields.get("date"),
            description=fields.get("description") or "",
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "counterpartyId": self.counterparty_id,
            "amount": str(self.amount),
            "type": self.type,
            "date": self.date.isoformat(),
            "description": self.description,
        }


@dataclass(frozen=True)
class LoginResult:
    """Outcome of an authentication attempt."""
    success: bool
    role: str | None = None
    offline: bool = False

    @property
    def is_admin(self) -> bool:
        return self.success and (self.role or "").casefold() == ROLE_ADMIN.casefold()


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Reported outcome of a cache operation.

    Failed results carry the error; the cache is left as it was before the
    attempt whenever ``ok`` is False.
    """
    ok: bool
    value: T | None = None
    error: LedgerError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "OperationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: LedgerError) -> "OperationResult[T]":
        return cls(ok=False, error=error)

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""


@dataclass(frozen=True)
class Totals:
    """Credit, debit and balance sums over a set of transactions."""
    total_credit: Decimal = ZERO
    total_debit: Decimal = ZERO
    balance: Decimal = ZERO


@dataclass(frozen=True)
class LedgerReport:
    """Filtered ledger entries with their totals."""
    transactions: tuple[TransactionView, ...]
    totals: Totals


@dataclass(frozen=True)
class Summary:
    """Dashboard statistics over the whole cache.

    Attributes:
        counterparty_count: Number of cached counterparties
        transaction_count: Number of cached transactions, including entries
            whose type is neither Credit nor Debit
        totals: Credit/debit/balance over every cached transaction
    """
    counterparty_count: int
    transaction_count: int
    totals: Totals

    @property
    def total_credit(self) -> Decimal:
        return self.totals.total_credit

    @property
    def total_debit(self) -> Decimal:
        return self.totals.total_debit

    @property
    def balance(self) -> Decimal:
        return self.totals.balance


@dataclass(frozen=True)
class DailyRegister:
    """Transactions dated on a single calendar day with their totals."""
    day: dt.date
    transactions: tuple[TransactionView, ...]
    total_credit: Decimal
    total_debit: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_credit - self.total_debit
