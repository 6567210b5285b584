"""Remote store wire constants."""

from __future__ import annotations

from enum import Enum

DEFAULT_BASE_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_SECRET_SEQUENCE = "2+2+102"

AUTH_LOGIN_PATH = "/auth/login"
ADMIN_WIPE_PATH = "/admin/wipe"
REVOKE_VERB = "revoke"


class ResourceKind(str, Enum):
    """Server-owned resource kinds and their collection paths."""

    COUNTERPARTY = "counterparties"
    TRANSACTION = "transactions"
    ACCOUNT = "accounts"

    @property
    def path(self) -> str:
        return f"/{self.value}"

    def item_path(self, record_id: int) -> str:
        return f"/{self.value}/{record_id}"


class TransactionType(str, Enum):
    """Direction of a transaction; the amount itself carries no sign."""

    CREDIT = "Credit"
    DEBIT = "Debit"

    @classmethod
    def parse(cls, value: str | None) -> "TransactionType | None":
        """Fold case once and match, returning None for unknown values."""
        if value is None:
            return None
        return _FOLDED_TYPES.get(value.casefold())


_FOLDED_TYPES = {member.value.casefold(): member for member in TransactionType}

ROLE_ADMIN = "Admin"
ROLE_STANDARD = "Standard"

COUNTERPARTY_FIELDS = ["name", "address", "phone"]

TRANSACTION_FIELDS = [
    "counterpartyId",
    "amount",
    "type",
    "date",
    "description",
]

# Older servers name the foreign key after the "party" resource.
FIELD_ALIASES = {
    "counterpartyId": ("partyId",),
}
