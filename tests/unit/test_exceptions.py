from __future__ import annotations

from ledgerdesk.exceptions import (
    LedgerError,
    NetworkFailure,
    ServerRejected,
    ValidationFailed,
)


def test_server_rejected_keeps_body_verbatim() -> None:
    error = ServerRejected(400, "Party name already exists")

    assert error.status_code == 400
    assert error.detail == "Party name already exists"
    assert "Party name already exists" in str(error)
    assert error.kind == "server"


def test_error_taxonomy() -> None:
    validation = ValidationFailed("Name is required", field="Name")

    assert isinstance(validation, LedgerError)
    assert isinstance(validation, ValueError)
    assert validation.kind == "validation"
    assert NetworkFailure("connection refused").kind == "network"
    assert not isinstance(NetworkFailure("x"), ValueError)
