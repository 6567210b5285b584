"""HTTP client for the remote bookkeeping store."""

from __future__ import annotations

import asyncio
from decimal import Decimal
import logging
from typing import Any, Callable, Mapping

import requests

from ledgerdesk.config import ClientConfig
from ledgerdesk.exceptions import NetworkFailure, ServerRejected, ValidationFailed
from ledgerdesk.models import Account, Counterparty, LoginResult, Transaction
from ledgerdesk.schema import (
    ADMIN_WIPE_PATH,
    AUTH_LOGIN_PATH,
    ROLE_ADMIN,
    ResourceKind,
)

logger = logging.getLogger(__name__)

Record = Counterparty | Transaction | Account

RECORD_PARSERS: dict[ResourceKind, Callable[[Mapping[str, Any]], Record]] = {
    ResourceKind.COUNTERPARTY: Counterparty.from_payload,
    ResourceKind.TRANSACTION: Transaction.from_payload,
    ResourceKind.ACCOUNT: Account.from_payload,
}


class RemoteStoreClient:
    """Issue single-shot CRUD requests against the remote store.

    Every public method is a coroutine that runs one blocking ``requests``
    call on a worker thread. There is no retry and no caching; transport
    errors raise ``NetworkFailure`` and non-2xx responses raise
    ``ServerRejected`` with the response body verbatim.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def __enter__(self) -> "RemoteStoreClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Perform one HTTP request and decode the JSON body, if any.

        Numbers with a fractional part are decoded as ``Decimal`` so that
        amounts never pass through binary floating point.
        """
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise NetworkFailure(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("%s %s returned %s", method, url, response.status_code)
            raise ServerRejected(response.status_code, response.text)

        if not response.content:
            return None
        try:
            return response.json(parse_float=Decimal)
        except ValueError as exc:
            raise ServerRejected(response.status_code, response.text) from exc

    async def _call(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        return await asyncio.to_thread(self._request, method, path, payload)

    @staticmethod
    def _parse(kind: ResourceKind, payload: Any) -> Record:
        if not isinstance(payload, Mapping):
            raise ServerRejected(200, f"Expected a {kind.value} object, got {payload!r}")
        try:
            return RECORD_PARSERS[kind](payload)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise ServerRejected(200, f"Malformed {kind.value} record {payload!r}: {exc}") from exc

    async def list(self, kind: ResourceKind) -> list[Record]:
        """Return every record of the given kind in server order."""
        payload = await self._call("GET", kind.path)
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ServerRejected(200, f"Expected a {kind.value} list, got {payload!r}")
        return [self._parse(kind, item) for item in payload]

    async def get(self, kind: ResourceKind, record_id: int) -> Record:
        """Fetch a single record by id."""
        payload = await self._call("GET", kind.item_path(record_id))
        return self._parse(kind, payload)

    async def create(self, kind: ResourceKind, fields: dict[str, Any]) -> Record:
        """Create a record and return it with its server-assigned id."""
        payload = await self._call("POST", kind.path, fields)
        return self._parse(kind, payload)

    async def update(self, kind: ResourceKind, record_id: int, fields: dict[str, Any]) -> None:
        """Replace a record server-side with the supplied fields."""
        await self._call("PUT", kind.item_path(record_id), fields)

    async def delete(self, kind: ResourceKind, record_id: int) -> None:
        await self._call("DELETE", kind.item_path(record_id))

    async def action(self, kind: ResourceKind, record_id: int, verb: str) -> bool:
        """Invoke a body-less state transition such as ``revoke``."""
        await self._call("PUT", f"{kind.item_path(record_id)}/{verb}")
        return True

    async def login(self, username: str, password: str) -> LoginResult:
        """Authenticate, accepting the configured bypass pair offline."""
        username = (username or "").strip()
        if not username or not password:
            raise ValidationFailed("Please enter your username and password.", field="credentials")
        if self.config.is_bypass(username, password):
            logger.info("Accepted offline bypass credential for %s", username)
            return LoginResult(success=True, role=ROLE_ADMIN, offline=True)

        try:
            payload = await self._call(
                "POST", AUTH_LOGIN_PATH, {"username": username, "password": password}
            )
        except ServerRejected as exc:
            if exc.status_code in (401, 403):
                return LoginResult(success=False)
            raise
        if not isinstance(payload, Mapping):
            return LoginResult(success=True)
        success = bool(payload.get("success", True))
        role = payload.get("role")
        return LoginResult(success=success, role=str(role) if role is not None else None)

    async def wipe(self) -> None:
        """Erase all server data."""
        await self._call("DELETE", ADMIN_WIPE_PATH)
