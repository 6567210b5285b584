"""Client configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, replace
import json
import os
from pathlib import Path
from typing import Any

from ledgerdesk.schema import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

CONFIG_ENV_VAR = "LEDGERDESK_CONFIG"
BASE_URL_ENV_VAR = "LEDGERDESK_BASE_URL"
DEFAULT_CONFIG_NAME = "config.json"
DEFAULT_BYPASS_USERNAME = "admin"
DEFAULT_BYPASS_PASSWORD = "password"


@dataclass(frozen=True)
class ClientConfig:
    """Settings injected into the remote store client at construction."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    bypass_username: str | None = DEFAULT_BYPASS_USERNAME
    bypass_password: str | None = DEFAULT_BYPASS_PASSWORD

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than zero")

    @property
    def bypass_enabled(self) -> bool:
        return bool(self.bypass_username) and bool(self.bypass_password)

    def is_bypass(self, username: str, password: str) -> bool:
        """Return True when the pair matches the offline demo credential."""
        if not self.bypass_enabled:
            return False
        return username == self.bypass_username and password == self.bypass_password

    def with_overrides(self, **overrides: Any) -> "ClientConfig":
        """Return a copy with the non-None overrides applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        if not values:
            return self
        return replace(self, **values)


def default_config_path() -> Path:
    """Resolve the config file path from the environment or home directory."""
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit)
    return Path.home() / ".ledgerdesk" / DEFAULT_CONFIG_NAME


def _read_payload(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError):
        return {}
    if not isinstance(payload, dict):
        return {}
    return payload


def load_config(config_path: str | Path | None = None) -> ClientConfig:
    """Load config file if present, else return defaults.

    Recognized keys are ``base_url``, ``timeout`` and a ``bypass`` object
    holding ``username`` and ``password``. The ``LEDGERDESK_BASE_URL``
    environment variable wins over the file for the base URL.
    """
    path = Path(config_path) if config_path is not None else default_config_path()
    payload = _read_payload(path)

    base_url = os.environ.get(BASE_URL_ENV_VAR) or payload.get("base_url") or DEFAULT_BASE_URL
    timeout = payload.get("timeout", DEFAULT_TIMEOUT_SECONDS)
    bypass = payload.get("bypass", {})
    if not isinstance(bypass, dict):
        bypass = {}

    return ClientConfig(
        base_url=str(base_url),
        timeout_seconds=float(timeout),
        bypass_username=bypass.get("username", DEFAULT_BYPASS_USERNAME),
        bypass_password=bypass.get("password", DEFAULT_BYPASS_PASSWORD),
    )
