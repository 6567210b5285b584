"""Shared CLI helpers."""

from __future__ import annotations

import asyncio
import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, TypeVar

import click

from ledgerdesk.cache import LedgerCache
from ledgerdesk.config import ClientConfig
from ledgerdesk.models import OperationResult, Totals, TransactionView
from ledgerdesk.remote import RemoteStoreClient

T = TypeVar("T")


def parse_date(value: str | None, field_name: str) -> dt.date | None:
    """Parse an ISO date string into a date."""
    if value is None:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise click.BadParameter("Use YYYY-MM-DD format.", param_hint=field_name) from exc


def parse_decimal(value: str | None, field_name: str) -> Decimal | None:
    """Parse a decimal string into a Decimal."""
    if value is None:
        return None
    try:
        amount = Decimal(value.strip())
    except InvalidOperation as exc:
        raise click.BadParameter("Use a valid decimal value.", param_hint=field_name) from exc
    if not amount.is_finite():
        raise click.BadParameter("Use a valid decimal value.", param_hint=field_name)
    return amount


def get_store(ctx: click.Context) -> RemoteStoreClient:
    """Build a remote store client from the Click context config."""
    payload = ctx.obj or {}
    config = payload.get("config") or ClientConfig()
    return RemoteStoreClient(config=config)


def unwrap(result: OperationResult[T], label: str) -> T | None:
    """Return the result value or raise a ClickException with the failure text."""
    if not result.ok:
        raise click.ClickException(f"{label} failed: {result.message}")
    return result.value


def run_with_cache(
    ctx: click.Context,
    action: Callable[[LedgerCache], Awaitable[T]],
    include_accounts: bool = False,
    load: bool = True,
) -> T:
    """Open a store, load a fresh cache and run the action against it."""

    async def runner() -> T:
        with get_store(ctx) as store:
            cache = LedgerCache(store)
            if load:
                unwrap(await cache.load(include_accounts=include_accounts), "Load")
            return await action(cache)

    return asyncio.run(runner())


def format_amount(value: Decimal) -> str:
    return f"{value:.2f}"


def echo_transactions(views: list[TransactionView] | tuple[TransactionView, ...]) -> None:
    for view in views:
        click.echo(
            f"{view.id}\t{view.date.isoformat()}\t{view.counterparty_name}"
            f"\t{view.type}\t{format_amount(view.amount)}\t{view.description}"
        )


def echo_totals(totals: Totals, **extra: Any) -> None:
    for label, value in extra.items():
        click.echo(f"{label.replace('_', ' ').title()}: {value}")
    click.echo(f"Total Credit: {format_amount(totals.total_credit)}")
    click.echo(f"Total Debit: {format_amount(totals.total_debit)}")
    click.echo(f"Balance: {format_amount(totals.balance)}")
