"""Counterparty CLI commands."""

from __future__ import annotations

import click

from ledgerdesk.cache import LedgerCache
from ledgerdesk.cli.common import run_with_cache, unwrap


@click.group()
def counterparty() -> None:
    """Counterparty commands."""


@counterparty.command("list")
@click.pass_context
def list_counterparties(ctx: click.Context) -> None:
    """List counterparties in server order."""

    async def action(cache: LedgerCache):
        return unwrap(await cache.refresh_counterparties(), "Counterparty list")

    parties = run_with_cache(ctx, action, load=False)
    if not parties:
        click.echo("No counterparties found.")
        return
    for party in parties:
        click.echo(f"{party.id}\t{party.name}\t{party.address}\t{party.phone}")


@counterparty.command("add")
@click.option("--name", required=True, help="Counterparty display name.")
@click.option("--address", default="", help="Postal address.")
@click.option("--phone", default="", help="Phone number.")
@click.pass_context
def add_counterparty(ctx: click.Context, name: str, address: str, phone: str) -> None:
    """Add a counterparty."""

    async def action(cache: LedgerCache):
        created = unwrap(
            await cache.create_counterparty(
                {"name": name, "address": address, "phone": phone}
            ),
            "Counterparty add",
        )
        unwrap(await cache.refresh_counterparties(), "Counterparty refresh")
        return created

    record = run_with_cache(ctx, action, load=False)
    click.echo(f"Added counterparty {record.id}")
