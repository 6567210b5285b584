"""Authentication and server administration CLI commands."""

from __future__ import annotations

import asyncio

import click

from ledgerdesk.cache import LedgerCache
from ledgerdesk.cli import common
from ledgerdesk.cli.common import run_with_cache, unwrap
from ledgerdesk.exceptions import LedgerError


@click.command("login")
@click.option("--username", prompt=True, help="Account username.")
@click.password_option("--password", confirmation_prompt=False, help="Account password.")
@click.pass_context
def login(ctx: click.Context, username: str, password: str) -> None:
    """Check a username and password against the server."""

    async def runner():
        with common.get_store(ctx) as store:
            return await store.login(username, password)

    try:
        result = asyncio.run(runner())
    except LedgerError as exc:
        raise click.ClickException(f"Login failed: {exc}") from exc
    if not result.success:
        raise click.ClickException("Invalid username or password.")
    suffix = " (offline)" if result.offline else ""
    click.echo(f"Signed in as {username} [{result.role or 'unknown role'}]{suffix}")


@click.group()
def admin() -> None:
    """Server administration commands."""


@admin.command("wipe")
@click.confirmation_option(prompt="This will delete all data. Are you sure?")
@click.pass_context
def wipe(ctx: click.Context) -> None:
    """Delete all server data."""

    async def action(cache: LedgerCache):
        return unwrap(await cache.wipe(), "Wipe")

    run_with_cache(ctx, action, load=False)
    click.echo("All data deleted.")
