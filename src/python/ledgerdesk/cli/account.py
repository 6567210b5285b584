"""Account administration CLI commands."""

from __future__ import annotations

import click

from ledgerdesk.cache import LedgerCache
from ledgerdesk.cli.common import run_with_cache, unwrap


@click.group()
def account() -> None:
    """User account commands (admin only)."""


def _echo_accounts(accounts) -> None:
    click.echo(f"{'Id':<6} {'Username':<24} {'Role':<12} {'Active':<6}")
    click.echo("-" * 50)
    for item in accounts:
        click.echo(
            f"{item.id:<6} {item.username:<24} {item.role:<12} {'yes' if item.is_active else 'no':<6}"
        )


@account.command("list")
@click.pass_context
def list_accounts(ctx: click.Context) -> None:
    """List user accounts."""

    async def action(cache: LedgerCache):
        return unwrap(await cache.refresh_accounts(), "Account list")

    accounts = run_with_cache(ctx, action, load=False)
    if not accounts:
        click.echo("No accounts found.")
        return
    _echo_accounts(accounts)


@account.command("revoke")
@click.argument("account_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def revoke_account(ctx: click.Context, account_id: int, yes: bool) -> None:
    """Revoke a user's access."""
    if not yes:
        click.confirm("Revoke this user's access?", abort=True)

    async def action(cache: LedgerCache):
        return unwrap(await cache.revoke_account(account_id), f"Account {account_id} revoke")

    accounts = run_with_cache(ctx, action, load=False)
    click.echo(f"Revoked account {account_id}")
    _echo_accounts(accounts)
