"""Transaction CLI commands."""

from __future__ import annotations

import click

from ledgerdesk.aggregation import filter_transactions
from ledgerdesk.cache import LedgerCache
from ledgerdesk.cli.common import (
    echo_transactions,
    parse_date,
    parse_decimal,
    run_with_cache,
    unwrap,
)
from ledgerdesk.schema import TransactionType

TYPE_CHOICE = click.Choice([member.value for member in TransactionType], case_sensitive=False)


@click.group()
def transaction() -> None:
    """Transaction commands."""


@transaction.command("list")
@click.option("--party", "party_id", type=int, default=None, help="Filter by counterparty id.")
@click.option("--limit", type=int, default=None, help="Limit results.")
@click.pass_context
def list_transactions(ctx: click.Context, party_id: int | None, limit: int | None) -> None:
    """List transactions with counterparty names."""

    async def action(cache: LedgerCache):
        return cache.transactions

    views = filter_transactions(run_with_cache(ctx, action), counterparty_id=party_id)
    if limit is not None:
        views = views[:limit]
    if not views:
        click.echo("No transactions found.")
        return
    echo_transactions(views)


@transaction.command("get")
@click.argument("transaction_id", type=int)
@click.pass_context
def get_transaction(ctx: click.Context, transaction_id: int) -> None:
    """Fetch a single transaction from the server."""

    async def action(cache: LedgerCache):
        return unwrap(
            await cache.refresh_transaction(transaction_id),
            f"Transaction {transaction_id} fetch",
        )

    view = run_with_cache(ctx, action)
    if view is None:
        raise click.ClickException(f"Transaction {transaction_id} is not in the ledger")
    echo_transactions([view])


@transaction.command("add")
@click.option("--party", "party_id", type=int, required=True, help="Counterparty id.")
@click.option("--amount", "amount_value", required=True, help="Transaction amount.")
@click.option("--type", "type_value", type=TYPE_CHOICE, required=True, help="Credit or Debit.")
@click.option("--date", "date_value", default=None, help="Date in YYYY-MM-DD (defaults to today).")
@click.option("--description", default="", help="Free text description.")
@click.pass_context
def add_transaction(
    ctx: click.Context,
    party_id: int,
    amount_value: str,
    type_value: str,
    date_value: str | None,
    description: str,
) -> None:
    """Add a transaction against a counterparty."""
    amount = parse_decimal(amount_value, "--amount")
    date = parse_date(date_value, "--date")

    async def action(cache: LedgerCache):
        created = unwrap(
            await cache.create_transaction(
                {
                    "counterparty_id": party_id,
                    "amount": amount,
                    "type": type_value,
                    "date": date,
                    "description": description,
                }
            ),
            "Transaction add",
        )
        unwrap(await cache.refresh_transactions(), "Transaction refresh")
        return created

    record = run_with_cache(ctx, action)
    click.echo(f"Added transaction {record.id}")


@transaction.command("update")
@click.argument("transaction_id", type=int)
@click.option("--party", "party_id", type=int, default=None, help="Counterparty id.")
@click.option("--amount", "amount_value", default=None, help="Transaction amount.")
@click.option("--type", "type_value", type=TYPE_CHOICE, default=None, help="Credit or Debit.")
@click.option("--date", "date_value", default=None, help="Date in YYYY-MM-DD.")
@click.option("--description", default=None, help="Free text description.")
@click.pass_context
def update_transaction(
    ctx: click.Context,
    transaction_id: int,
    party_id: int | None,
    amount_value: str | None,
    type_value: str | None,
    date_value: str | None,
    description: str | None,
) -> None:
    """Update a transaction.

    The server replaces the whole record, so omitted options are filled from
    the cached copy before submitting.
    """
    amount = parse_decimal(amount_value, "--amount")
    date = parse_date(date_value, "--date")

    async def action(cache: LedgerCache):
        current = cache.find_transaction(transaction_id)
        if current is None:
            raise click.ClickException(f"Transaction {transaction_id} is not in the ledger")
        fields = {
            "counterparty_id": party_id if party_id is not None else current.counterparty_id,
            "amount": amount if amount is not None else current.amount,
            "type": type_value or current.type,
            "date": date or current.date,
            "description": description if description is not None else current.description,
        }
        return unwrap(
            await cache.update_transaction(transaction_id, fields),
            f"Transaction {transaction_id} update",
        )

    view = run_with_cache(ctx, action)
    click.echo(f"Updated transaction {transaction_id}")
    if view is not None:
        echo_transactions([view])


@transaction.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def delete_transaction(ctx: click.Context, transaction_id: int, yes: bool) -> None:
    """Delete a transaction."""
    if not yes:
        click.confirm("Delete this transaction?", abort=True)

    async def action(cache: LedgerCache):
        return unwrap(
            await cache.delete_transaction(transaction_id),
            f"Transaction {transaction_id} delete",
        )

    run_with_cache(ctx, action)
    click.echo(f"Deleted transaction {transaction_id}")
