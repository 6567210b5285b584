"""Ledger, register and summary CLI commands."""

from __future__ import annotations

import datetime as dt

import click

from ledgerdesk.aggregation import LedgerAnalytics, running_balance
from ledgerdesk.cache import LedgerCache
from ledgerdesk.cli.common import (
    echo_totals,
    echo_transactions,
    format_amount,
    parse_date,
    run_with_cache,
)


async def _analytics(cache: LedgerCache) -> LedgerAnalytics:
    return LedgerAnalytics(cache)


@click.group()
def ledger() -> None:
    """Ledger views over the cached transactions."""


@ledger.command("show")
@click.option("--party", "party_id", type=int, default=None, help="Filter by counterparty id.")
@click.option("--from", "from_value", default=None, help="First date in YYYY-MM-DD.")
@click.option("--to", "to_value", default=None, help="Last date in YYYY-MM-DD.")
@click.option("--running", is_flag=True, help="Show the running balance per entry.")
@click.pass_context
def show_ledger(
    ctx: click.Context,
    party_id: int | None,
    from_value: str | None,
    to_value: str | None,
    running: bool,
) -> None:
    """Show the ledger filtered by counterparty and date range.

    Examples:
        ledgerdesk ledger show --party 1
        ledgerdesk ledger show --from 2024-01-01 --to 2024-01-31
    """
    start = parse_date(from_value, "--from")
    end = parse_date(to_value, "--to")
    analytics = run_with_cache(ctx, _analytics)
    report = analytics.ledger(counterparty_id=party_id, start=start, end=end)

    if running:
        for view, balance in running_balance(report.transactions):
            click.echo(
                f"{view.id}\t{view.date.isoformat()}\t{view.counterparty_name}"
                f"\t{view.type}\t{format_amount(view.amount)}\t{format_amount(balance)}"
            )
    else:
        echo_transactions(report.transactions)
    click.echo("-" * 40)
    echo_totals(report.totals)


@ledger.command("register")
@click.option("--date", "date_value", default=None, help="Day in YYYY-MM-DD (defaults to today).")
@click.pass_context
def daily_register(ctx: click.Context, date_value: str | None) -> None:
    """Show the daily register for one calendar day."""
    day = parse_date(date_value, "--date") if date_value else dt.date.today()
    analytics = run_with_cache(ctx, _analytics)
    register = analytics.by_exact_date(day)

    click.echo(f"\nDaily Register: {register.day.isoformat()}")
    echo_transactions(register.transactions)
    click.echo("-" * 40)
    click.echo(f"Total Credit: {format_amount(register.total_credit)}")
    click.echo(f"Total Debit: {format_amount(register.total_debit)}")


@ledger.command("summary")
@click.pass_context
def summary(ctx: click.Context) -> None:
    """Dashboard summary over every cached record."""
    analytics = run_with_cache(ctx, _analytics)
    stats = analytics.summary()
    echo_totals(
        stats.totals,
        counterparties=stats.counterparty_count,
        transactions=stats.transaction_count,
    )


@ledger.command("balances")
@click.pass_context
def balances(ctx: click.Context) -> None:
    """Credit, debit and balance per counterparty."""
    analytics = run_with_cache(ctx, _analytics)
    rows = analytics.balances_by_counterparty()
    if not rows:
        click.echo("No transactions found.")
        return
    click.echo(f"{'Id':<6} {'Counterparty':<30} {'Credit':>14} {'Debit':>14} {'Balance':>14}")
    click.echo("-" * 82)
    for party_id, name, totals in rows:
        click.echo(
            f"{party_id:<6} {name:<30} {format_amount(totals.total_credit):>14}"
            f" {format_amount(totals.total_debit):>14} {format_amount(totals.balance):>14}"
        )
