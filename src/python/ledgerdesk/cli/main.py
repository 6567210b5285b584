"""ledgerdesk CLI entry point."""

from __future__ import annotations

from pathlib import Path

import click

from ledgerdesk.__version__ import __version__
from ledgerdesk.cli.account import account
from ledgerdesk.cli.admin import admin, login
from ledgerdesk.cli.counterparty import counterparty
from ledgerdesk.cli.ledger import ledger
from ledgerdesk.cli.transaction import transaction
from ledgerdesk.config import load_config


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="ledgerdesk")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to a JSON config file.",
)
@click.option("--base-url", default=None, help="Remote store base URL.")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    base_url: str | None,
    timeout: float | None,
) -> None:
    """ledgerdesk CLI entry point."""
    config = load_config(config_path).with_overrides(
        base_url=base_url,
        timeout_seconds=timeout,
    )
    ctx.obj = {"config": config}


main.add_command(counterparty)
main.add_command(transaction)
main.add_command(ledger)
main.add_command(account)
main.add_command(admin)
main.add_command(login)


if __name__ == "__main__":
    main()
