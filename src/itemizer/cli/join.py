#!/usr/bin/env python3
"""
Join CLI - Ledger Itemization Command

Fetches ledger entries, loads order history exports, reconciles them and
pushes the itemized breakdowns back to the ledger.
"""

from pathlib import Path

import click

from ..core.config import Config, get_config
from ..core.dates import FinancialDate
from ..core.json_utils import write_json
from ..ledger.client import LedgerClient
from ..matching.joiner import join_orders
from ..matching.strategies import DATE_WINDOW
from ..orders.loader import load_orders, load_returns
from . import report

DEFAULT_LOOKBACK_DAYS = 90


def _resolve_start(start: str | None, config: Config) -> FinancialDate:
    if start:
        try:
            return FinancialDate.from_string(start)
        except ValueError as e:
            raise click.BadParameter(f"Expected YYYY-MM-DD, got {start!r}", param_hint="--start") from e
    if config.reconcile.start_date is not None:
        return config.reconcile.start_date
    return FinancialDate.today().shifted(-DEFAULT_LOOKBACK_DAYS)


def _resolve_export_dirs(export_dirs: tuple[Path, ...], config: Config) -> list[Path]:
    if export_dirs:
        return list(export_dirs)
    orders_dir = config.orders.data_dir
    found = sorted(path for path in orders_dir.iterdir() if path.is_dir()) if orders_dir.is_dir() else []
    if not found:
        raise click.UsageError(f"No export directories given and none found in {orders_dir}")
    return found


@click.command()
@click.argument(
    "export_dirs",
    nargs=-1,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--start", help="First ledger date to itemize (YYYY-MM-DD); defaults to ITEMIZER_START_DATE")
@click.option("--dry-run", is_flag=True, help="Report what would change without updating the ledger")
@click.option("--refresh-creds", is_flag=True, help="Discard stored ledger credentials and log in again")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the reconciliation result to this JSON file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def join(
    ctx: click.Context,
    export_dirs: tuple[Path, ...],
    start: str | None,
    dry_run: bool,
    refresh_creds: bool,
    output: Path | None,
    verbose: bool,
) -> None:
    """
    Itemize ledger entries using order history exports.

    Orders and refunds are loaded from 14 days before the start date so that
    charges near the start can still find their orders. Without EXPORT_DIRS,
    every export directory under the configured orders directory is used.

    Examples:
      itemizer join --dry-run
      itemizer join ~/exports/2024-06-01_karl --dry-run
      itemizer join ~/exports/karl ~/exports/erica --start 2024-03-01
    """
    config = get_config()
    start_date = _resolve_start(start, config)
    buffered_start = start_date.shifted(-DATE_WINDOW.days)
    paths = _resolve_export_dirs(export_dirs, config)

    if verbose or (ctx.obj or {}).get("verbose", False):
        click.echo("Ledger Itemization")
        click.echo(f"Start date: {start_date} (orders from {buffered_start})")
        click.echo(f"Exports: {', '.join(str(p) for p in paths)}")
        click.echo(f"Mode: {'dry run' if dry_run else 'update ledger'}")
        click.echo()

    try:
        client = LedgerClient(config.ledger)
        if refresh_creds:
            client.clear_credentials()

        transactions = client.get_transactions(start_date)
        report.print_heading("Ledger Records")
        report.print_transactions(transactions)

        orders = load_orders(paths, buffered_start, config.orders.excluded_order_ids)
        report.print_heading("Order Records")
        report.print_orders(orders)

        loaded_returns = load_returns(orders, paths, buffered_start)
        report.print_heading("Returns")
        report.print_returns(loaded_returns.returns)
        report.print_heading("Unmatched Returns")
        report.print_returns(loaded_returns.remaining_returns)

        result = join_orders(transactions, orders, loaded_returns.returns)

        report.print_heading("Joined Records")
        report.print_joined_records(result.joined_records)
        report.print_heading("Remaining Ledger Transactions")
        report.print_transactions(result.remaining_transactions)
        report.print_heading("Remaining Orders")
        report.print_orders([order for order in result.remaining_orders if order.order_date >= start_date])
        report.print_heading("Remaining Returns")
        report.print_returns([record for record in result.remaining_returns if record.return_date >= start_date])

        if output:
            write_json(output, result.to_dict())
            click.echo(f"Results saved to: {output}")

        modified = result.modified_records
        if dry_run:
            click.echo("Not updating ledger transactions in dry-run mode")
            click.echo(f"{len(modified)} records would have been updated.")
            return

        click.echo("Updating ledger transactions...")
        for record in modified:
            client.update_transaction(record)
        click.echo(f"✅ Updated {len(modified)} of {len(result.joined_records)} joined records")

    except click.ClickException:
        raise
    except Exception as e:
        click.echo(f"❌ Error during itemization: {e}", err=True)
        raise click.ClickException(str(e)) from e
