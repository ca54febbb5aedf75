#!/usr/bin/env python3
"""
Main CLI Entry Point for Ledger Itemizer

Provides the ``itemizer`` command group.
"""

import logging
import os

import click

from ..core.config import get_config
from .join import join


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Ledger Itemizer - itemize ledger entries from order history.

    Matches financial-account ledger entries to the orders, shipments and
    refunds they paid for, and rewrites each entry as an itemized breakdown.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["ITEMIZER_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("itemizer").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from itemizer import __author__, __version__

    click.echo(f"Ledger Itemizer v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Orders Directory: {config_obj.orders.data_dir}")
    click.echo(f"  Ledger API: {config_obj.ledger.base_url}")
    click.echo(f"  Ledger Credentials: {config_obj.ledger.credentials_dir}")
    click.echo(f"  Description Keywords: {', '.join(config_obj.ledger.description_keywords)}")
    start_date = config_obj.reconcile.start_date
    click.echo(f"  Start Date: {start_date if start_date else 'not set'}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


main.add_command(join)


if __name__ == "__main__":
    main()
