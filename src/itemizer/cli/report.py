#!/usr/bin/env python3
"""
Console Report Formatting

Plain-text listings of ledger entries, orders, refunds and joined records
printed by ``itemizer join``.
"""

from collections.abc import Callable

import click

from ..core.currency import cents_to_dollars_str
from ..core.money import Money
from ..ledger.models import LedgerTransaction
from ..matching.models import JoinedRecord
from ..orders.models import Order, ReturnRecord

DESCRIPTION_WIDTH = 140

Echo = Callable[[str], None]


def format_amount(amount: Money) -> str:
    """Two-decimal amount right-aligned to seven characters."""
    return cents_to_dollars_str(amount.to_cents()).rjust(7)


def print_heading(title: str, echo: Echo = click.echo) -> None:
    echo(title)
    echo("==============")


def print_transactions(transactions: list[LedgerTransaction], echo: Echo = click.echo) -> None:
    if not transactions:
        echo("NONE")
    for transaction in transactions:
        echo(f"{transaction.date} {format_amount(transaction.amount)}")
        for child in transaction.children:
            echo(f"     {format_amount(child.amount)} {child.description[:DESCRIPTION_WIDTH]}")


def print_orders(orders: list[Order], echo: Echo = click.echo) -> None:
    if not orders:
        echo("NONE")
    for order in orders:
        echo(f"{order.order_date} {order.order_id}")
        for shipment in order.shipments:
            ship_date = shipment.ship_date or "-"
            echo(f"   {ship_date} {format_amount(shipment.amount)} {shipment.tracking_id}")
            for item in shipment.items:
                echo(f"     {format_amount(item.amount)} {item.description[:DESCRIPTION_WIDTH]}")


def print_returns(returns: list[ReturnRecord], echo: Echo = click.echo) -> None:
    if not returns:
        echo("NONE")
    for record in returns:
        echo(f"{record.return_date} {format_amount(record.amount)} {record.order_id}")
        for item in record.items:
            echo(f"   {format_amount(item.amount)} {item.description[:DESCRIPTION_WIDTH]}")


def print_joined_records(records: list[JoinedRecord], echo: Echo = click.echo) -> None:
    if not records:
        echo("NONE")
    for record in records:
        if not record.is_unmodified:
            echo("[MODIFIED]")
        echo(f"{record.order_date} {format_amount(record.amount)} {record.order_id} {record.ledger_transaction_id}")
        for item in record.items:
            echo(f"     {format_amount(item.amount)} {item.description}")
