#!/usr/bin/env python3
"""
Synthetic Test Data Generators

Builds synthetic ledger entries, orders and refunds for unit and integration
tests, and writes order history extracts in the export CSV layout.

All amounts, dates, IDs, names, and other identifiers are synthetic.

Note: Uses standard random module for test data generation (not cryptographic use).
"""

import random
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import pandas as pd

from itemizer.core.dates import FinancialDate
from itemizer.core.money import Money
from itemizer.ledger.models import ChildTransaction, LedgerTransaction
from itemizer.orders.models import LineItem, Order, ReturnRecord, Shipment

SYNTHETIC_ITEMS = [
    "Wireless Mouse",
    "USB Cable",
    "Phone Case",
    "Book: Example Title",
    "Kitchen Gadget",
    "Office Supplies",
    "Electronics Accessory",
]

SYNTHETIC_BANK_DESCRIPTION = "AMAZON.COM*SYNTH01"

ORDER_HISTORY_COLUMNS = [
    "Website",
    "Order ID",
    "Order Date",
    "Purchase Order Number",
    "Currency",
    "Unit Price",
    "Total Owed",
    "Payment Instrument Type",
    "Order Status",
    "Ship Date",
    "Carrier Name & Tracking Number",
    "Product Name",
]

RETURNS_COLUMNS = [
    "OrderID",
    "ReversalID",
    "RefundCompletionDate",
    "Currency",
    "AmountRefunded",
    "Status",
    "DisbursementType",
]


def make_transaction(
    tx_id: str,
    cents: int,
    on: str,
    description: str = SYNTHETIC_BANK_DESCRIPTION,
) -> LedgerTransaction:
    """Unsplit ledger entry with a single child carrying its own description."""
    amount = Money.from_cents(cents)
    return LedgerTransaction(
        id=tx_id,
        amount=amount,
        date=FinancialDate.from_string(on),
        children=[ChildTransaction(description=description, amount=amount)],
    )


def make_shipment(
    tracking_id: str,
    items: list[tuple[str, int]],
    ship_date: str | None = None,
) -> Shipment:
    """Build a shipment from ``(description, cents)`` pairs, totalled item by item."""
    shipment = Shipment(
        tracking_id=tracking_id,
        ship_date=FinancialDate.from_string(ship_date) if ship_date else None,
        amount=Money.zero(),
    )
    for description, cents in items:
        shipment.add_item(LineItem(description=description, amount=Money.from_cents(cents)))
    return shipment


def make_order(
    order_id: str,
    order_date: str,
    shipments: list[tuple[str, list[tuple[str, int]]]],
    used_gift_card: bool = False,
) -> Order:
    """
    Build an order from ``(tracking_id, [(description, cents), ...])`` tuples.

    Item cents are given with their ledger sign (negative for purchases).
    """
    return Order(
        order_id=order_id,
        order_date=FinancialDate.from_string(order_date),
        used_gift_card=used_gift_card,
        shipments=[make_shipment(tracking_id, items) for tracking_id, items in shipments],
    )


def make_return(
    order_id: str,
    on: str,
    cents: int,
    items: list[tuple[str, int]] | None = None,
) -> ReturnRecord:
    """Refund of ``cents`` (positive) covering the given order items."""
    return ReturnRecord(
        order_id=order_id,
        return_date=FinancialDate.from_string(on),
        amount=Money.from_cents(cents),
        items=[LineItem(description=description, amount=Money.from_cents(c)) for description, c in items or []],
    )


def generate_synthetic_run(
    num_orders: int = 12,
    seed: int = 42,
) -> tuple[list[LedgerTransaction], list[Order], list[ReturnRecord]]:
    """
    Generate a reproducible mix of orders, charges and refunds.

    Orders cycle through being paid by one charge, by one charge per
    shipment, or not appearing in the ledger at all. Some orders get a
    refund of their first item plus the matching ledger credit.

    Args:
        num_orders: Number of orders to generate
        seed: Seed for the random generator

    Returns:
        Tuple of (transactions, orders, returns)
    """
    rng = random.Random(seed)
    base_date = date(2024, 3, 1)

    transactions: list[LedgerTransaction] = []
    orders: list[Order] = []
    returns: list[ReturnRecord] = []

    for i in range(num_orders):
        order_date = base_date + timedelta(days=i * 5)
        shipments = []
        for j in range(rng.randint(1, 3)):
            items = [(rng.choice(SYNTHETIC_ITEMS), -rng.randint(500, 10000)) for _ in range(rng.randint(1, 3))]
            shipments.append((f"TRK{i:03d}{j}", items))

        order_id = f"{100 + i}-{rng.randint(1000000, 9999999)}-{rng.randint(1000000, 9999999)}"
        order = make_order(order_id, order_date.isoformat(), shipments, used_gift_card=(i % 4 == 3))
        orders.append(order)

        pattern = i % 3
        if pattern == 0:
            charge_date = order_date + timedelta(days=rng.randint(0, 5))
            transactions.append(make_transaction(f"tx-{i:03d}", order.total.to_cents(), charge_date.isoformat()))
        elif pattern == 1:
            for j, shipment in enumerate(order.shipments):
                charge_date = order_date + timedelta(days=rng.randint(0, 10))
                transactions.append(
                    make_transaction(f"tx-{i:03d}-{j}", shipment.amount.to_cents(), charge_date.isoformat())
                )

        if i % 5 == 1:
            description, cents = shipments[0][1][0]
            refund_date = (order_date + timedelta(days=20)).isoformat()
            returns.append(make_return(order_id, refund_date, -cents, [(description, cents)]))
            transactions.append(make_transaction(f"refund-{i:03d}", -cents, refund_date))

    return transactions, orders, returns


def order_history_row(
    order_id: str,
    order_date: str,
    product: str,
    total_owed: str,
    tracking: str = "UPS(1Z9990000000000001)",
    ship_date: str | None = None,
    payment: str = "Visa - 1234",
    website: str = "Amazon.com",
) -> dict[str, Any]:
    """One order history CSV row (dates in ISO-8601 timestamp form)."""
    return {
        "Website": website,
        "Order ID": order_id,
        "Order Date": order_date,
        "Purchase Order Number": "Not Applicable",
        "Currency": "USD",
        "Unit Price": total_owed,
        "Total Owed": total_owed,
        "Payment Instrument Type": payment,
        "Order Status": "Closed",
        "Ship Date": ship_date,
        "Carrier Name & Tracking Number": tracking,
        "Product Name": product,
    }


def returns_row(order_id: str, completed: str, amount: str) -> dict[str, Any]:
    """One refund CSV row."""
    return {
        "OrderID": order_id,
        "ReversalID": f"R-{order_id}",
        "RefundCompletionDate": completed,
        "Currency": "USD",
        "AmountRefunded": amount,
        "Status": "Completed",
        "DisbursementType": "Refund",
    }


def write_order_history_csv(export_dir: Path, rows: list[dict[str, Any]], index: int = 1) -> Path:
    """Write rows to ``Retail.OrderHistory.N/Retail.OrderHistory.N.csv`` under an export dir."""
    csv_dir = export_dir / f"Retail.OrderHistory.{index}"
    csv_dir.mkdir(parents=True, exist_ok=True)
    csv_file = csv_dir / f"Retail.OrderHistory.{index}.csv"
    pd.DataFrame(rows, columns=ORDER_HISTORY_COLUMNS).to_csv(csv_file, index=False)
    return csv_file


def write_returns_csv(export_dir: Path, rows: list[dict[str, Any]], index: int = 1) -> Path:
    """Write rows to ``Retail.OrdersReturned.Payments.N/...csv`` under an export dir."""
    csv_dir = export_dir / f"Retail.OrdersReturned.Payments.{index}"
    csv_dir.mkdir(parents=True, exist_ok=True)
    csv_file = csv_dir / f"Retail.OrdersReturned.Payments.{index}.csv"
    pd.DataFrame(rows, columns=RETURNS_COLUMNS).to_csv(csv_file, index=False)
    return csv_file
