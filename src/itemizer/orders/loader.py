#!/usr/bin/env python3
"""
Order History Loader

Loads order history and refund CSV extracts into Order and ReturnRecord
domain models for reconciliation.

Functions:
- load_orders: Load orders (grouped into shipments) from one or more exports
- load_returns: Load refunds and attach the order items they cover
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from ..core.currency import safe_currency_to_cents
from ..core.dates import FinancialDate
from ..core.money import Money, amounts_match, total_amount
from ..matching.subsets import subsets
from .models import LineItem, Order, ReturnRecord, Shipment

logger = logging.getLogger(__name__)

ORDER_HISTORY_PATTERN = "**/Retail.OrderHistory.*.csv"
RETURNS_PATTERN = "**/Retail.OrdersReturned.Payments.*.csv"

# Rows with this website value are digital/non-retail records
IGNORED_WEBSITE = "panda01"


@dataclass
class ReturnLoadResult:
    """Refunds split by whether their covered items could be identified."""

    returns: list[ReturnRecord] = field(default_factory=list)
    remaining_returns: list[ReturnRecord] = field(default_factory=list)


def _parse_optional_date(value: Any) -> FinancialDate | None:
    """Parse an ISO timestamp cell, returning None for blanks and placeholders."""
    if value is None:
        return None
    try:
        return FinancialDate.from_iso_prefix(str(value))
    except ValueError:
        return None


def _read_extract(csv_file: Path) -> pd.DataFrame:
    """Read an extract with every cell as text so amounts and ids are not coerced."""
    return pd.read_csv(csv_file, dtype=str, keep_default_na=False)


def _find_extracts(export_dir: Path, pattern: str) -> list[Path]:
    if not export_dir.exists():
        raise FileNotFoundError(f"Order export directory not found: {export_dir}")
    return sorted(export_dir.glob(pattern))


def _orders_from_rows(rows: pd.DataFrame, source: Path, since: FinancialDate) -> list[Order]:
    """Group order history rows into orders and shipments, preserving first-seen order."""
    orders: dict[str, Order] = {}

    for _, row in rows.iterrows():
        if row.get("Website", "") == IGNORED_WEBSITE:
            continue

        try:
            order_id = str(row["Order ID"])
            order_date = FinancialDate.from_iso_prefix(str(row["Order Date"]))
            tracking_id = str(row["Carrier Name & Tracking Number"])
            description = str(row["Product Name"])
            # Charges are debits in the ledger's sign convention
            amount = -Money.from_cents(safe_currency_to_cents(row["Total Owed"]))
            used_gift_card = "gift" in str(row.get("Payment Instrument Type", "")).lower()
        except (KeyError, ValueError, TypeError) as e:
            logger.warning("Failed to parse row in %s: %s", source, e)
            continue

        if order_date < since:
            continue

        order = orders.get(order_id)
        if order is None:
            order = Order(
                order_id=order_id,
                order_date=order_date,
                used_gift_card=used_gift_card,
            )
            orders[order_id] = order

        shipment = order.find_shipment(tracking_id)
        if shipment is None:
            shipment = Shipment(
                tracking_id=tracking_id,
                ship_date=_parse_optional_date(row.get("Ship Date")),
                amount=Money.zero(),
            )
            order.shipments.append(shipment)

        shipment.add_item(LineItem(description=description, amount=amount))

    return list(orders.values())


def load_orders(
    export_dirs: list[str | Path],
    since: FinancialDate,
    excluded_order_ids: list[str] | tuple[str, ...] = (),
) -> list[Order]:
    """
    Load orders from order history extracts.

    Args:
        export_dirs: Export directories, each containing a Retail.OrderHistory CSV
                     (possibly nested in a subdirectory)
        since: Orders placed before this date are skipped
        excluded_order_ids: Order ids to leave out entirely

    Returns:
        Orders of each export sorted by order date, exports concatenated in
        the order given

    Raises:
        FileNotFoundError: If an export directory does not exist
    """
    excluded = set(excluded_order_ids)
    all_orders: list[Order] = []

    for export_dir in export_dirs:
        export_path = Path(export_dir)
        csv_files = _find_extracts(export_path, ORDER_HISTORY_PATTERN)
        if not csv_files:
            logger.warning("No order history extract found in %s", export_path)
            continue

        orders: list[Order] = []
        for csv_file in csv_files:
            try:
                rows = _read_extract(csv_file)
            except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
                logger.warning("Failed to load %s: %s", csv_file, e)
                continue
            orders.extend(_orders_from_rows(rows, csv_file, since))

        orders = [order for order in orders if order.order_id not in excluded]
        all_orders.extend(sorted(orders, key=lambda order: order.order_date))
        logger.info("Loaded %d orders from %s", len(orders), export_path)

    return all_orders


def _match_return_items(record: ReturnRecord, order: Order) -> list[LineItem] | None:
    """Find the first subset of the order's items whose refund equals the record amount."""
    for combination in subsets(order.items):
        if amounts_match(-total_amount(combination), record.amount):
            return combination
    return None


def load_returns(
    orders: list[Order],
    export_dirs: list[str | Path],
    since: FinancialDate,
) -> ReturnLoadResult:
    """
    Load refunds and attach the order line items each one covers.

    Args:
        orders: Orders previously loaded with load_orders
        export_dirs: Export directories containing Retail.OrdersReturned.Payments CSVs
        since: Refunds completed before this date are skipped

    Returns:
        ReturnLoadResult with matched refunds in ``returns`` and refunds whose
        order or items could not be identified in ``remaining_returns``

    Raises:
        FileNotFoundError: If an export directory does not exist
    """
    orders_by_id: dict[str, Order] = {}
    for order in orders:
        orders_by_id.setdefault(order.order_id, order)
    result = ReturnLoadResult()

    for export_dir in export_dirs:
        export_path = Path(export_dir)
        for csv_file in _find_extracts(export_path, RETURNS_PATTERN):
            try:
                rows = _read_extract(csv_file)
            except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
                logger.warning("Failed to load %s: %s", csv_file, e)
                continue

            for _, row in rows.iterrows():
                try:
                    record = ReturnRecord(
                        order_id=str(row["OrderID"]),
                        return_date=FinancialDate.from_iso_prefix(str(row["RefundCompletionDate"])),
                        amount=Money.from_cents(safe_currency_to_cents(row["AmountRefunded"])),
                    )
                except (KeyError, ValueError, TypeError) as e:
                    logger.warning("Failed to parse row in %s: %s", csv_file, e)
                    continue

                if record.return_date < since:
                    continue

                order = orders_by_id.get(record.order_id)
                items = _match_return_items(record, order) if order else None
                if items is None:
                    result.remaining_returns.append(record)
                    continue

                record.items = items
                result.returns.append(record)

    return result
