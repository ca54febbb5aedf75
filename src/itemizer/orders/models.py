#!/usr/bin/env python3
"""
Order Domain Models

Type-safe models for order history data: orders composed of shipments
composed of priced line items, plus refund records.

Amounts follow the ledger's sign convention: line items and shipments of a
purchase are negative (charges), refund amounts are positive.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money, total_amount


@dataclass(frozen=True)
class LineItem:
    """Single priced item within a shipment or refund."""

    description: str
    amount: Money

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "description": self.description,
            "amount": self.amount.to_cents(),
        }


@dataclass
class Shipment:
    """
    Group of line items shipped together under one tracking id.

    ``amount`` is the sum of the items, maintained by the loader.
    """

    tracking_id: str
    ship_date: FinancialDate | None
    amount: Money
    items: list[LineItem] = field(default_factory=list)

    def add_item(self, item: LineItem) -> None:
        """Append an item and keep the shipment total in sync."""
        self.items.append(item)
        self.amount = self.amount + item.amount

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "tracking_id": self.tracking_id,
            "ship_date": self.ship_date.to_iso_string() if self.ship_date else None,
            "amount": self.amount.to_cents(),
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class Order:
    """
    A complete order: one or more shipments.

    An order with no remaining shipments is fully consumed by matching.
    """

    order_id: str
    order_date: FinancialDate
    used_gift_card: bool
    shipments: list[Shipment] = field(default_factory=list)

    @property
    def total(self) -> Money:
        """Total of all remaining shipments."""
        return total_amount(self.shipments)

    @property
    def items(self) -> list[LineItem]:
        """All line items across shipments, in shipment order."""
        return [item for shipment in self.shipments for item in shipment.items]

    def find_shipment(self, tracking_id: str) -> Shipment | None:
        """Look up a shipment by tracking id."""
        for shipment in self.shipments:
            if shipment.tracking_id == tracking_id:
                return shipment
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "order_id": self.order_id,
            "order_date": self.order_date.to_iso_string(),
            "used_gift_card": self.used_gift_card,
            "shipments": [shipment.to_dict() for shipment in self.shipments],
        }


@dataclass
class ReturnRecord:
    """
    Refund tied to an order.

    ``amount`` is positive. ``items`` are the order line items the refund
    covers (with their original negative amounts); empty when no subset of
    the order's items could be matched to the refund.
    """

    order_id: str
    return_date: FinancialDate
    amount: Money
    items: list[LineItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "order_id": self.order_id,
            "return_date": self.return_date.to_iso_string(),
            "amount": self.amount.to_cents(),
            "items": [item.to_dict() for item in self.items],
        }
