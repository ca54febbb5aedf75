#!/usr/bin/env python3
"""
Reconciliation Result Models

Output entities of a reconciliation run: joined records pairing one ledger
entry with an itemized breakdown from one order (or refund), plus the
leftover working pools.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money
from ..ledger.models import LedgerTransaction
from ..orders.models import Order, ReturnRecord

DESCRIPTION_PREFIX = "Amazon - "
GIFT_CARD_DESCRIPTION = "Gift Card"
BALANCE_ADJUST_DESCRIPTION = "Balance Adjust"
NO_TRACKING_ID = "none"


@dataclass(frozen=True, eq=False)
class JoinedRecordItem:
    """
    One line of a joined record's itemization.

    Compared by identity: two identical lines from the same shipment are
    still distinct items when allocating.
    """

    tracking_id: str
    description: str
    amount: Money

    @property
    def is_gift_card(self) -> bool:
        return self.description == DESCRIPTION_PREFIX + GIFT_CARD_DESCRIPTION

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "tracking_id": self.tracking_id,
            "description": self.description,
            "amount": self.amount.to_cents(),
        }


@dataclass(frozen=True)
class GiftCardCredit:
    """Gift card balance that covered part of an order, kept for refund matching."""

    order_id: str
    amount: Money


@dataclass
class JoinedRecord:
    """
    A ledger entry matched to an order or refund, with its itemized breakdown.

    ``is_unmodified`` is True when the items reproduce the entry's existing
    children, so pushing the record would change nothing.
    """

    ledger_transaction_id: str
    order_id: str
    order_date: FinancialDate
    amount: Money
    items: list[JoinedRecordItem]
    is_unmodified: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "ledger_transaction_id": self.ledger_transaction_id,
            "order_id": self.order_id,
            "order_date": self.order_date.to_iso_string(),
            "amount": self.amount.to_cents(),
            "items": [item.to_dict() for item in self.items],
            "is_unmodified": self.is_unmodified,
        }


@dataclass
class JoinResult:
    """Outcome of a reconciliation run."""

    joined_records: list[JoinedRecord] = field(default_factory=list)
    remaining_transactions: list[LedgerTransaction] = field(default_factory=list)
    remaining_orders: list[Order] = field(default_factory=list)
    remaining_returns: list[ReturnRecord] = field(default_factory=list)
    gift_card_credits: list[GiftCardCredit] = field(default_factory=list)

    @property
    def modified_records(self) -> list[JoinedRecord]:
        """Joined records whose itemization differs from the ledger entry."""
        return [record for record in self.joined_records if not record.is_unmodified]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "joined_records": [record.to_dict() for record in self.joined_records],
            "remaining_transactions": [tx.to_dict() for tx in self.remaining_transactions],
            "remaining_orders": [order.to_dict() for order in self.remaining_orders],
            "remaining_returns": [record.to_dict() for record in self.remaining_returns],
            "gift_card_credits": [
                {"order_id": credit.order_id, "amount": credit.amount.to_cents()}
                for credit in self.gift_card_credits
            ],
        }
