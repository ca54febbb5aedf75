#!/usr/bin/env python3
"""
Item Allocator

Partitions a shipment group's items across the ledger entries it matched.

For each entry, the allocator first looks for a subset of the remaining
items whose total equals the entry amount. When none exists it falls back
to consuming items in order until the entry is covered, adding a
"Balance Adjust" item for any difference so the record always sums to the
entry amount.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.money import Money, amounts_match, total_amount
from ..ledger.models import LedgerTransaction
from ..orders.models import Order
from .models import (
    BALANCE_ADJUST_DESCRIPTION,
    DESCRIPTION_PREFIX,
    NO_TRACKING_ID,
    GiftCardCredit,
    JoinedRecord,
    JoinedRecordItem,
)
from .subsets import subsets


@dataclass
class Allocation:
    """Joined record built for one entry, plus gift card credits it carries."""

    record: JoinedRecord
    gift_card_credits: list[GiftCardCredit] = field(default_factory=list)


def discard(pool: list[Any], member: Any) -> None:
    """Remove an object from a pool by identity; absent members are ignored."""
    for index, candidate in enumerate(pool):
        if candidate is member:
            del pool[index]
            return


def is_unmodified(items: list[JoinedRecordItem], transaction: LedgerTransaction) -> bool:
    """
    Check whether items reproduce a ledger entry's existing children.

    Items and children are compared as multisets of (amount, trimmed
    description); order does not matter.
    """
    if len(items) != len(transaction.children):
        return False

    unpaired = list(transaction.children)
    for item in items:
        for index, child in enumerate(unpaired):
            if amounts_match(child.amount, item.amount) and child.description.strip() == item.description.strip():
                del unpaired[index]
                break
        else:
            return False
    return True


def _exact_subset(pool: list[JoinedRecordItem], transaction: LedgerTransaction) -> list[JoinedRecordItem]:
    """
    Scan every subset of the pool for one totalling the entry amount.

    The scan runs over a snapshot of the pool and does not stop early: each
    matching subset's members leave the pool, and the last match found is
    the one allocated.
    """
    allocated: list[JoinedRecordItem] = []
    for combination in subsets(pool):
        if amounts_match(total_amount(combination), transaction.amount):
            allocated = combination
            for item in combination:
                discard(pool, item)
    return allocated


def _greedy_fill(pool: list[JoinedRecordItem], transaction: LedgerTransaction) -> list[JoinedRecordItem]:
    """Consume items in order while a (negative) balance remains, then balance the rest."""
    allocated: list[JoinedRecordItem] = []
    remaining = transaction.amount
    while pool and remaining.is_debit():
        item = pool.pop(0)
        allocated.append(item)
        remaining = remaining - item.amount

    if not amounts_match(remaining, Money.zero()):
        allocated.append(
            JoinedRecordItem(
                tracking_id=NO_TRACKING_ID,
                description=DESCRIPTION_PREFIX + BALANCE_ADJUST_DESCRIPTION,
                amount=remaining,
            )
        )
    return allocated


def allocate_items(
    pool: list[JoinedRecordItem],
    transaction: LedgerTransaction,
    order: Order,
) -> Allocation:
    """
    Allocate items from the pool to one matched ledger entry.

    Allocated items are removed from ``pool`` so later entries of the same
    match draw from what is left.

    Args:
        pool: Items of the matched shipment group still unallocated
        transaction: Ledger entry being itemized
        order: Order the shipment group belongs to

    Returns:
        Allocation with the joined record and any gift card credits
    """
    items = _exact_subset(pool, transaction)
    if not items:
        items = _greedy_fill(pool, transaction)

    credits = [GiftCardCredit(order_id=order.order_id, amount=item.amount) for item in items if item.is_gift_card]

    record = JoinedRecord(
        ledger_transaction_id=transaction.id,
        order_id=order.order_id,
        order_date=order.order_date,
        amount=transaction.amount,
        items=items,
        is_unmodified=is_unmodified(items, transaction),
    )
    return Allocation(record=record, gift_card_credits=credits)
