#!/usr/bin/env python3
"""
Match Strategies

Each strategy takes the total of a group of shipments and proposes the
ledger entries that settle it:

1. Exact - one charge equal to the total
2. Combination - two or more charges summing to the total
3. Gift Card - one smaller charge, the rest paid by gift card (or by a
   refund credited to the gift card balance)

Strategies only look at debit entries dated within DATE_WINDOW of the order
date and never mutate the pools they are given; the joiner applies the
returned StrategyMatch.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

from ..core.money import Money, amounts_match, total_amount
from ..ledger.models import LedgerTransaction
from ..orders.models import LineItem, Order, ReturnRecord
from .models import GIFT_CARD_DESCRIPTION
from .subsets import subsets

DATE_WINDOW = timedelta(days=14)


class MatchStrategy(Enum):
    """Matching strategies, declared in the order they are run."""

    EXACT = "exact"
    COMBINATION = "combination"
    GIFT_CARD = "gift_card"


@dataclass
class StrategyMatch:
    """
    A strategy's proposal for one shipment group.

    ``extra_items`` are added to the group's item pool (attributed to its
    first shipment); ``absorbed_return`` leaves the pending-returns pool.
    """

    transactions: list[LedgerTransaction]
    extra_items: list[LineItem] = field(default_factory=list)
    absorbed_return: ReturnRecord | None = None


def window_candidates(order: Order, transactions: list[LedgerTransaction]) -> list[LedgerTransaction]:
    """Debit entries dated from the order date through the end of the date window."""
    return [
        tx for tx in transactions if tx.is_debit and tx.date.within_window(order.order_date, DATE_WINDOW)
    ]


def _by_date_distance(order: Order, transactions: list[LedgerTransaction]) -> list[LedgerTransaction]:
    return sorted(transactions, key=lambda tx: tx.date.distance_days(order.order_date))


def find_exact_match(
    amount: Money,
    order: Order,
    pending_returns: list[ReturnRecord],
    transactions: list[LedgerTransaction],
) -> StrategyMatch | None:
    """Single charge matching the amount, closest to the order date."""
    matching = [tx for tx in window_candidates(order, transactions) if amounts_match(tx.amount, amount)]
    if not matching:
        return None
    return StrategyMatch(transactions=[_by_date_distance(order, matching)[0]])


def find_combination_match(
    amount: Money,
    order: Order,
    pending_returns: list[ReturnRecord],
    transactions: list[LedgerTransaction],
) -> StrategyMatch | None:
    """First group of two or more charges whose total matches the amount."""
    candidates = _by_date_distance(order, window_candidates(order, transactions))
    for combination in subsets(candidates):
        if len(combination) < 2:
            continue
        if amounts_match(total_amount(combination), amount):
            return StrategyMatch(transactions=combination)
    return None


def find_gift_card_match(
    amount: Money,
    order: Order,
    pending_returns: list[ReturnRecord],
    transactions: list[LedgerTransaction],
) -> StrategyMatch | None:
    """
    Charge smaller than the amount, with the difference paid by gift card.

    The charge closest to the amount wins. If a pending refund equals the
    uncovered difference, the refund was credited to the gift card and its
    items join the group; otherwise a synthetic gift card item balances it.
    """
    if not order.used_gift_card:
        return None

    # Debits are negative: a larger signed amount is a smaller charge
    smaller_charges = [tx for tx in window_candidates(order, transactions) if tx.amount > amount]
    if not smaller_charges:
        return None
    transaction = min(smaller_charges, key=lambda tx: (tx.amount - amount).abs())

    gift_card_amount = amount - transaction.amount
    for pending in pending_returns:
        if amounts_match(pending.amount, -gift_card_amount):
            return StrategyMatch(
                transactions=[transaction],
                extra_items=[LineItem(description=item.description, amount=-item.amount) for item in pending.items],
                absorbed_return=pending,
            )

    return StrategyMatch(
        transactions=[transaction],
        extra_items=[LineItem(description=GIFT_CARD_DESCRIPTION, amount=-gift_card_amount)],
    )


StrategyFunction = Callable[
    [Money, Order, list[ReturnRecord], list[LedgerTransaction]],
    StrategyMatch | None,
]

_STRATEGIES: dict[MatchStrategy, StrategyFunction] = {
    MatchStrategy.EXACT: find_exact_match,
    MatchStrategy.COMBINATION: find_combination_match,
    MatchStrategy.GIFT_CARD: find_gift_card_match,
}


def find_matches(
    strategy: MatchStrategy,
    amount: Money,
    order: Order,
    pending_returns: list[ReturnRecord],
    transactions: list[LedgerTransaction],
) -> StrategyMatch | None:
    """
    Run one strategy for a shipment group.

    Args:
        strategy: Strategy to apply
        amount: Total of the shipment group (negative for charges)
        order: Order the shipments belong to
        pending_returns: Refunds not yet matched
        transactions: Ledger entries not yet matched

    Returns:
        StrategyMatch, or None if the strategy found nothing
    """
    return _STRATEGIES[strategy](amount, order, pending_returns, transactions)
