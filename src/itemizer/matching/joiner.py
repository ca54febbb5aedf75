#!/usr/bin/env python3
"""
Order/Ledger Joiner

Reconciles ledger entries with orders and refunds:

1. Each strategy (Exact, Combination, Gift Card) runs across all orders
   before the next one starts, so simple one-to-one matches are claimed
   everywhere before split charges or gift card guesses are considered.
2. Within an order, groups of remaining shipments are tried largest
   grouping first; after every match the search restarts on what is left.
3. Matched groups have their items allocated across the matched entries.
4. Leftover refunds are paired with leftover entries.

Inputs are deep-copied; only the copies are consumed. Anything left
unmatched is returned for manual review.
"""

import copy
import logging
from collections.abc import Iterable

from ..core.money import total_amount
from ..ledger.models import LedgerTransaction
from ..orders.models import Order, ReturnRecord, Shipment
from .allocator import allocate_items, discard
from .models import (
    DESCRIPTION_PREFIX,
    GiftCardCredit,
    JoinedRecord,
    JoinedRecordItem,
    JoinResult,
)
from .returns import match_returns
from .strategies import MatchStrategy, StrategyMatch, find_matches
from .subsets import subsets

logger = logging.getLogger(__name__)


class Joiner:
    """
    Owns the working pools of one reconciliation run.

    Pools shrink as entities are matched; whatever remains after run() is
    reported back as unmatched.
    """

    def __init__(
        self,
        transactions: Iterable[LedgerTransaction],
        orders: Iterable[Order],
        returns: Iterable[ReturnRecord],
    ):
        self.transactions: list[LedgerTransaction] = copy.deepcopy(list(transactions))
        # Sorted by total, descending; stable for equal totals
        self.orders: list[Order] = sorted(copy.deepcopy(list(orders)), key=lambda order: order.total, reverse=True)
        self.returns: list[ReturnRecord] = copy.deepcopy(list(returns))
        self.joined_records: list[JoinedRecord] = []
        self.gift_card_credits: list[GiftCardCredit] = []

    def run(self) -> JoinResult:
        """Run every strategy, then the refund pass, and collect the result."""
        for strategy in MatchStrategy:
            self._apply_strategy(strategy)

        self.joined_records.extend(match_returns(self.returns, self.transactions, self.gift_card_credits))

        logger.info(
            "Joined %d ledger entries; %d entries, %d orders and %d refunds left unmatched",
            len(self.joined_records),
            len(self.transactions),
            len(self.orders),
            len(self.returns),
        )
        return JoinResult(
            joined_records=sorted(self.joined_records, key=lambda record: record.order_date),
            remaining_transactions=self.transactions,
            remaining_orders=self.orders,
            remaining_returns=self.returns,
            gift_card_credits=self.gift_card_credits,
        )

    def _apply_strategy(self, strategy: MatchStrategy) -> None:
        index = 0
        while index < len(self.orders):
            order = self.orders[index]
            matched = False
            while self._match_shipment_group(strategy, order):
                matched = True

            if matched and not order.shipments:
                del self.orders[index]
            else:
                index += 1

    def _match_shipment_group(self, strategy: MatchStrategy, order: Order) -> bool:
        """Match the first shipment group the strategy can settle; False if none."""
        for shipments in reversed(list(subsets(order.shipments))):
            match = find_matches(strategy, total_amount(shipments), order, self.returns, self.transactions)
            if match is None:
                continue
            self._apply_match(strategy, order, shipments, match)
            return True
        return False

    def _apply_match(
        self, strategy: MatchStrategy, order: Order, shipments: list[Shipment], match: StrategyMatch
    ) -> None:
        if match.absorbed_return is not None:
            discard(self.returns, match.absorbed_return)

        pool = _group_items(shipments, match)
        for transaction in match.transactions:
            allocation = allocate_items(pool, transaction, order)
            self.joined_records.append(allocation.record)
            self.gift_card_credits.extend(allocation.gift_card_credits)
            discard(self.transactions, transaction)
            logger.debug(
                "%s match: order %s -> ledger entry %s (%s, %d items)",
                strategy.value,
                order.order_id,
                transaction.id,
                transaction.amount,
                len(allocation.record.items),
            )

        for shipment in shipments:
            discard(order.shipments, shipment)


def _group_items(shipments: list[Shipment], match: StrategyMatch) -> list[JoinedRecordItem]:
    """Flatten a shipment group into record items; strategy extras follow the first shipment's items."""
    items: list[JoinedRecordItem] = []
    for position, shipment in enumerate(shipments):
        line_items = list(shipment.items)
        if position == 0:
            line_items.extend(match.extra_items)
        items.extend(
            JoinedRecordItem(
                tracking_id=shipment.tracking_id,
                description=DESCRIPTION_PREFIX + item.description,
                amount=item.amount,
            )
            for item in line_items
        )
    return items


def join_orders(
    transactions: Iterable[LedgerTransaction],
    orders: Iterable[Order],
    returns: Iterable[ReturnRecord],
) -> JoinResult:
    """
    Reconcile ledger entries against orders and refunds.

    Args:
        transactions: Ledger entries to itemize
        orders: Orders with their shipments and line items
        returns: Refunds with the line items they cover

    Returns:
        JoinResult with joined records (sorted by order date) and the
        unmatched remainder of each input
    """
    return Joiner(transactions, orders, returns).run()
