#!/usr/bin/env python3
"""
Return Matcher

Second reconciliation pass pairing leftover refunds with leftover ledger
entries. A refund matches an entry of the same amount, or an entry equal
to the refund minus a gift card credit recorded during the first pass
(the gift card portion was refunded to the card, not the account).
"""

import logging

from ..core.money import amounts_match
from ..ledger.models import LedgerTransaction
from ..orders.models import ReturnRecord
from .allocator import discard, is_unmodified
from .models import (
    DESCRIPTION_PREFIX,
    GIFT_CARD_DESCRIPTION,
    NO_TRACKING_ID,
    GiftCardCredit,
    JoinedRecord,
    JoinedRecordItem,
)

logger = logging.getLogger(__name__)


def _find_credit(
    transaction: LedgerTransaction, record: ReturnRecord, gift_card_credits: list[GiftCardCredit]
) -> GiftCardCredit | None:
    # Credits are looked up by amount alone, from any order
    for credit in gift_card_credits:
        if amounts_match(transaction.amount, record.amount - credit.amount):
            return credit
    return None


def _join_return(
    record: ReturnRecord, transaction: LedgerTransaction, credit: GiftCardCredit | None
) -> JoinedRecord:
    items = [
        JoinedRecordItem(
            tracking_id=NO_TRACKING_ID,
            description=DESCRIPTION_PREFIX + item.description,
            amount=-item.amount,
        )
        for item in record.items
    ]
    if credit is not None:
        items.append(
            JoinedRecordItem(
                tracking_id=NO_TRACKING_ID,
                description=DESCRIPTION_PREFIX + GIFT_CARD_DESCRIPTION,
                amount=-credit.amount,
            )
        )

    return JoinedRecord(
        ledger_transaction_id=transaction.id,
        order_id=record.order_id,
        order_date=record.return_date,
        amount=transaction.amount,
        items=items,
        is_unmodified=is_unmodified(items, transaction),
    )


def match_returns(
    returns: list[ReturnRecord],
    transactions: list[LedgerTransaction],
    gift_card_credits: list[GiftCardCredit],
) -> list[JoinedRecord]:
    """
    Pair refunds with ledger entries of any sign.

    Each refund takes the first qualifying entry. Matched refunds and entries
    are removed from their pools in place. Gift card credits are never
    consumed, so one credit can apply to several refunds.

    Args:
        returns: Unmatched refunds (mutated)
        transactions: Unmatched ledger entries (mutated)
        gift_card_credits: Credits recorded while matching orders

    Returns:
        Joined records, in refund order
    """
    records: list[JoinedRecord] = []
    index = 0
    while index < len(returns):
        record = returns[index]
        joined = None
        for transaction in transactions:
            credit = _find_credit(transaction, record, gift_card_credits)
            if credit is not None or amounts_match(transaction.amount, record.amount):
                joined = _join_return(record, transaction, credit)
                discard(transactions, transaction)
                break

        if joined is None:
            index += 1
            continue

        logger.debug("Matched refund for order %s to ledger entry %s", record.order_id, joined.ledger_transaction_id)
        records.append(joined)
        del returns[index]

    return records
