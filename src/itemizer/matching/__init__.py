"""
Order/Ledger Matching Package

Reconciliation engine pairing ledger entries with orders and refunds.

This package provides:
- Subset enumeration in a fixed, deterministic order
- 3-strategy matching (Exact, Combination, Gift Card) within a 14-day window
- Item allocation across split charges, with balancing items when needed
- A refund pass that reuses gift card credits found while matching orders

Key Components:
- joiner: Orchestrates a full reconciliation run
- strategies: Match strategies
- allocator: Item allocation and unmodified-record detection
- returns: Refund matching
"""

from .allocator import Allocation, allocate_items, is_unmodified
from .joiner import Joiner, join_orders
from .models import (
    BALANCE_ADJUST_DESCRIPTION,
    DESCRIPTION_PREFIX,
    GIFT_CARD_DESCRIPTION,
    NO_TRACKING_ID,
    GiftCardCredit,
    JoinedRecord,
    JoinedRecordItem,
    JoinResult,
)
from .returns import match_returns
from .strategies import DATE_WINDOW, MatchStrategy, StrategyMatch, find_matches
from .subsets import subsets

__all__ = [
    "BALANCE_ADJUST_DESCRIPTION",
    "DATE_WINDOW",
    "DESCRIPTION_PREFIX",
    "GIFT_CARD_DESCRIPTION",
    "NO_TRACKING_ID",
    # Allocation
    "Allocation",
    # Result models
    "GiftCardCredit",
    "JoinResult",
    "JoinedRecord",
    "JoinedRecordItem",
    # Orchestration
    "Joiner",
    # Strategies
    "MatchStrategy",
    "StrategyMatch",
    "allocate_items",
    "find_matches",
    "is_unmodified",
    "join_orders",
    "match_returns",
    "subsets",
]
