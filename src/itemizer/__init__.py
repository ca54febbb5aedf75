"""
Ledger Itemizer - Order History Reconciliation

Matches financial-account ledger entries to the e-commerce orders,
shipments and refunds behind them, and produces an itemized breakdown for
re-annotating each entry.

Key Features:
- Exact, split-charge and gift-card matching within a 14-day window
- Item allocation across split charges with balancing items
- Refund matching, including refunds partly credited to a gift card
- Ledger API integration for fetching entries and pushing itemizations

Domain Packages:
- core: Money, dates, configuration
- orders: Order history models and CSV loading
- ledger: Ledger models, API client, credentials
- matching: Reconciliation engine
- cli: Command-line interface

Example Usage:
    from itemizer import join_orders
    result = join_orders(transactions, orders, returns)
    for record in result.joined_records:
        print(record.ledger_transaction_id, record.items)
"""

__version__ = "0.1.0"
__author__ = "Karl Davis"

from .core.dates import FinancialDate
from .core.money import Money, amounts_match, total_amount
from .ledger.models import ChildTransaction, LedgerTransaction
from .matching.joiner import join_orders
from .matching.models import GiftCardCredit, JoinedRecord, JoinedRecordItem, JoinResult
from .orders.models import LineItem, Order, ReturnRecord, Shipment

__all__ = [
    "ChildTransaction",
    "FinancialDate",
    "GiftCardCredit",
    "JoinResult",
    "JoinedRecord",
    "JoinedRecordItem",
    "LedgerTransaction",
    "LineItem",
    "Money",
    "Order",
    "ReturnRecord",
    "Shipment",
    "amounts_match",
    "join_orders",
    "total_amount",
]
