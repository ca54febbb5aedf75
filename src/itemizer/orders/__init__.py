"""
Order History Package

Order-side inputs to reconciliation.

This package provides:
- Domain models for orders, shipments, line items and refunds
- Loading of order history and refund extracts (CSV) with pandas
- Attachment of refunded line items to each refund record
"""

from .models import (
    LineItem,
    Order,
    ReturnRecord,
    Shipment,
)
from .loader import (
    ReturnLoadResult,
    load_orders,
    load_returns,
)

__all__ = [
    # Domain models
    "LineItem",
    "Order",
    "ReturnRecord",
    "Shipment",
    # Data loading
    "ReturnLoadResult",
    "load_orders",
    "load_returns",
]
