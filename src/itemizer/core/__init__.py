"""
Core Utilities Package

Shared primitives used by the order loader, the ledger client and the
matching engine.

This package provides:
- Money with integer-cent arithmetic and the tolerance-based amount comparator
- FinancialDate with date-window helpers
- Configuration management for environment-specific settings
- JSON helpers for result files
"""

from .config import (
    Config,
    Environment,
    LedgerConfig,
    OrdersConfig,
    ReconcileConfig,
    get_config,
    reload_config,
)
from .currency import (
    cents_to_dollars_str,
    decimal_to_cents,
    parse_dollars_to_cents,
    safe_currency_to_cents,
)
from .dates import FinancialDate
from .money import AMOUNT_TOLERANCE, Money, amounts_match, total_amount

__all__ = [
    "AMOUNT_TOLERANCE",
    # Configuration
    "Config",
    "Environment",
    "FinancialDate",
    "LedgerConfig",
    "Money",
    "OrdersConfig",
    "ReconcileConfig",
    "amounts_match",
    # Currency utilities
    "cents_to_dollars_str",
    "decimal_to_cents",
    "get_config",
    "parse_dollars_to_cents",
    "reload_config",
    "safe_currency_to_cents",
    "total_amount",
]
