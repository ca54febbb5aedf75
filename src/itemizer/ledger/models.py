#!/usr/bin/env python3
"""
Ledger Domain Models

Type-safe models for financial-account ledger entries as returned by the
ledger API, using the Money/FinancialDate primitives.
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


@dataclass(frozen=True)
class ChildTransaction:
    """
    One line of a ledger entry's existing itemization.

    An unsplit entry has a single child carrying the entry's own description
    and amount.
    """

    description: str
    amount: Money

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "description": self.description,
            "amount": self.amount.to_cents(),
        }


@dataclass
class LedgerTransaction:
    """
    Ledger entry to be reconciled.

    Negative amounts are debits (charges), positive amounts are credits (refunds).
    """

    id: str
    amount: Money
    date: FinancialDate
    children: list[ChildTransaction] = field(default_factory=list)

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> "LedgerTransaction":
        """
        Create an unsplit LedgerTransaction from a raw API entry.

        Split children reference their parent through ``parentId``; the
        returned transaction is keyed by the parent so that children can be
        merged afterwards.

        Args:
            data: Dictionary from the ledger API ``Transaction`` list

        Returns:
            LedgerTransaction with a single child
        """
        amount = Money.from_float(data["amount"])
        description = data.get("description") or ""
        return cls(
            id=str(data.get("parentId") or data["id"]),
            amount=amount,
            # Time of day is dropped; window checks compare calendar dates
            date=FinancialDate.from_iso_prefix(data["date"]),
            children=[ChildTransaction(description=description, amount=amount)],
        )

    @property
    def is_debit(self) -> bool:
        """Check if this entry is a charge."""
        return self.amount.is_debit()

    def merge(self, other: "LedgerTransaction") -> None:
        """Fold another split line of the same parent entry into this one."""
        self.amount = self.amount + other.amount
        self.children.extend(other.children)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "id": self.id,
            "amount": self.amount.to_cents(),
            "date": self.date.to_iso_string(),
            "children": [child.to_dict() for child in self.children],
        }
